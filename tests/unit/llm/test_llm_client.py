from __future__ import annotations

import requests

import app.services.llm_client as llm_client


class _Cfg:
    GEMINI_API_KEY = "test-key"
    GEMINI_API_URL = "https://example.test/models"
    LLM_MODEL = "text-model"
    LLM_IMAGE_MODEL = "image-model"
    LLM_TEMPERATURE = 0.2
    LLM_TIMEOUT_SECONDS = 5
    LLM_MAX_RETRIES = 0
    LLM_MIN_INTERVAL_SECONDS = 0.0


class _Response:
    def __init__(self, body: dict) -> None:
        self.body = body

    def raise_for_status(self) -> None:
        return None

    def json(self) -> dict:
        return self.body


def test_call_llm_joins_candidate_text(monkeypatch):
    calls = []

    def _post(url, params, json, timeout):
        calls.append((url, json))
        return _Response({"candidates": [{"content": {"parts": [{"text": '{"a":'}, {"text": " 1}"}]}}]})

    monkeypatch.setattr(llm_client, "get_config", lambda: _Cfg())
    monkeypatch.setattr(llm_client.requests, "post", _post)

    assert llm_client.call_llm("prompt", json_mode=True) == '{"a": 1}'
    url, body = calls[0]
    assert url == "https://example.test/models/text-model:generateContent"
    assert body["generationConfig"]["responseMimeType"] == "application/json"


def test_call_llm_returns_empty_string_on_http_error(monkeypatch):
    def _post(*args, **kwargs):
        raise requests.exceptions.ConnectionError("offline")

    monkeypatch.setattr(llm_client, "get_config", lambda: _Cfg())
    monkeypatch.setattr(llm_client.requests, "post", _post)
    assert llm_client.call_llm("prompt") == ""


def test_call_llm_without_key_skips_http(monkeypatch):
    cfg = _Cfg()
    cfg.GEMINI_API_KEY = None

    def _post(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(llm_client, "get_config", lambda: cfg)
    monkeypatch.setattr(llm_client.requests, "post", _post)
    assert llm_client.call_llm("prompt") == ""


def test_call_image_model_returns_data_url(monkeypatch):
    sent = []

    def _post(url, params, json, timeout):
        sent.append(json)
        return _Response(
            {"candidates": [{"content": {"parts": [{"text": "here"}, {"inlineData": {"mimeType": "image/png", "data": "QUJD"}}]}}]}
        )

    monkeypatch.setattr(llm_client, "get_config", lambda: _Cfg())
    monkeypatch.setattr(llm_client.requests, "post", _post)

    assert llm_client.call_image_model("a car", reference_image_b64="UkVG") == "data:image/png;base64,QUJD"
    assert sent[0]["contents"][0]["parts"][0]["inlineData"]["data"] == "UkVG"
