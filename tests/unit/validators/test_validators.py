from __future__ import annotations

from app.utils.validators import registration_errors, sanitize_text, strip_code_fences, strip_markup


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"
    assert sanitize_text(None) == ""
    assert sanitize_text("abcdef", max_len=3) == "abc"


def test_strip_code_fences():
    assert strip_code_fences("```html\n<p>Hi</p>\n```") == "<p>Hi</p>"
    assert strip_code_fences('```JSON {"a": 1} ```') == '{"a": 1}'
    assert strip_code_fences(None) == ""


def test_strip_markup_leaves_text():
    assert " ".join(strip_markup("<h3>Title</h3><p>Body</p>").split()) == "Title Body"


def test_registration_errors_collects_every_rule():
    assert registration_errors("buyer@example.com", "secret123", "buyer", None) == []
    assert registration_errors("seller@example.com", "secret123", "seller", "Rao Motors") == []
    errors = registration_errors("bad", "123", "seller", "abc")
    assert len(errors) == 3
