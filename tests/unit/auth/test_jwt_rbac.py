from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from app.auth.jwt import ACCESS, REFRESH, decode_jwt, encode_jwt, issue_session_tokens, verify_session_token
from app.auth.rbac import has_scopes, require_scopes
from app.core.config import get_config
from app.core.dependencies import get_current_user
from app.core.exceptions import AuthenticationError, AuthorizationError


def test_session_tokens_carry_role_and_use_claims():
    cfg = get_config()
    tokens = issue_session_tokens(user_id="u-10", role="seller", cfg=cfg)
    claims = decode_jwt(tokens.access_token, secret=cfg.JWT_SECRET)
    assert claims["sub"] == "u-10"
    assert claims["role"] == "seller"
    assert claims["token_use"] == ACCESS
    assert claims["permissions_version"] == cfg.JWT_PERMISSIONS_VERSION
    assert {"exp", "iat", "jti"} <= set(claims)
    assert verify_session_token(tokens.refresh_token, REFRESH, cfg)["token_use"] == REFRESH


def test_jwt_rejects_tampering_and_expiry():
    token = encode_jwt({"sub": "u-1"}, secret="test-secret", ttl=timedelta(minutes=5))
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(token, secret="other-secret")
    with pytest.raises(AuthenticationError, match="format"):
        decode_jwt("not-a-token", secret="test-secret")

    expired = encode_jwt({"sub": "u-1"}, secret="test-secret", ttl=timedelta(seconds=-5))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(expired, secret="test-secret")


def test_refresh_token_is_not_accepted_as_access():
    cfg = get_config()
    tokens = issue_session_tokens(user_id="u-1", role="buyer", cfg=cfg)
    assert get_current_user(tokens.access_token, cfg).user_id == "u-1"
    with pytest.raises(AuthenticationError):
        get_current_user(tokens.refresh_token, cfg)


def test_bumped_permissions_version_invalidates_old_tokens():
    cfg = get_config()
    tokens = issue_session_tokens(user_id="u-1", role="buyer", cfg=cfg)
    bumped = replace(cfg, JWT_PERMISSIONS_VERSION=cfg.JWT_PERMISSIONS_VERSION + 1)
    with pytest.raises(AuthenticationError, match="outdated"):
        verify_session_token(tokens.access_token, ACCESS, bumped)


def test_rbac_separates_buyer_and_seller():
    require_scopes("buyer", ["contracts.sign", "match.run"])
    require_scopes("seller", ["contracts.revise", "analytics.read"])
    with pytest.raises(AuthorizationError):
        require_scopes("buyer", ["contracts.revise"])
    with pytest.raises(AuthorizationError):
        require_scopes("seller", ["contracts.sign"])
    assert has_scopes("admin", ["catalog.seed"])
    assert not has_scopes("seller", ["catalog.seed"])
