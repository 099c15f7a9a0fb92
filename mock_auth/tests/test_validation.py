"""Tests for header parsing and token validation."""
from datetime import datetime, timedelta, timezone

import pytest

from mock_auth.store import AuthorizationStore
from mock_auth.validation import CredentialScheme, parse_authorization_header, validate_token

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc123", "abc123"),
        ("OAuth abc123", "abc123"),
        ("bearer abc123", "abc123"),
        ("OAUTH   abc123 ", "abc123"),
        ("Basic abc123", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("abc123", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_authorization_header(header, expected):
    assert parse_authorization_header(header) == expected


def test_credential_scheme_parse():
    assert CredentialScheme.parse("Bearer") is CredentialScheme.BEARER
    assert CredentialScheme.parse("OAuth") is CredentialScheme.OAUTH
    assert CredentialScheme.parse("Token") is None


def test_no_credential_is_invalid(db):
    result = validate_token(AuthorizationStore(db), None, NOW)
    assert result.valid is False
    assert result.authorization is None


def test_unknown_token_is_invalid(db):
    result = validate_token(AuthorizationStore(db), "sometoken-that-does-not-exist", NOW)
    assert result.valid is False


def test_app_token_valid(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", None, [], NOW + timedelta(hours=4))
    result = validate_token(store, auth.token, NOW)
    assert result.valid is True
    assert result.authorization.client_id == "222"
    assert result.authorization.user_id is None
    assert result.authorization.scopes == ""


def test_user_token_valid_returns_scopes_and_user(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", "1", ["user:read:email"], NOW + timedelta(hours=4))
    result = validate_token(store, auth.token, NOW)
    assert result.valid is True
    assert result.authorization.user_id == "1"
    assert result.authorization.get_scopes_list() == ["user:read:email"]


def test_token_expiring_exactly_now_is_invalid(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", "1", [], NOW)
    assert validate_token(store, auth.token, NOW).valid is False
    assert validate_token(store, auth.token, NOW - timedelta(seconds=1)).valid is True


def test_expired_token_is_invalid(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", None, [], NOW - timedelta(hours=1))
    assert validate_token(store, auth.token, NOW).valid is False


def test_validation_does_not_modify_record(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", "1", ["chat:read"], NOW - timedelta(minutes=1))
    token, expires_at, scopes = auth.token, auth.expires_at, auth.scopes
    validate_token(store, token, NOW)
    db.expire_all()
    stored = store.lookup_by_token(token)
    assert stored.expires_at == expires_at
    assert stored.scopes == scopes


def test_expiry_from_offset_clock_is_stored_as_utc(db):
    """12:00Z seen as 14:00+02:00 plus 4h must expire at 16:00Z, not 18:00Z."""
    store = AuthorizationStore(db)
    local_now = NOW.astimezone(timezone(timedelta(hours=2)))
    auth = store.create_authorization("222", "1", [], local_now + timedelta(hours=4))
    db.expire_all()
    stored = store.lookup_by_token(auth.token)
    assert stored.expires_at.replace(tzinfo=timezone.utc) == NOW + timedelta(hours=4)
    assert validate_token(store, auth.token, NOW + timedelta(hours=5)).valid is False
    assert validate_token(store, auth.token, local_now + timedelta(hours=3)).valid is True
