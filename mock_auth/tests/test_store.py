"""Tests for the client, user and authorization stores."""
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from mock_auth.errors import ClientExistsError, StoreError
from mock_auth.store import TOKEN_LENGTH, AuthorizationStore, ClientStore, UserStore

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_upsert_inserts_then_updates(db):
    store = ClientStore(db)
    client_id = f"client-{uuid.uuid4().hex[:8]}"
    created = store.upsert_client(client_id, "s1", name="first")
    assert created.secret == "s1"
    assert created.is_extension is False

    updated = store.upsert_client(client_id, "s2", name="second", is_extension=True)
    assert updated.id == created.id
    assert store.lookup_client(client_id).secret == "s2"
    assert store.lookup_client(client_id).name == "second"
    assert store.lookup_client(client_id).is_extension is True


def test_upsert_insert_only_refuses_existing(db):
    store = ClientStore(db)
    client_id = f"client-{uuid.uuid4().hex[:8]}"
    store.upsert_client(client_id, "s1", insert_only=True)
    with pytest.raises(ClientExistsError):
        store.upsert_client(client_id, "other", insert_only=True)
    assert store.lookup_client(client_id).secret == "s1"


def test_lookup_unknown_client_returns_none(db):
    assert ClientStore(db).lookup_client("does-not-exist") is None


def test_create_authorization_generates_token(db):
    store = AuthorizationStore(db)
    auth = store.create_authorization("222", None, [], NOW + timedelta(hours=4))
    assert len(auth.token) == TOKEN_LENGTH
    assert auth.token.isalnum() and auth.token == auth.token.lower()
    assert auth.scopes == ""

    found = store.lookup_by_token(auth.token)
    assert found is not None
    assert found.client_id == "222"
    assert found.user_id is None


def test_create_authorization_tokens_unique(db):
    store = AuthorizationStore(db)
    a = store.create_authorization("222", "1", ["chat:read"], NOW)
    b = store.create_authorization("222", "1", ["chat:read"], NOW)
    assert a.token != b.token


def test_scopes_stored_space_delimited(db):
    auth = AuthorizationStore(db).create_authorization("222", "1", ["chat:read", "user:edit"], NOW)
    assert auth.scopes == "chat:read user:edit"
    assert auth.get_scopes_list() == ["chat:read", "user:edit"]


def test_lookup_unknown_token_returns_none(db):
    assert AuthorizationStore(db).lookup_by_token("sometoken-that-does-not-exist") is None


def test_ensure_user_is_idempotent(db):
    users = UserStore(db)
    user_id = uuid.uuid4().hex
    first = users.ensure_user(user_id, "NewUser")
    assert first.login == "newuser"
    assert first.display_name == "NewUser"
    second = users.ensure_user(user_id, "renamed")
    assert second.login == "newuser"


def test_store_failure_is_rolled_back_and_raised():
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
    with pytest.raises(StoreError):
        AuthorizationStore(session).create_authorization("222", None, [], NOW)
    session.rollback.assert_called_once()


def test_lookup_failure_raises_store_error():
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("no such table"))
    with pytest.raises(StoreError):
        ClientStore(session).lookup_client("222")
