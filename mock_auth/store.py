"""
Data access for clients, users and authorizations.

Each store wraps the request's Session. Database failures are rolled back and
re-raised as StoreError; nothing here retries.
"""
import logging
import secrets
import string
from datetime import datetime
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mock_auth.errors import ClientExistsError, StoreError
from mock_auth.models import AuthenticationClient, Authorization, User, as_utc

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 30
_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def generate_token() -> str:
    """Opaque token in the provider's shape: 30 lower-case alphanumerics."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


class ClientStore:
    def __init__(self, db: Session):
        self.db = db

    def lookup_client(self, client_id: str) -> AuthenticationClient | None:
        try:
            return self.db.query(AuthenticationClient).filter(AuthenticationClient.client_id == client_id).first()
        except SQLAlchemyError as e:
            raise StoreError(f"Client lookup failed: {e}") from e

    def upsert_client(
        self,
        client_id: str,
        secret: str,
        name: str = "",
        is_extension: bool = False,
        *,
        insert_only: bool = False,
    ) -> AuthenticationClient:
        """
        Insert the client, or update secret/name/is_extension when it already exists.
        With insert_only=True an existing client raises ClientExistsError instead.
        """
        client = self.lookup_client(client_id)
        if client is not None and insert_only:
            raise ClientExistsError(client_id)
        try:
            if client is None:
                client = AuthenticationClient(client_id=client_id, secret=secret, name=name, is_extension=is_extension)
                self.db.add(client)
            else:
                client.secret = secret
                client.name = name
                client.is_extension = is_extension
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Client upsert failed: {e}") from e
        self.db.refresh(client)
        return client


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def lookup_user(self, user_id: str) -> User | None:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise StoreError(f"User lookup failed: {e}") from e

    def lookup_by_login(self, login: str) -> User | None:
        try:
            return self.db.query(User).filter(User.login == login.lower()).first()
        except SQLAlchemyError as e:
            raise StoreError(f"User lookup failed: {e}") from e

    def ensure_user(self, user_id: str, login: str, display_name: str | None = None) -> User:
        """Create the user if missing. Existing users are returned as they are."""
        user = self.lookup_user(user_id)
        if user is not None:
            return user
        user = User(id=user_id, login=login.lower(), display_name=display_name or login)
        try:
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"User insert failed: {e}") from e
        return user


class AuthorizationStore:
    def __init__(self, db: Session):
        self.db = db

    def create_authorization(
        self,
        client_id: str,
        user_id: str | None,
        scopes: Iterable[str],
        expires_at: datetime,
    ) -> Authorization:
        """Persist a new authorization with a freshly generated token and commit it."""
        auth = Authorization(
            token=generate_token(),
            client_id=client_id,
            user_id=user_id or None,
            scopes=" ".join(scopes),
            expires_at=as_utc(expires_at),
        )
        try:
            self.db.add(auth)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Authorization insert failed: {e}") from e
        self.db.refresh(auth)
        return auth

    def lookup_by_token(self, token: str) -> Authorization | None:
        try:
            return self.db.query(Authorization).filter(Authorization.token == token).first()
        except SQLAlchemyError as e:
            raise StoreError(f"Authorization lookup failed: {e}") from e
