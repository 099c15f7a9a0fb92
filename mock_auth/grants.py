"""
Token issuance for the two supported grants.

client_credentials -> app access token (client only, no scopes allowed).
user_token         -> user access token bound to an existing mock user.

Checks run in a fixed order and the first failure wins. A rejected request
never touches the authorization store.
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from mock_auth.errors import (
    InvalidClientError,
    InvalidRequestError,
    InvalidScopeError,
    UnsupportedGrantTypeError,
)
from mock_auth.models import AuthenticationClient, Authorization
from mock_auth.scopes import TokenKind, are_valid_scopes, parse_scopes
from mock_auth.store import AuthorizationStore, ClientStore, UserStore

logger = logging.getLogger(__name__)


class GrantType(str, Enum):
    CLIENT_CREDENTIALS = "client_credentials"
    USER_TOKEN = "user_token"

    @classmethod
    def parse(cls, value: str | None) -> "GrantType | None":
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TokenRequest:
    """Raw token request parameters as received at the boundary."""
    client_id: str | None = None
    client_secret: str | None = None
    grant_type: str | None = None
    scope: str | None = None
    user_id: str | None = None


def _require_grant(request: TokenRequest, expected: GrantType) -> None:
    if GrantType.parse(request.grant_type) is not expected:
        raise UnsupportedGrantTypeError(f"grant_type must be {expected.value}")


def _authenticate_client(clients: ClientStore, request: TokenRequest) -> AuthenticationClient:
    if not request.client_id:
        raise InvalidClientError()
    client = clients.lookup_client(request.client_id)
    if client is None:
        raise InvalidClientError()
    if request.client_secret is None or not secrets.compare_digest(
        request.client_secret.encode("utf-8"), client.secret.encode("utf-8")
    ):
        raise InvalidClientError()
    return client


def _validated_scopes(request: TokenRequest, kind: TokenKind) -> list[str]:
    requested = parse_scopes(request.scope)
    if not are_valid_scopes(requested, kind):
        raise InvalidScopeError(f"Scope not allowed for {kind.value} access tokens: {request.scope}")
    return requested


def issue_app_access_token(
    clients: ClientStore,
    authorizations: AuthorizationStore,
    request: TokenRequest,
    now: datetime,
    lifetime: timedelta,
) -> Authorization:
    """client_credentials grant. Returns the stored authorization or raises TokenRequestError."""
    _require_grant(request, GrantType.CLIENT_CREDENTIALS)
    client = _authenticate_client(clients, request)
    scopes = _validated_scopes(request, TokenKind.APP)

    auth = authorizations.create_authorization(
        client_id=client.client_id,
        user_id=None,
        scopes=scopes,
        expires_at=now + lifetime,
    )
    logger.info("client_credentials grant: app access token issued for client_id=%s", client.client_id)
    return auth


def issue_user_token(
    clients: ClientStore,
    users: UserStore,
    authorizations: AuthorizationStore,
    request: TokenRequest,
    now: datetime,
    lifetime: timedelta,
) -> Authorization:
    """user_token grant. user_id must name an existing user; ids that were never registered are rejected."""
    _require_grant(request, GrantType.USER_TOKEN)
    client = _authenticate_client(clients, request)

    user_id = (request.user_id or "").strip()
    if not user_id:
        raise InvalidRequestError("user_id is required for user_token grant")
    if users.lookup_user(user_id) is None:
        raise InvalidRequestError("Unknown user_id")

    scopes = _validated_scopes(request, TokenKind.USER)

    auth = authorizations.create_authorization(
        client_id=client.client_id,
        user_id=user_id,
        scopes=scopes,
        expires_at=now + lifetime,
    )
    logger.info("user_token grant: user access token issued for client_id=%s user_id=%s", client.client_id, user_id)
    return auth
