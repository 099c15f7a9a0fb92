"""
Validation of previously issued tokens. Read-only: a lookup plus an expiry comparison.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from mock_auth.models import Authorization
from mock_auth.store import AuthorizationStore

logger = logging.getLogger(__name__)


class CredentialScheme(str, Enum):
    BEARER = "bearer"
    # Legacy alias, treated exactly like Bearer
    OAUTH = "oauth"

    @classmethod
    def parse(cls, value: str) -> "CredentialScheme | None":
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    authorization: Authorization | None = None


INVALID = ValidationResult(valid=False)


def parse_authorization_header(header_value: str | None) -> str | None:
    """Parse '<Scheme> <token>' for Bearer or OAuth. Returns the token, or None if missing or malformed."""
    if not header_value or not header_value.strip():
        return None
    scheme, _, credential = header_value.strip().partition(" ")
    if CredentialScheme.parse(scheme) is None:
        return None
    credential = credential.strip()
    return credential or None


def validate_token(
    authorizations: AuthorizationStore,
    credential: str | None,
    now: datetime,
) -> ValidationResult:
    """Valid only when the token exists and expires strictly after now."""
    if not credential:
        return INVALID
    auth = authorizations.lookup_by_token(credential)
    if auth is None:
        logger.debug("Validation failed: unknown token")
        return INVALID
    if auth.is_expired(now):
        logger.debug("Validation failed: token expired for client_id=%s", auth.client_id)
        return INVALID
    return ValidationResult(valid=True, authorization=auth)
