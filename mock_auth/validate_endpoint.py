"""
Token validation endpoint (GET /auth/validate).
Accepts 'Authorization: Bearer <token>' or the legacy 'Authorization: OAuth <token>'.
"""
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from mock_auth.clock import Clock, format_rfc3339, get_clock
from mock_auth.database import get_db
from mock_auth.models import as_utc
from mock_auth.store import AuthorizationStore
from mock_auth.validation import parse_authorization_header, validate_token

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth")


def _unauthorized(description: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "invalid_token", "error_description": description},
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.get("/validate")
def validate(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Return the token's metadata if it was issued here and has not expired; 401 otherwise."""
    credential = parse_authorization_header(authorization)
    if credential is None:
        raise _unauthorized("Authorization header missing or malformed")

    now = clock()
    result = validate_token(AuthorizationStore(db), credential, now)
    if not result.valid:
        raise _unauthorized("Invalid or expired token")

    auth = result.authorization
    return {
        "client_id": auth.client_id,
        "user_id": auth.user_id or "",
        "scopes": auth.get_scopes_list(),
        "expires_in": int((as_utc(auth.expires_at) - now).total_seconds()),
        "expires_at": format_rfc3339(auth.expires_at),
    }
