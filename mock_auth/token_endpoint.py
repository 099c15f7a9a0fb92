"""
Token endpoints.
POST /auth/token: client_credentials grant (app access token).
POST /auth/authorize: user_token grant (user access token).
Parameters are read from the form body, falling back to the query string.
"""
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from mock_auth.clock import Clock, format_rfc3339, get_clock
from mock_auth.config import TOKEN_EXPIRES_SECONDS
from mock_auth.database import get_db
from mock_auth.errors import TokenRequestError
from mock_auth.grants import TokenRequest, issue_app_access_token, issue_user_token
from mock_auth.models import Authorization
from mock_auth.store import AuthorizationStore, ClientStore, UserStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth")

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_token_request(request: Request) -> TokenRequest:
    """Dependency: collect grant parameters. Form values win over query values."""
    params = dict(request.query_params)
    if request.headers.get("content-type", "").lower().startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    return TokenRequest(
        client_id=params.get("client_id"),
        client_secret=params.get("client_secret"),
        grant_type=params.get("grant_type"),
        scope=params.get("scope"),
        user_id=params.get("user_id"),
    )


def _token_response(auth: Authorization) -> dict:
    return {
        "access_token": auth.token,
        "refresh_token": "",
        "expires_in": TOKEN_EXPIRES_SECONDS,
        "expires_at": format_rfc3339(auth.expires_at),
        "scope": auth.get_scopes_list(),
        "token_type": "bearer",
    }


def _reject(exc: TokenRequestError, request: TokenRequest) -> HTTPException:
    logger.debug("Token request rejected (%s) for client_id=%s: %s", exc.error, request.client_id, exc.description)
    return HTTPException(status_code=400, detail=exc.to_detail())


@router.post("/token")
def app_access_token(
    token_request: TokenRequest = Depends(get_token_request),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Issue an app access token for client_id/client_secret with grant_type=client_credentials."""
    now = clock()
    try:
        auth = issue_app_access_token(
            ClientStore(db),
            AuthorizationStore(db),
            token_request,
            now=now,
            lifetime=timedelta(seconds=TOKEN_EXPIRES_SECONDS),
        )
    except TokenRequestError as e:
        raise _reject(e, token_request)
    return _token_response(auth)


@router.post("/authorize")
def user_token(
    token_request: TokenRequest = Depends(get_token_request),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Issue a user access token for user_id with grant_type=user_token. The user must exist."""
    now = clock()
    try:
        auth = issue_user_token(
            ClientStore(db),
            UserStore(db),
            AuthorizationStore(db),
            token_request,
            now=now,
            lifetime=timedelta(seconds=TOKEN_EXPIRES_SECONDS),
        )
    except TokenRequestError as e:
        raise _reject(e, token_request)
    return _token_response(auth)
