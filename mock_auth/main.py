"""
Mock auth server.
App access tokens (client_credentials), user access tokens (user_token) and token validation.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mock_auth.config import HOST, PORT
from mock_auth.database import SessionLocal, init_db
from mock_auth.errors import StoreError
from mock_auth.seed import seed_from_env
from mock_auth.token_endpoint import router as token_router
from mock_auth.validate_endpoint import router as validate_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed client/users from env before serving."""
    init_db()
    db = SessionLocal()
    try:
        seed_from_env(db)
    finally:
        db.close()
    yield


app = FastAPI(title="Mock Auth Server", version="0.1.0", lifespan=lifespan)
app.include_router(token_router, tags=["token"])
app.include_router(validate_router, tags=["validate"])


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": {"error": "server_error"}})


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "mock_auth"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mock_auth.main:app",
        host=HOST,
        port=PORT,
        reload=True,
    )
