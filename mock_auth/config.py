"""
Mock auth server configuration.
Everything comes from the environment; the defaults are meant for local development only.
"""
import os

# SQLite DB for development; tests use sqlite:///:memory:
DATABASE_URL = os.environ.get("MOCK_AUTH_DATABASE_URL", "sqlite:///./mock_auth.db")

# Lifetime of issued tokens (seconds). Same window for app and user tokens: 4 hours.
TOKEN_EXPIRES_SECONDS = int(os.environ.get("MOCK_AUTH_TOKEN_EXPIRES_SECONDS", str(4 * 60 * 60)))

# Bootstrap client, seeded once at startup when both id and secret are set
CLIENT_ID = os.environ.get("MOCK_AUTH_CLIENT_ID", "").strip() or None
CLIENT_SECRET = os.environ.get("MOCK_AUTH_CLIENT_SECRET", "").strip() or None
CLIENT_NAME = os.environ.get("MOCK_AUTH_CLIENT_NAME", "Mock Client")
CLIENT_IS_EXTENSION = os.environ.get("MOCK_AUTH_CLIENT_IS_EXTENSION", "false").strip().lower() in ("1", "true", "yes")

# Seed users as comma-separated id:login pairs (user tokens can only be issued for these).
# Logins are unique case-insensitively; a later entry reusing a login is skipped.
SEED_USERS = os.environ.get("MOCK_AUTH_SEED_USERS", "1:testuser")

HOST = os.environ.get("MOCK_AUTH_HOST", "127.0.0.1")
PORT = int(os.environ.get("MOCK_AUTH_PORT", "8080"))
