"""
Pytest configuration for mock_auth. Use in-memory SQLite so tests don't touch the filesystem.
"""
import os

import pytest

# In-memory SQLite; database.py uses StaticPool so all connections share the same DB
os.environ["MOCK_AUTH_DATABASE_URL"] = "sqlite:///:memory:"
# Bootstrap client and users used across the suite
os.environ["MOCK_AUTH_CLIENT_ID"] = "222"
os.environ["MOCK_AUTH_CLIENT_SECRET"] = "333"
os.environ["MOCK_AUTH_CLIENT_NAME"] = "test_client"
os.environ["MOCK_AUTH_SEED_USERS"] = "1:testuser,2:otheruser"
os.environ.pop("MOCK_AUTH_TOKEN_EXPIRES_SECONDS", None)


@pytest.fixture
def db():
    from mock_auth.database import SessionLocal, init_db
    from mock_auth.seed import seed_from_env

    init_db()
    session = SessionLocal()
    try:
        seed_from_env(session)
        yield session
    finally:
        session.close()
