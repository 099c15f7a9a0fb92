"""
Bootstrap the stores before serving: the configured client and the mock users.
Runs once from the app lifespan; handlers never seed lazily.
"""
import logging

from sqlalchemy.orm import Session

from mock_auth import config
from mock_auth.store import ClientStore, UserStore

logger = logging.getLogger(__name__)


def parse_seed_users(value: str) -> list[tuple[str, str]]:
    """Parse 'id:login,id:login' into (id, login) pairs. Entries without a login use 'user<id>'."""
    users = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        user_id, _, login = entry.partition(":")
        user_id = user_id.strip()
        if not user_id:
            continue
        users.append((user_id, login.strip() or f"user{user_id}"))
    return users


def seed_from_env(db: Session) -> None:
    """Upsert the configured client (if id and secret are set) and make sure the seed users exist."""
    if config.CLIENT_ID and config.CLIENT_SECRET:
        ClientStore(db).upsert_client(
            config.CLIENT_ID,
            config.CLIENT_SECRET,
            name=config.CLIENT_NAME,
            is_extension=config.CLIENT_IS_EXTENSION,
        )
        logger.info("Seeded client: %s (extension=%s)", config.CLIENT_ID, config.CLIENT_IS_EXTENSION)
    elif config.CLIENT_ID or config.CLIENT_SECRET:
        logger.warning("MOCK_AUTH_CLIENT_ID and MOCK_AUTH_CLIENT_SECRET must both be set; no client seeded")

    users = UserStore(db)
    for user_id, login in parse_seed_users(config.SEED_USERS):
        if users.lookup_user(user_id) is None:
            taken = users.lookup_by_login(login)
            if taken is not None:
                logger.warning("Seed user %s skipped: login %r already belongs to user %s", user_id, login, taken.id)
                continue
        users.ensure_user(user_id, login)
        logger.debug("Seed user present: %s (%s)", user_id, login)
