"""
Scope vocabulary and the rules for which scopes each kind of token may carry.
"""
from enum import Enum
from typing import Iterable


class TokenKind(str, Enum):
    USER = "user"
    APP = "app"


class Scope(str, Enum):
    ANALYTICS_READ_EXTENSIONS = "analytics:read:extensions"
    ANALYTICS_READ_GAMES = "analytics:read:games"
    BITS_READ = "bits:read"
    CHANNEL_EDIT_COMMERCIAL = "channel:edit:commercial"
    CHANNEL_MANAGE_BROADCAST = "channel:manage:broadcast"
    CHANNEL_MANAGE_EXTENSIONS = "channel:manage:extensions"
    CHANNEL_MANAGE_POLLS = "channel:manage:polls"
    CHANNEL_MANAGE_PREDICTIONS = "channel:manage:predictions"
    CHANNEL_MANAGE_REDEMPTIONS = "channel:manage:redemptions"
    CHANNEL_MANAGE_SCHEDULE = "channel:manage:schedule"
    CHANNEL_MANAGE_VIDEOS = "channel:manage:videos"
    CHANNEL_MODERATE = "channel:moderate"
    CHANNEL_READ_EDITORS = "channel:read:editors"
    CHANNEL_READ_GOALS = "channel:read:goals"
    CHANNEL_READ_HYPE_TRAIN = "channel:read:hype_train"
    CHANNEL_READ_POLLS = "channel:read:polls"
    CHANNEL_READ_PREDICTIONS = "channel:read:predictions"
    CHANNEL_READ_REDEMPTIONS = "channel:read:redemptions"
    CHANNEL_READ_STREAM_KEY = "channel:read:stream_key"
    CHANNEL_READ_SUBSCRIPTIONS = "channel:read:subscriptions"
    CHAT_EDIT = "chat:edit"
    CHAT_READ = "chat:read"
    CLIPS_EDIT = "clips:edit"
    MODERATION_READ = "moderation:read"
    MODERATOR_MANAGE_AUTOMOD = "moderator:manage:automod"
    MODERATOR_MANAGE_AUTOMOD_SETTINGS = "moderator:manage:automod_settings"
    MODERATOR_MANAGE_BANNED_USERS = "moderator:manage:banned_users"
    MODERATOR_MANAGE_BLOCKED_TERMS = "moderator:manage:blocked_terms"
    MODERATOR_MANAGE_CHAT_SETTINGS = "moderator:manage:chat_settings"
    MODERATOR_READ_AUTOMOD_SETTINGS = "moderator:read:automod_settings"
    MODERATOR_READ_BLOCKED_TERMS = "moderator:read:blocked_terms"
    MODERATOR_READ_CHAT_SETTINGS = "moderator:read:chat_settings"
    USER_EDIT = "user:edit"
    USER_EDIT_FOLLOWS = "user:edit:follows"
    USER_MANAGE_BLOCKED_USERS = "user:manage:blocked_users"
    USER_READ_BLOCKED_USERS = "user:read:blocked_users"
    USER_READ_BROADCAST = "user:read:broadcast"
    USER_READ_EMAIL = "user:read:email"
    USER_READ_FOLLOWS = "user:read:follows"
    USER_READ_SUBSCRIPTIONS = "user:read:subscriptions"
    WHISPERS_EDIT = "whispers:edit"
    WHISPERS_READ = "whispers:read"


# App access tokens act on behalf of a client only and may not carry any scope
APP_SCOPES: frozenset[Scope] = frozenset()
USER_SCOPES: frozenset[Scope] = frozenset(Scope) - APP_SCOPES

_SCOPES_BY_KIND: dict[TokenKind, frozenset[str]] = {
    TokenKind.USER: frozenset(s.value for s in USER_SCOPES),
    TokenKind.APP: frozenset(s.value for s in APP_SCOPES),
}


def parse_scopes(raw: str | None) -> list[str]:
    """Split a space- or comma-delimited scope parameter. Order kept, empties dropped."""
    if not raw:
        return []
    return [s for s in raw.replace(",", " ").split() if s]


def are_valid_scopes(requested: Iterable[str], kind: TokenKind) -> bool:
    """
    True if every requested scope is legal for the token kind.
    Nothing requested is always valid; a single unknown or wrong-kind scope rejects the lot.
    """
    return set(requested) <= _SCOPES_BY_KIND[kind]
