"""
Current-time source for issuance and validation, swappable in tests via app.dependency_overrides[get_clock].
"""
from datetime import datetime, timezone
from typing import Callable

from mock_auth.models import as_utc

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    """Dependency: the clock used by request handlers."""
    return utc_now


def format_rfc3339(value: datetime) -> str:
    """UTC timestamp as RFC 3339 with a Z suffix, second precision."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")
