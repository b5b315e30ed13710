"""
Core Utilities.

Shared utility functions used across the backend.
"""

import string
from datetime import datetime, timezone

_USERNAME_PREFIX_CHARS = "@" + string.whitespace


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_username(username: str) -> str:
    """
    Normalize a Telegram username to exactly one leading '@'.

    Any mix of leading '@' and whitespace is dropped before the single
    '@' is added, so the result is idempotent:

        normalize_username("alice") == normalize_username("@@alice") == "@alice"
    """
    return "@" + username.lstrip(_USERNAME_PREFIX_CHARS).rstrip()
