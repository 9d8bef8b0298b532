"""Input validation helpers for namespace requests."""
from __future__ import annotations
import re

TTL_PATTERN = re.compile(r"^(1([hd]|[0-9]h)|2([hd]|[0-4]h)|[3-7][hd]|[89]h)$")
TTL_ERROR = "Valid TTLs are 1-24h or 1-7d"
DEFAULT_TTL = "24h"


def validate_ttl(raw: str) -> str:
    """Validate a namespace time-to-live.

    Args:
        raw: TTL such as "12h" or "3d"

    Returns:
        The TTL unchanged

    Raises:
        ValueError: If the TTL is outside 1-24 hours or 1-7 days
    """
    if not TTL_PATTERN.match(raw or ""):
        raise ValueError(TTL_ERROR)
    return raw


def require_non_empty(value: str | None, field: str) -> str:
    """Reject missing or blank required string fields.

    Raises:
        ValueError: If the value is None or blank
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required")
    return value
