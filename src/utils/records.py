"""Helpers shared by the record-list services."""

import uuid
from datetime import datetime, timezone
from typing import Any


def new_record_id() -> str:
    """Return a fresh 128-bit random identifier as 32 hex characters."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Current UTC time, e.g. ``2026-02-08T12:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def prepend_capped(items: list[Any], item: Any, limit: int) -> list[Any]:
    """Insert ``item`` at the head and drop tail entries beyond ``limit``.

    Args:
        items: Existing newest-first list (not modified)
        item: Record to insert as the newest entry
        limit: Maximum length of the returned list

    Returns:
        New list with at most ``limit`` entries
    """
    return [item, *items][:limit]
