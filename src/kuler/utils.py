"""Value conversion helpers shared by the client and the records."""

from __future__ import annotations

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from kuler.errors import InvalidParameterError

# Compact date formats used by the theme and comment payloads
_COMPACT_FORMATS = ("%Y%m%d", "%Y%m%d%H%M%S")


class TimeUtils:
    """Time-related utility functions."""

    @staticmethod
    def parse_feed_timestamp(value: Optional[str]) -> Optional[datetime]:
        """Convert a feed timestamp to a timezone-aware UTC datetime.

        Accepts the compact ``YYYYMMDD`` form, ISO 8601 and the RFC 822
        dates used by RSS ``pubDate``. Naive values are taken as UTC.

        Args:
            value: Raw element text

        Returns:
            The datetime, or None for empty or unrecognised text
        """
        if not value:
            return None
        text = value.strip()

        parsed: Optional[datetime] = None
        for fmt in _COMPACT_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

        if parsed is None:
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                try:
                    parsed = parsedate_to_datetime(text)
                except (TypeError, ValueError):
                    return None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)


def coerce_theme_id(theme_id: Any) -> int:
    """Return ``theme_id`` as a non-negative int.

    Numbers and numeric strings follow the same rule: the value must be
    integral (``42``, ``42.0``, ``"42"``, ``"42.0"``) and not negative.

    Raises:
        InvalidParameterError: If the value is not a non-negative whole number
    """
    value: Any = theme_id
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InvalidParameterError(f"Invalid theme ID: {theme_id!r}") from None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(f"Invalid theme ID: {theme_id!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidParameterError(f"Invalid theme ID: {theme_id!r}")
        value = int(value)
    if value < 0:
        raise InvalidParameterError(f"Theme ID cannot be negative: {theme_id!r}")
    return value


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse integer element text, None when missing or not a number."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
