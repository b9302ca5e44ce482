"""Query-string and URL assembly for the Kuler feed endpoints."""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from typing import Any

from kuler.constants import (
    BASE_URL,
    ENDPOINT_THUMBNAIL,
    MAX_ITEMS_PER_PAGE,
    MIN_ITEMS_PER_PAGE,
    PUBLIC_URL,
    VIEW_FRAGMENT,
)
from kuler.errors import ConfigurationError, InvalidParameterError
from kuler.utils import coerce_theme_id


class QueryBuilder:
    """Builds request URLs from an endpoint path and a parameter mapping.

    Empty values (``None``, ``""``, ``0``, ``False``) are dropped rather
    than sent as empty strings, so default paging values never reach the
    service. The builder is a pure function of its inputs.
    """

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url

    def build(self, endpoint_path: str, params: Mapping[str, Any]) -> str:
        """Return ``base_url + endpoint_path`` with the encoded query appended.

        Args:
            endpoint_path: Endpoint relative to the base URL
            params: Query parameters; empty values are filtered out

        Returns:
            The full request URL
        """
        url = self.base_url + endpoint_path
        query = urllib.parse.urlencode(self.filter_params(params))
        return f"{url}?{query}" if query else url

    @staticmethod
    def filter_params(params: Mapping[str, Any]) -> dict[str, str | int]:
        """Drop empty entries and coerce the rest to str or int, keeping order."""
        filtered: dict[str, str | int] = {}
        for key, value in params.items():
            if value is None or value is False or value == "" or value == 0:
                continue
            if isinstance(value, bool):
                filtered[key] = int(value)
            elif isinstance(value, int):
                filtered[key] = value
            else:
                filtered[key] = str(value)
        return filtered

    @staticmethod
    def validate_items_per_page(value: int) -> int:
        """Ensure a page size lies within the range the service accepts.

        Raises:
            InvalidParameterError: If value is outside 1..100 or not an integer
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError(f"itemsPerPage must be an integer, got {value!r}")
        if not MIN_ITEMS_PER_PAGE <= value <= MAX_ITEMS_PER_PAGE:
            raise InvalidParameterError(
                f"The number of items per page must be between "
                f"{MIN_ITEMS_PER_PAGE} and {MAX_ITEMS_PER_PAGE}, got {value}"
            )
        return value

    @staticmethod
    def validate_offset(name: str, value: int) -> int:
        """Ensure a zero-based offset or day count is a non-negative integer."""
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidParameterError(f"{name} must be a non-negative integer, got {value!r}")
        return value


def build_thumbnail_url(theme_id: Any, api_key: str, base_url: str = BASE_URL) -> str:
    """URL of the PNG the service renders for a theme.

    Args:
        theme_id: Non-negative whole-number theme ID (number or numeric string)
        api_key: Key to embed in the query
        base_url: Service base URL

    Raises:
        InvalidParameterError: If theme_id is not numeric
        ConfigurationError: If api_key is empty
    """
    numeric_id = coerce_theme_id(theme_id)
    if not api_key:
        raise ConfigurationError("An API key is required to build thumbnail URLs")
    # Not filtered: theme 0 must still be sent
    query = urllib.parse.urlencode({"themeid": numeric_id, "key": api_key})
    return f"{base_url}{ENDPOINT_THUMBNAIL}?{query}"


def build_view_url(theme_id: Any, public_url: str = PUBLIC_URL) -> str:
    """Public site URL of a theme, addressed through the page fragment.

    Raises:
        InvalidParameterError: If theme_id is not numeric
    """
    return public_url + VIEW_FRAGMENT.format(theme_id=coerce_theme_id(theme_id))
