"""Kuler feed API client."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Final, Optional, TypeVar

import requests

from kuler.constants import (
    BASE_URL,
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_TIMEOUT,
    ENDPOINT_COMMENTS,
    ENDPOINT_GET,
    ENDPOINT_SEARCH,
    LIST_TYPES,
    PUBLIC_URL,
    SEARCH_FILTERS,
)
from kuler.errors import ConfigurationError, InvalidParameterError, NetworkError, TransportError
from kuler.parser import FeedDocument, FeedNode, XmlItemParser
from kuler.query import QueryBuilder, build_thumbnail_url, build_view_url
from kuler.records import CommentRecord, ThemeRecord
from kuler.settings import KulerSettings
from kuler.utils import coerce_theme_id

logger: Final = logging.getLogger(__name__)

R = TypeVar("R", ThemeRecord, CommentRecord)

_KEY_PATTERN: Final = re.compile(r"(?<=[?&]key=)[^&]*")


def _redact(url: str) -> str:
    return _KEY_PATTERN.sub("***", url)


class FeedClient:
    """Client for the Kuler theme and comment feeds.

    Each listing operation makes one GET request, parses the RSS body and
    maps every ``<item>`` to a record, preserving feed order. A malformed
    item fails the whole call; partial results are never returned.

    The most recent parsed feed is kept in ``last_response``. That slot is
    the only mutable state, so a client shared between threads needs
    external locking.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = BASE_URL,
        public_url: str = PUBLIC_URL,
        timeout: float = DEFAULT_TIMEOUT,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Your Kuler API key
            base_url: Feed service root
            public_url: Public site root, used for theme view URLs
            timeout: Timeout for API requests in seconds
            items_per_page: Page size used when an operation is not given one

        Raises:
            ConfigurationError: If api_key is missing or blank
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError("Please provide an API key to use Kuler")
        self.api_key = api_key.strip()
        self.base_url = base_url
        self.public_url = public_url
        self.timeout = timeout
        self.items_per_page = QueryBuilder.validate_items_per_page(items_per_page)
        self._query = QueryBuilder(base_url)
        self._last_response: Optional[FeedDocument] = None

    @classmethod
    def from_settings(cls, settings: KulerSettings) -> FeedClient:
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            public_url=settings.public_url,
            timeout=settings.timeout,
            items_per_page=settings.items_per_page,
        )

    def __repr__(self) -> str:
        return f"FeedClient(base_url={self.base_url!r})"

    @property
    def last_response(self) -> Optional[FeedDocument]:
        """The feed parsed by the most recent successful request."""
        return self._last_response

    # ── feed operations ─────────────────────────────────────────────────────
    def list_themes(
        self,
        list_type: str = "recent",
        start_index: int = 0,
        items_per_page: Optional[int] = None,
        time_span: int = 0,
    ) -> list[ThemeRecord]:
        """Return a page of themes from one of the predefined lists.

        Args:
            list_type: One of 'recent' (the default), 'popular', 'rating' or 'random'
            start_index: 0-based index of the first theme to return
            items_per_page: Page size, 1..100 (default 20)
            time_span: Only themes from the last N days; 0 means no limit

        Returns:
            Themes in feed order

        Raises:
            InvalidParameterError: For an unknown list type or out-of-range paging
            TransportError: When the feed cannot be fetched or parsed
            MalformedRecordError: When an item is not a theme
        """
        if list_type not in LIST_TYPES:
            raise InvalidParameterError(f"Invalid list type: {list_type!r}")
        params = {
            "listType": list_type,
            "startIndex": QueryBuilder.validate_offset("startIndex", start_index),
            "itemsPerPage": self._page_size(items_per_page),
            "timeSpan": QueryBuilder.validate_offset("timeSpan", time_span),
        }
        return self._map_items(self._request(ENDPOINT_GET, params), ThemeRecord)

    def search_themes(
        self,
        query: str = "",
        start_index: int = 0,
        items_per_page: Optional[int] = None,
        strict: bool = False,
    ) -> list[ThemeRecord]:
        """Return themes matching a search term or filter.

        ``query`` is either a plain term, matched against titles, tags,
        author names, IDs and hex values, or a ``field:value`` filter on
        one of themeID, userID, email, tag, hex or title, e.g.
        ``"email:someone@example.com"``. An empty query returns every theme.

        Args:
            query: Search term or filter
            start_index: 0-based index of the first theme to return
            items_per_page: Page size, 1..100 (default 20)
            strict: Reject filters on fields the service does not document

        Returns:
            Themes in feed order
        """
        if strict:
            self._check_search_filter(query)
        params = {
            "searchQuery": query,
            "startIndex": QueryBuilder.validate_offset("startIndex", start_index),
            "itemsPerPage": self._page_size(items_per_page),
        }
        return self._map_items(self._request(ENDPOINT_SEARCH, params), ThemeRecord)

    def list_comments(
        self,
        theme_id: Any = None,
        email: Optional[str] = None,
        start_index: int = 0,
        items_per_page: Optional[int] = None,
    ) -> list[CommentRecord]:
        """Return comments on one theme, or on every theme of one member.

        Pass ``theme_id`` or ``email``; both are sent if both are given.

        Args:
            theme_id: Theme whose comments to fetch
            email: Member whose themes' comments to fetch
            start_index: 0-based index of the first comment to return
            items_per_page: Page size, 1..100 (default 20)

        Returns:
            Comments in feed order
        """
        params = {
            "themeID": None if theme_id is None else coerce_theme_id(theme_id),
            "email": email,
            "startIndex": QueryBuilder.validate_offset("startIndex", start_index),
            "itemsPerPage": self._page_size(items_per_page),
        }
        return self._map_items(self._request(ENDPOINT_COMMENTS, params), CommentRecord)

    # ── URL builders ────────────────────────────────────────────────────────
    def generate_thumbnail_url(self, theme_id: Any) -> str:
        """URL of the PNG the service renders for a theme.

        Raises:
            InvalidParameterError: If theme_id is not numeric
        """
        return build_thumbnail_url(theme_id, self.api_key, self.base_url)

    def view_theme_url(self, theme_id: Any) -> str:
        """URL for viewing a theme on the public site.

        Raises:
            InvalidParameterError: If theme_id is not numeric
        """
        return build_view_url(theme_id, self.public_url)

    theme_thumbnail_url = generate_thumbnail_url
    theme_url = view_theme_url

    # Private helper methods
    def _page_size(self, items_per_page: Optional[int]) -> int:
        if items_per_page is None:
            return self.items_per_page
        return QueryBuilder.validate_items_per_page(items_per_page)

    @staticmethod
    def _check_search_filter(query: str) -> None:
        field, sep, _ = query.partition(":")
        if sep and field not in SEARCH_FILTERS:
            raise InvalidParameterError(
                f"Unknown search filter {field!r}; expected one of {', '.join(SEARCH_FILTERS)}"
            )

    def _request(self, endpoint: str, params: Mapping[str, Any]) -> FeedDocument:
        """Fetch and parse one feed.

        Args:
            endpoint: Endpoint relative to the base URL
            params: Query parameters, without the API key

        Returns:
            The parsed feed, also stored as ``last_response``

        Raises:
            NetworkError: When network connectivity issues occur
            TransportError: For non-success statuses or unparseable bodies
        """
        if "itemsPerPage" in params:
            QueryBuilder.validate_items_per_page(params["itemsPerPage"])

        url = self._query.build(endpoint, {**params, "key": self.api_key})
        logger.debug("GET %s", _redact(url))

        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Kuler network error: %s", exc)
            raise NetworkError(f"Error retrieving the feed: {exc}", exc) from exc

        if resp.status_code != 200:
            err = TransportError.from_status(resp.status_code, resp.text)
            logger.error("Kuler API error: %s - %s", resp.status_code, err.message)
            raise err

        document = XmlItemParser.parse(resp.content)
        self._last_response = document
        return document

    def _map_items(
        self, document: FeedDocument, factory: Callable[[FeedNode, FeedClient], R]
    ) -> list[R]:
        return [factory(node, self) for node in XmlItemParser.extract_items(document)]
