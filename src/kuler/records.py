"""Read-only views over the theme and comment items of a feed.

A record keeps a reference to its parsed item and looks fields up only
when asked. Each record type has a fixed schema mapping logical field
names to element paths inside the ``kuler`` payload element:

    theme.field("title")        # <kuler:themeTitle>
    theme.field("author_label") # <kuler:themeAuthor>/<kuler:authorLabel>
    comment.field("posted_at")  # <kuler:postedAt>

Asking for a name outside the schema, or for one the item does not
carry, raises UnknownFieldError.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Final, Optional

from pydantic import ValidationError

from kuler.constants import KULER_PREFIX
from kuler.errors import ConfigurationError, MalformedRecordError, UnknownFieldError
from kuler.models import CommentSummary, Swatch, ThemeSummary
from kuler.parser import FeedNode
from kuler.query import build_view_url
from kuler.utils import TimeUtils, to_int

if TYPE_CHECKING:
    from kuler.client import FeedClient

THEME_FIELDS: Final[Mapping[str, str]] = {
    "id": "themeID",
    "title": "themeTitle",
    "image_url": "themeImage",
    "author_label": "themeAuthor/authorLabel",
    "author_id": "themeAuthor/authorID",
    "tags": "themeTags",
    "rating": "themeRating",
    "download_count": "themeDownloadCount",
    "created_at": "themeCreatedAt",
    "edited_at": "themeEditedAt",
}

COMMENT_FIELDS: Final[Mapping[str, str]] = {
    "author": "author",
    "comment": "comment",
    "posted_at": "postedAt",
    "theme_id": "themeItem/themeID",
}

# Swatch channel elements, in order
_SWATCH_CHANNELS: Final = tuple(f"swatchChannel{n}" for n in range(1, 5))


class FeedRecord:
    """Base class for a typed view over one ``kuler`` payload element.

    Subclasses name the payload element, the field schema and the field
    whose presence proves the item was loaded correctly.
    """

    PAYLOAD: ClassVar[str]
    FIELDS: ClassVar[Mapping[str, str]]
    REQUIRED_FIELD: ClassVar[str]

    def __init__(self, node: FeedNode, client: Optional[FeedClient] = None) -> None:
        """Locate the payload element under ``node`` and check it.

        Args:
            node: The feed item (or any element holding the payload)
            client: Client used for URLs that need the API key

        Raises:
            MalformedRecordError: If the payload or its required field is missing
        """
        kind = type(self).__name__
        if node.namespace(KULER_PREFIX) is None:
            raise MalformedRecordError(f"{kind}: '{KULER_PREFIX}' namespace is not declared")

        payload = node.child(self.PAYLOAD)
        if payload is None:
            raise MalformedRecordError(f"{kind}: item has no {KULER_PREFIX}:{self.PAYLOAD} element")
        if not payload.has(self.FIELDS[self.REQUIRED_FIELD]):
            raise MalformedRecordError(
                f"{kind}: {KULER_PREFIX}:{self.PAYLOAD} has no "
                f"{self.FIELDS[self.REQUIRED_FIELD]} element"
            )

        self._node = node
        self._payload = payload
        self._client = client

    def field(self, name: str) -> str:
        """Text of the element behind the logical field ``name``.

        Raises:
            UnknownFieldError: If name is not in the schema or not on this item
        """
        path = self.FIELDS.get(name)
        text = None if path is None else self._payload.text(path)
        if text is None:
            raise UnknownFieldError(name, type(self).__name__)
        return text

    def has_field(self, name: str) -> bool:
        path = self.FIELDS.get(name)
        return path is not None and self._payload.has(path)

    def available_fields(self) -> frozenset[str]:
        """Logical names this particular item can answer."""
        return frozenset(name for name in self.FIELDS if self.has_field(name))

    def _optional(self, name: str) -> Optional[str]:
        return self._payload.text(self.FIELDS[name])

    @property
    def payload(self) -> FeedNode:
        """The backing ``kuler`` payload element."""
        return self._payload

    @property
    def client(self) -> Optional[FeedClient]:
        return self._client


class ThemeRecord(FeedRecord):
    """A theme from the get or search feeds, or embedded in a comment."""

    PAYLOAD = "themeItem"
    FIELDS = THEME_FIELDS
    REQUIRED_FIELD = "id"

    def __init__(self, node: FeedNode, client: Optional[FeedClient] = None) -> None:
        """Locate the ``themeItem`` under ``node`` and check its ID.

        Raises:
            MalformedRecordError: If the theme is missing or its themeID is not a number
        """
        super().__init__(node, client)
        theme_id = to_int(self._optional("id"))
        if theme_id is None:
            raise MalformedRecordError(
                f"ThemeRecord: themeID {self._optional('id')!r} is not a number"
            )
        self._id = theme_id

    def __repr__(self) -> str:
        return f"ThemeRecord(id={self.id}, title={self._optional('title')!r})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> Optional[str]:
        return self._optional("title")

    @property
    def image_url(self) -> Optional[str]:
        return self._optional("image_url")

    @property
    def author_label(self) -> Optional[str]:
        return self._optional("author_label")

    @property
    def author_id(self) -> Optional[int]:
        return to_int(self._optional("author_id"))

    @property
    def tags(self) -> list[str]:
        """Theme tags, split from the comma-separated element text."""
        raw = self._optional("tags") or ""
        return [tag.strip() for tag in raw.split(",") if tag.strip()]

    @property
    def rating(self) -> Optional[int]:
        return to_int(self._optional("rating"))

    @property
    def download_count(self) -> Optional[int]:
        return to_int(self._optional("download_count"))

    @property
    def created_at(self) -> Optional[datetime]:
        return TimeUtils.parse_feed_timestamp(self._optional("created_at"))

    @property
    def edited_at(self) -> Optional[datetime]:
        return TimeUtils.parse_feed_timestamp(self._optional("edited_at"))

    def _swatch_nodes(self) -> list[FeedNode]:
        return self._payload.children("themeSwatches/swatch")

    def get_swatches_hex(self, prepend_pound: bool = True) -> list[str]:
        """Hex color of every swatch, in theme order.

        Args:
            prepend_pound: Prefix each color with ``#`` (handy for HTML/CSS)

        Returns:
            One string per swatch
        """
        prefix = "#" if prepend_pound else ""
        return [prefix + (swatch.text("swatchHexColor") or "") for swatch in self._swatch_nodes()]

    def swatches(self) -> list[Swatch]:
        """Full swatch data: hex color, color mode, channel values and index.

        Raises:
            MalformedRecordError: If a swatch has a bad hex color or channel value
        """
        result: list[Swatch] = []
        for position, node in enumerate(self._swatch_nodes()):
            channels: list[float] = []
            for name in _SWATCH_CHANNELS:
                value = node.text(name)
                if not value:
                    continue
                try:
                    channels.append(float(value))
                except ValueError as exc:
                    raise MalformedRecordError(
                        f"ThemeRecord {self.id}: swatch {position} has non-numeric {name} {value!r}"
                    ) from exc
            try:
                swatch = Swatch(
                    hex_color=node.text("swatchHexColor") or "",
                    color_mode=node.text("swatchColorMode") or None,
                    channels=tuple(channels),
                    index=to_int(node.text("swatchIndex")),
                )
            except ValidationError as exc:
                raise MalformedRecordError(
                    f"ThemeRecord {self.id}: swatch {position} is invalid: {exc}"
                ) from exc
            result.append(swatch)
        return result

    def get_thumbnail_url(self) -> str:
        """URL of the PNG thumbnail for this theme.

        Raises:
            ConfigurationError: If the record is not bound to a client
        """
        if self._client is None:
            raise ConfigurationError("Thumbnail URLs need an API key; build the record through a FeedClient")
        return self._client.generate_thumbnail_url(self.id)

    def get_view_url(self) -> str:
        """URL of this theme on the public site."""
        if self._client is None:
            return build_view_url(self.id)
        return self._client.view_theme_url(self.id)

    def to_model(self) -> ThemeSummary:
        return ThemeSummary(
            id=self.id,
            title=self.title,
            author_label=self.author_label,
            author_id=self.author_id,
            tags=self.tags,
            rating=self.rating,
            download_count=self.download_count,
            created_at=self.created_at,
            edited_at=self.edited_at,
            swatches=self.swatches(),
            image_url=self.image_url,
        )


class CommentRecord(FeedRecord):
    """A comment from the comments feed."""

    PAYLOAD = "commentItem"
    FIELDS = COMMENT_FIELDS
    REQUIRED_FIELD = "author"

    def __repr__(self) -> str:
        return f"CommentRecord(author={self.author!r}, theme_id={self.theme_id})"

    @property
    def author(self) -> str:
        return self.field("author")

    @property
    def comment(self) -> Optional[str]:
        return self._optional("comment")

    @property
    def posted_at(self) -> Optional[datetime]:
        return TimeUtils.parse_feed_timestamp(self._optional("posted_at"))

    @property
    def theme_id(self) -> Optional[int]:
        return to_int(self._optional("theme_id"))

    def has_theme(self) -> bool:
        return self._payload.has(ThemeRecord.PAYLOAD)

    def get_theme(self) -> ThemeRecord:
        """Theme this comment belongs to, built from the embedded metadata.

        No request is made. The embedded theme carries fewer fields than
        one loaded through the get feed, but its URL helpers work the same.

        Raises:
            MalformedRecordError: If the comment embeds no usable theme
        """
        return ThemeRecord(self._payload, self._client)

    def to_model(self) -> CommentSummary:
        return CommentSummary(
            author=self.author,
            comment=self.comment,
            posted_at=self.posted_at,
            theme_id=self.theme_id,
            theme=self.get_theme().to_model() if self.has_theme() else None,
        )
