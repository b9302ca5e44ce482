"""Typed snapshots of Kuler records.

Records resolve their fields lazily from the parsed feed; these pydantic
models hold an eager copy for callers that want to serialize or compare
themes and comments. Only the fields the feeds commonly carry are modelled.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Swatch(BaseModel):
    """One color of a theme."""

    model_config = ConfigDict(frozen=True)

    hex_color: str = Field(..., pattern=r"^[0-9A-Fa-f]{6}$")
    color_mode: str | None = None
    channels: tuple[float, ...] = ()
    index: int | None = None

    @field_validator("hex_color", mode="before")
    @classmethod
    def strip_prefix(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            for prefix in ("#", "0x", "0X"):
                if v.startswith(prefix):
                    return v[len(prefix) :]
        return v

    @property
    def css(self) -> str:
        """Hex color with a leading ``#``."""
        return f"#{self.hex_color}"


class ThemeSummary(BaseModel):
    """Eager copy of a theme record."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str | None = None
    author_label: str | None = None
    author_id: int | None = None
    tags: list[str] = Field(default_factory=list)
    rating: int | None = None
    download_count: int | None = None
    created_at: datetime | None = None
    edited_at: datetime | None = None
    swatches: list[Swatch] = Field(default_factory=list)
    image_url: str | None = None

    @property
    def hex_colors(self) -> list[str]:
        return [swatch.hex_color for swatch in self.swatches]


class CommentSummary(BaseModel):
    """Eager copy of a comment record and its theme."""

    model_config = ConfigDict(frozen=True)

    author: str
    comment: str | None = None
    posted_at: datetime | None = None
    theme_id: int | None = None
    theme: ThemeSummary | None = None
