"""Kuler package - feed client, records, settings and custom errors."""

__version__ = "0.1.0"

from .client import FeedClient
from .errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidParameterError,
    KulerError,
    MalformedRecordError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServerError,
    TransportError,
    UnknownFieldError,
)
from .models import CommentSummary, Swatch, ThemeSummary
from .parser import FeedDocument, FeedNode, XmlItemParser
from .query import QueryBuilder, build_thumbnail_url, build_view_url
from .records import CommentRecord, ThemeRecord
from .settings import KulerSettings

# Define what gets imported with: from kuler import *
__all__ = [
    "AuthenticationError",
    "CommentRecord",
    "CommentSummary",
    "ConfigurationError",
    "FeedClient",
    "FeedDocument",
    "FeedNode",
    "InvalidParameterError",
    "KulerError",
    "KulerSettings",
    "MalformedRecordError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "QueryBuilder",
    "RateLimitError",
    "ServerError",
    "Swatch",
    "ThemeRecord",
    "ThemeSummary",
    "TransportError",
    "UnknownFieldError",
    "XmlItemParser",
    "build_thumbnail_url",
    "build_view_url",
]
