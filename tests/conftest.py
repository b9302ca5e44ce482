import pytest
from pathlib import Path
from unittest.mock import Mock

from kuler.client import FeedClient
from kuler.parser import FeedDocument, XmlItemParser

DATA_DIR = Path(__file__).parent / "data"

API_KEY = "test-api-key"


def load_feed(name: str) -> bytes:
    return (DATA_DIR / name).read_bytes()


def make_response(body: bytes, status_code: int = 200) -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.content = body
    resp.text = body.decode("utf-8")
    return resp


@pytest.fixture
def client() -> FeedClient:
    return FeedClient(API_KEY)


@pytest.fixture
def themes_feed() -> bytes:
    return load_feed("themes.xml")


@pytest.fixture
def comments_feed() -> bytes:
    return load_feed("comments.xml")


@pytest.fixture
def empty_feed() -> bytes:
    return load_feed("empty.xml")


@pytest.fixture
def themes_document(themes_feed: bytes) -> FeedDocument:
    return XmlItemParser.parse(themes_feed)


@pytest.fixture
def comments_document(comments_feed: bytes) -> FeedDocument:
    return XmlItemParser.parse(comments_feed)
