import pytest

from kuler.constants import KULER_NAMESPACE
from kuler.errors import ParseError
from kuler.parser import FeedDocument, XmlItemParser


def test_parse_collects_namespaces(themes_document: FeedDocument) -> None:
    assert themes_document.root.tag == "rss"
    assert themes_document.namespaces["kuler"] == KULER_NAMESPACE


def test_parse_accepts_text() -> None:
    doc = XmlItemParser.parse('<rss xmlns:k="urn:x"><channel/></rss>')
    assert doc.namespaces["k"] == "urn:x"


def test_extract_items_in_document_order(themes_document: FeedDocument) -> None:
    items = XmlItemParser.extract_items(themes_document)
    assert len(items) == 2
    ids = [item.text("themeItem/themeID") for item in items]
    assert ids == ["15325", "24198"]


def test_extract_items_from_empty_channel(empty_feed: bytes) -> None:
    assert XmlItemParser.extract_items(XmlItemParser.parse(empty_feed)) == []


def test_extract_items_requires_channel() -> None:
    doc = XmlItemParser.parse("<rss><item/></rss>")
    with pytest.raises(ParseError, match="channel"):
        XmlItemParser.extract_items(doc)


@pytest.mark.parametrize("payload", [b"", b"<rss><channel>", b"not xml at all"])
def test_parse_rejects_malformed_payload(payload: bytes) -> None:
    with pytest.raises(ParseError):
        XmlItemParser.parse(payload)


def test_node_lookup_is_namespace_qualified(themes_document: FeedDocument) -> None:
    item = XmlItemParser.extract_items(themes_document)[0]
    # <title> is un-namespaced; kuler:title does not exist
    assert item.text("title", prefix=None) == "Theme Title: sandy stone beach ocean diver"
    assert item.child("title") is None
    theme = item.child("themeItem")
    assert theme is not None
    assert theme.text("themeAuthor/authorLabel") == "ps"
    assert len(theme.children("themeSwatches/swatch")) == 5
    assert theme.has("themeRating")
    assert not theme.has("themeMissing")


def test_undeclared_prefix_raises_key_error(themes_document: FeedDocument) -> None:
    with pytest.raises(KeyError):
        themes_document.node.child("channel", prefix="dc")
