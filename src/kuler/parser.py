"""XML feed parsing with namespace-aware node lookup."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final, Optional

from kuler.constants import KULER_NAMESPACE, KULER_PREFIX
from kuler.errors import ParseError

logger: Final = logging.getLogger(__name__)

# Prefixes assumed when a feed omits the declaration
DEFAULT_NAMESPACES: Final = {KULER_PREFIX: KULER_NAMESPACE}


@dataclass(frozen=True)
class FeedNode:
    """A parsed element plus the prefix map of the document it came from.

    Child lookups take a local name and a namespace prefix; the prefix is
    resolved through the document's declarations. ``prefix=None`` matches
    un-namespaced elements such as ``<item>``.
    """

    element: ET.Element
    namespaces: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_NAMESPACES))

    def namespace(self, prefix: str = KULER_PREFIX) -> Optional[str]:
        """Return the URI bound to ``prefix``, or None if it is undeclared."""
        return self.namespaces.get(prefix)

    def qualify(self, path: str, prefix: Optional[str] = KULER_PREFIX) -> str:
        """Turn ``a/b`` into the ElementTree form ``{uri}a/{uri}b``."""
        if prefix is None:
            return path
        uri = self.namespace(prefix)
        if uri is None:
            raise KeyError(f"Namespace prefix '{prefix}' is not declared")
        return "/".join(f"{{{uri}}}{step}" for step in path.split("/"))

    def child(self, name: str, prefix: Optional[str] = KULER_PREFIX) -> Optional[FeedNode]:
        """First descendant matching the (slash-separated) path, if any."""
        found = self.element.find(self.qualify(name, prefix))
        if found is None:
            return None
        return FeedNode(found, self.namespaces)

    def children(self, name: str, prefix: Optional[str] = KULER_PREFIX) -> list[FeedNode]:
        """Every descendant matching the path, in document order."""
        return [FeedNode(el, self.namespaces) for el in self.element.findall(self.qualify(name, prefix))]

    def has(self, name: str, prefix: Optional[str] = KULER_PREFIX) -> bool:
        return self.child(name, prefix) is not None

    def text(self, name: Optional[str] = None, prefix: Optional[str] = KULER_PREFIX) -> Optional[str]:
        """Stripped text of this node, or of the child at ``name``.

        Returns None when the child is missing; an empty element yields "".
        """
        node = self if name is None else self.child(name, prefix)
        if node is None:
            return None
        return (node.element.text or "").strip()


@dataclass(frozen=True)
class FeedDocument:
    """A whole parsed feed: the root element and its declared prefixes."""

    root: ET.Element
    namespaces: Mapping[str, str]

    @property
    def node(self) -> FeedNode:
        return FeedNode(self.root, self.namespaces)


class XmlItemParser:
    """Parses feed payloads and pulls out their ``<item>`` elements."""

    @staticmethod
    def parse(payload: bytes | str) -> FeedDocument:
        """Parse a feed body, collecting every namespace it declares.

        Args:
            payload: Raw response body

        Returns:
            The parsed document

        Raises:
            ParseError: If the payload is not well-formed XML
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")

        namespaces: dict[str, str] = dict(DEFAULT_NAMESPACES)
        root: Optional[ET.Element] = None
        try:
            for event, item in ET.iterparse(io.BytesIO(payload), events=("start-ns", "start")):
                if event == "start-ns":
                    prefix, uri = item
                    namespaces[prefix] = uri
                elif root is None:
                    root = item
        except ET.ParseError as exc:
            logger.warning("Could not parse feed: %s", exc)
            raise ParseError(f"Malformed feed: {exc}", exc) from exc

        if root is None:
            raise ParseError("Empty feed")
        return FeedDocument(root, namespaces)

    @staticmethod
    def extract_items(document: FeedDocument) -> list[FeedNode]:
        """Return the ``<item>`` nodes under ``channel``, in feed order.

        Raises:
            ParseError: If the document has no ``channel`` element
        """
        root = document.node
        channel = root if root.element.tag == "channel" else root.child("channel", prefix=None)
        if channel is None:
            raise ParseError("Feed has no channel element")
        items = channel.children("item", prefix=None)
        logger.debug("Feed contains %d item(s)", len(items))
        return items
