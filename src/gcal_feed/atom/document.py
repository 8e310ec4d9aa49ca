"""
Generic Atom document layer.

AtomDocument wraps a single lxml element and exposes namespace + local-name
addressed primitives. Calendar entry types build their typed accessors on top
of these and never hold state of their own, so every getter re-reads the tree.
"""

import copy
import logging
from typing import Dict, List, Optional, Self

from lxml import etree

from ..constants import ATOM_NS, NSMAP
from ..exceptions import InvalidEntryData

logger = logging.getLogger(__name__)

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def qname(namespace: Optional[str], name: str) -> str:
    """Clark-notation tag name, e.g. '{http://www.w3.org/2005/Atom}title'."""
    return f"{{{namespace}}}{name}" if namespace else name


def new_element(namespace: str, name: str) -> etree._Element:
    """A detached element declaring the feed prefixes, so it keeps them once appended."""
    return etree.Element(qname(namespace, name), nsmap=NSMAP)


def parse_xml(data: bytes) -> etree._Element:
    """
    Parse raw XML bytes into an lxml element.

    Raises:
        InvalidEntryData: If the bytes are not well-formed XML.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return etree.fromstring(data, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise InvalidEntryData(f"Could not parse Atom document: {e}") from e


class AtomDocument:
    """A mutable Atom element with namespace-addressed accessors."""

    def __init__(self, element: Optional[etree._Element] = None, tag: str = "entry"):
        if element is None:
            element = etree.Element(qname(ATOM_NS, tag), nsmap=NSMAP)
        self._element = element

    @classmethod
    def from_xml(cls, data: bytes) -> Self:
        return cls(parse_xml(data))

    @property
    def element(self) -> etree._Element:
        return self._element

    @property
    def tag(self) -> str:
        return etree.QName(self._element).localname

    def copy(self) -> "AtomDocument":
        return AtomDocument(copy.deepcopy(self._element))

    def to_xml(self, pretty: bool = False) -> bytes:
        return etree.tostring(self._element, xml_declaration=True, encoding="UTF-8", pretty_print=pretty)

    # Lookup

    def find(self, namespace: str, name: str) -> Optional[etree._Element]:
        """First direct child with the given namespace and local name."""
        return self._element.find(qname(namespace, name))

    def find_all(self, namespace: str, name: str) -> List[etree._Element]:
        """All direct children with the given namespace and local name."""
        return self._element.findall(qname(namespace, name))

    def get_text(self, namespace: str, name: str) -> Optional[str]:
        node = self.find(namespace, name)
        if node is None:
            return None
        return node.text or ""

    def get_attribute(self, namespace: str, name: str, attribute: str) -> Optional[str]:
        node = self.find(namespace, name)
        if node is None:
            return None
        return node.get(attribute)

    # Mutation

    def remove_all(self, namespace: str, name: str) -> int:
        """Remove every direct child with the given name; returns how many went."""
        nodes = self.find_all(namespace, name)
        for node in nodes:
            self._element.remove(node)
        return len(nodes)

    def append_element(
        self,
        namespace: str,
        name: str,
        attributes: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> etree._Element:
        node = etree.SubElement(self._element, qname(namespace, name))
        for key, value in (attributes or {}).items():
            if value is not None:
                node.set(key, str(value))
        if text is not None:
            node.text = text
        return node

    def set_element(
        self,
        namespace: str,
        name: str,
        attributes: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> etree._Element:
        """Replace any existing element of this name with a single new one."""
        existing = self.find(namespace, name)
        position = None
        if existing is not None:
            position = self._element.index(existing)
        self.remove_all(namespace, name)
        node = self.append_element(namespace, name, attributes, text)
        if position is not None:
            self._element.insert(position, node)
        return node

    def set_text(self, namespace: str, name: str, text: Optional[str], attributes: Optional[Dict[str, str]] = None) -> None:
        """Set the text of a child element; None removes it."""
        if text is None:
            self.remove_all(namespace, name)
            return
        self.set_element(namespace, name, attributes, text)

    def append_child(self, node: etree._Element) -> None:
        self._element.append(node)


def parse_feed(data: bytes) -> List[AtomDocument]:
    """
    Split an Atom feed into standalone entry documents.

    A bare entry document yields a single-item list.

    Raises:
        InvalidEntryData: If the document is not an Atom feed or entry.
    """
    root = parse_xml(data)
    root_name = etree.QName(root)
    if root_name.namespace != ATOM_NS or root_name.localname not in ("feed", "entry"):
        raise InvalidEntryData(f"Expected an Atom feed, got <{root_name.localname}>")
    if root_name.localname == "entry":
        return [AtomDocument(root)]

    entries = [AtomDocument(copy.deepcopy(node)) for node in root.iterfind(qname(ATOM_NS, "entry"))]
    logger.debug("Parsed feed with %d entries", len(entries))
    return entries
