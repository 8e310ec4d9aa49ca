"""Generic Atom document primitives used by the calendar entry types."""

from .document import AtomDocument, parse_feed, parse_xml, qname
from .link import Link, LinkLike, link_to_element
from .person import Person

__all__ = [
    "AtomDocument",
    "parse_feed",
    "parse_xml",
    "qname",
    "Link",
    "LinkLike",
    "link_to_element",
    "Person",
]
