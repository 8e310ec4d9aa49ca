from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from lxml import etree

from ..constants import ATOM_NS
from .document import new_element


@runtime_checkable
class LinkLike(Protocol):
    """What the serializer needs from anything added as an atom:link."""
    rel: Optional[str]
    href: Optional[str]
    type: Optional[str]
    title: Optional[str]

    @property
    def payload(self) -> Optional[etree._Element]: ...


@dataclass
class Link:
    """
    A relation-tagged atom:link.
    Args:
        rel: Link relation, e.g. 'edit', 'self', 'alternate'.
        href: Target URL.
        type: MIME type of the target (optional).
        title: Human-readable title (optional).
    """
    rel: Optional[str] = None
    href: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None

    @property
    def payload(self) -> Optional[etree._Element]:
        return None

    @classmethod
    def from_element(cls, element: etree._Element) -> "Link":
        return cls(
            rel=element.get("rel"),
            href=element.get("href"),
            type=element.get("type"),
            title=element.get("title"),
        )


def link_to_element(link: LinkLike) -> etree._Element:
    """Serializes any LinkLike into an atom:link element, payload included."""
    node = new_element(ATOM_NS, "link")
    for attribute in ("rel", "type", "href", "title"):
        value = getattr(link, attribute, None)
        if value is not None:
            node.set(attribute, str(value))
    payload = link.payload
    if payload is not None:
        node.append(payload)
    return node
