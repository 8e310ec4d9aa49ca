from dataclasses import dataclass, field
from typing import Dict, Optional

from lxml import etree

from ...atom.document import new_element, qname
from ...constants import GCAL_NS, WEB_CONTENT_REL, WEB_CONTENT_TYPES
from ...exceptions import InvalidWebContentType, ValidationError


def validate_web_content_type(content_type: Optional[str]) -> None:
    """Web content may only be HTML, a Google gadget or an image."""
    if content_type is None:
        return
    if content_type in WEB_CONTENT_TYPES or content_type.startswith("image/"):
        return
    raise InvalidWebContentType(
        "The type must be text/html, application/x-google-gadgets+xml or image/*, "
        f"got {content_type!r}"
    )


@dataclass
class WebContent:
    """
    The gCal:webContent payload carried inside a web content link.
    Args:
        url: URL of the image, page or gadget to embed.
        width: Display width in pixels (optional).
        height: Display height in pixels (optional).
        prefs: Gadget preferences written as webContentGadgetPref elements.
    """
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    prefs: Dict[str, str] = field(default_factory=dict)

    def to_element(self) -> etree._Element:
        node = new_element(GCAL_NS, "webContent")
        for attribute in ("url", "width", "height"):
            value = getattr(self, attribute)
            if value is not None:
                node.set(attribute, str(value))
        for name, value in self.prefs.items():
            pref = etree.SubElement(node, qname(GCAL_NS, "webContentGadgetPref"))
            pref.set("name", str(name))
            pref.set("value", str(value))
        return node

    @classmethod
    def from_element(cls, element: etree._Element) -> "WebContent":
        # older writers capitalised the attribute names
        prefs = {
            pref.get("name", pref.get("Name")): pref.get("value", pref.get("Value"))
            for pref in element.iterfind(qname(GCAL_NS, "webContentGadgetPref"))
        }
        width = element.get("width")
        height = element.get("height")
        return cls(
            url=element.get("url"),
            width=int(width) if width else None,
            height=int(height) if height else None,
            prefs=prefs,
        )


class WebContentLink:
    """
    An atom:link that embeds web content (images, HTML or gadgets) in an event.

    The link and its payload are separate values; the payload is serialized as
    the link's child element.

    Example:
        link = WebContentLink(
            title="World Cup",
            href="http://www.google.com/calendar/images/google-holiday.gif",
            type="image/gif",
            web_content=WebContent(url="http://www.google.com/logos/worldcup06.gif", width=276, height=120),
        )
        entry.add_link(link)
    """

    rel = WEB_CONTENT_REL

    def __init__(
        self,
        title: str,
        href: str,
        type: Optional[str] = None,
        web_content: Optional[WebContent] = None,
    ):
        for field_name, value in (("title", title), ("href", href)):
            if not value:
                raise ValidationError(f"You must pass in the field '{field_name}' to a web content link")
        validate_web_content_type(type)
        self.title = title
        self.href = href
        self.type = type
        self.web_content = web_content if web_content is not None else WebContent()

    @property
    def payload(self) -> etree._Element:
        return self.web_content.to_element()

    @classmethod
    def from_element(cls, element: etree._Element) -> "WebContentLink":
        content = element.find(qname(GCAL_NS, "webContent"))
        return cls._from_parts(
            title=element.get("title"),
            href=element.get("href"),
            type=element.get("type"),
            web_content=WebContent.from_element(content) if content is not None else None,
        )

    @classmethod
    def _from_parts(
        cls,
        title: Optional[str],
        href: Optional[str],
        type: Optional[str],
        web_content: Optional[WebContent],
    ) -> "WebContentLink":
        """Build a link read from a server document, where any attribute may be absent."""
        link = cls.__new__(cls)
        link.title = title
        link.href = href
        link.type = type
        link.web_content = web_content if web_content is not None else WebContent()
        return link

    def __repr__(self):
        return f"WebContentLink(title={self.title!r}, href={self.href!r}, type={self.type!r}, web_content={self.web_content!r})"
