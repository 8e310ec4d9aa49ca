import pytest

from gcal_feed.atom.document import parse_xml
from gcal_feed.atom.link import Link
from gcal_feed.clients.calendar.entry import Entry
from gcal_feed.clients.calendar.web_content import WebContent, WebContentLink, validate_web_content_type
from gcal_feed.exceptions import InvalidWebContentType, ValidationError

WORLD_CUP_LINK = dict(
    title="World Cup",
    href="http://www.google.com/calendar/images/google-holiday.gif",
    type="image/gif",
)


@pytest.mark.unit
@pytest.mark.calendar
class TestWebContentLink:
    """Test cases for web content links."""

    @pytest.mark.parametrize("content_type", [
        None, "text/html", "application/x-google-gadgets+xml", "image/gif", "image/png",
    ])
    def test_valid_types(self, content_type):
        validate_web_content_type(content_type)

    def test_invalid_type(self):
        with pytest.raises(InvalidWebContentType):
            WebContentLink(title="x", href="http://example.com", type="application/pdf")

    @pytest.mark.parametrize("missing", ["title", "href"])
    def test_required_fields(self, missing):
        fields = dict(WORLD_CUP_LINK)
        fields[missing] = None
        with pytest.raises(ValidationError, match=f"'{missing}'"):
            WebContentLink(**fields)

    def test_add_to_entry(self):
        """The payload is written as the link's gCal:webContent child."""
        entry = Entry()
        entry.add_link(WebContentLink(
            web_content=WebContent(url="http://www.google.com/logos/worldcup06.gif", width=276, height=120),
            **WORLD_CUP_LINK,
        ))

        xml = entry.to_xml()
        assert b'rel="http://schemas.google.com/gCal/2005/webContent"' in xml
        assert b'width="276"' in xml

        (link,) = entry.web_content_links
        assert link.title == "World Cup"
        assert link.type == "image/gif"
        assert link.web_content == WebContent(
            url="http://www.google.com/logos/worldcup06.gif", width=276, height=120,
        )

    def test_gadget_preferences(self):
        entry = Entry()
        entry.add_link(WebContentLink(
            title="DateTime Gadget (a classic!)",
            href="http://www.google.com/favicon.ico",
            type="application/x-google-gadgets+xml",
            web_content=WebContent(
                url="http://google.com/ig/modules/datetime.xml",
                width=300,
                height=136,
                prefs={"color": "green"},
            ),
        ))

        (link,) = entry.web_content_links
        assert link.web_content.prefs == {"color": "green"}
        assert b'<gCal:webContentGadgetPref name="color" value="green"/>' in entry.to_xml()

    def test_plain_links_are_not_web_content(self):
        entry = Entry()
        entry.add_link(Link(rel="related", href="http://example.com"))
        assert entry.web_content_links == []
        assert entry.links == [Link(rel="related", href="http://example.com")]

    def test_empty_web_content(self):
        link = WebContentLink(**WORLD_CUP_LINK)
        assert dict(link.payload.attrib) == {}

    def test_reads_capitalised_gadget_prefs(self):
        element = parse_xml(
            b'<gCal:webContent xmlns:gCal="http://schemas.google.com/gCal/2005" url="http://example.com/g.xml">'
            b'<gCal:webContentGadgetPref Name="color" Value="green"/>'
            b'</gCal:webContent>'
        )
        assert WebContent.from_element(element).prefs == {"color": "green"}

    def test_reads_link_without_title(self):
        """Server documents are read as-is, even when they lack fields a new link requires."""
        entry = Entry.from_xml(
            b'<entry xmlns="http://www.w3.org/2005/Atom" xmlns:gCal="http://schemas.google.com/gCal/2005">'
            b'<link rel="http://schemas.google.com/gCal/2005/webContent"'
            b' href="http://www.google.com/calendar/images/google-holiday.gif" type="image/gif">'
            b'<gCal:webContent url="http://www.google.com/logos/worldcup06.gif" width="276" height="120"/>'
            b'</link>'
            b'<link rel="http://schemas.google.com/gCal/2005/webContent" title="Gadget" href="http://example.com/g"'
            b' type="application/pdf"/>'
            b'</entry>'
        )

        untitled, gadget = entry.web_content_links

        assert untitled.title is None
        assert untitled.href == "http://www.google.com/calendar/images/google-holiday.gif"
        assert untitled.web_content.width == 276
        assert gadget.type == "application/pdf"
        assert gadget.web_content == WebContent()
