import pytest

from gcal_feed.atom.document import AtomDocument, parse_feed, parse_xml
from gcal_feed.atom.link import Link, link_to_element
from gcal_feed.atom.person import Person
from gcal_feed.constants import ATOM_NS, GD_NS
from gcal_feed.exceptions import InvalidEntryData


@pytest.mark.unit
class TestAtomDocument:
    """Test cases for the namespace-addressed document layer."""

    def test_new_document(self):
        document = AtomDocument()
        assert document.tag == "entry"
        assert document.to_xml().startswith(b"<?xml version='1.0' encoding='UTF-8'?>")

    def test_get_missing(self):
        document = AtomDocument()
        assert document.find(ATOM_NS, "title") is None
        assert document.get_text(ATOM_NS, "title") is None
        assert document.get_attribute(GD_NS, "where", "valueString") is None

    def test_empty_element_text(self):
        document = AtomDocument()
        document.append_element(ATOM_NS, "content")
        assert document.get_text(ATOM_NS, "content") == ""

    def test_set_text_replaces_in_place(self):
        document = AtomDocument()
        document.set_text(ATOM_NS, "id", "1")
        document.set_text(ATOM_NS, "title", "first")
        document.set_text(ATOM_NS, "id", "2")

        assert [child.text for child in document.element] == ["2", "first"]

    def test_set_text_none_removes(self):
        document = AtomDocument()
        document.set_text(ATOM_NS, "title", "first")
        document.set_text(ATOM_NS, "title", None)
        assert document.find(ATOM_NS, "title") is None

    def test_append_element_skips_none_attributes(self):
        document = AtomDocument()
        node = document.append_element(GD_NS, "who", {"valueString": "Jo", "email": None})
        assert dict(node.attrib) == {"valueString": "Jo"}

    def test_remove_all(self):
        document = AtomDocument()
        document.append_element(GD_NS, "who")
        document.append_element(GD_NS, "who")
        assert document.remove_all(GD_NS, "who") == 2
        assert document.find_all(GD_NS, "who") == []

    def test_copy_is_independent(self):
        document = AtomDocument()
        document.set_text(ATOM_NS, "title", "original")
        clone = document.copy()
        clone.set_text(ATOM_NS, "title", "changed")
        assert document.get_text(ATOM_NS, "title") == "original"

    def test_appended_children_use_feed_prefixes(self):
        document = AtomDocument()
        document.append_child(Person(name="Jo").to_atom_element())
        document.append_child(link_to_element(Link(rel="edit", href="http://example.com/1")))

        xml = document.to_xml()
        assert b"ns0:" not in xml
        assert b"<name>Jo</name>" in xml
        assert b'rel="edit" href="http://example.com/1"' in xml


@pytest.mark.unit
class TestParsing:
    """Test cases for parsing service documents."""

    def test_parse_str(self):
        element = parse_xml('<entry xmlns="http://www.w3.org/2005/Atom"><id>1</id></entry>')
        assert AtomDocument(element).get_text(ATOM_NS, "id") == "1"

    def test_parse_malformed(self):
        with pytest.raises(InvalidEntryData, match="Could not parse"):
            parse_xml(b"<feed>")

    def test_entities_are_not_resolved(self):
        data = (b'<?xml version="1.0"?><!DOCTYPE e [<!ENTITY x "expanded">]>'
                b'<entry xmlns="http://www.w3.org/2005/Atom"><title>&x;</title></entry>')
        document = AtomDocument(parse_xml(data))
        assert document.get_text(ATOM_NS, "title") != "expanded"

    def test_parse_feed(self, feed_xml):
        documents = parse_feed(feed_xml)
        assert [d.get_text(ATOM_NS, "title") for d in documents] == ["First event", "Second event"]
        assert all(d.element.getparent() is None for d in documents)

    def test_parse_bare_entry(self, entry_xml):
        (document,) = parse_feed(entry_xml)
        assert document.get_text(ATOM_NS, "title") == "Tennis with Beth"

    def test_parse_empty_feed(self):
        assert parse_feed(b'<feed xmlns="http://www.w3.org/2005/Atom"/>') == []

    def test_parse_non_atom(self):
        with pytest.raises(InvalidEntryData, match="Expected an Atom feed"):
            parse_feed(b"<rss><channel/></rss>")
