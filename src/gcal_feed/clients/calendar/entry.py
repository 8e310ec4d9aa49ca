"""
Calendar event entries.

An Entry is a thin typed view over an Atom document. Setters write straight
into the XML and getters read it back, so the document sent to the service is
always exactly what the accessors report.

Example:
    entry = Entry()
    entry.title = "Party!"
    entry.content = "P-A-R-T-Why? Because we GOTTA!"
    entry.location = "My Flat, London, England"
    entry.status = "confirmed"
    entry.transparency = "opaque"
    entry.visibility = "private"
    entry.set_when(start, start + timedelta(hours=6))
    entry.author = Person(name="Foo Bar", email="foo@bar.com")
"""

from datetime import datetime, date
from typing import Any, List, Optional, Self, Tuple, Union
import logging

from ...atom.document import AtomDocument, parse_xml
from ...atom.link import Link, LinkLike, link_to_element
from ...atom.person import Person
from ...constants import (
    ATOM_NS, GD_NS, KIND_SCHEME, EVENT_KIND, EVENT_VALUE_PREFIX, ATTENDEE_REL,
    WEB_CONTENT_REL, VALID_STATUSES, VALID_TRANSPARENCIES, VALID_VISIBILITIES,
)
from ...exceptions import InvalidEntryData, InvalidRange
from ...utils.datetime import convert_datetime_to_utc, format_day, format_rfc3339_utc, is_day_value, parse_timestamp
from .recurrence import RecurrenceCodec, resolve_codec, strip_vevent, wrap_vevent
from .web_content import WebContentLink

logger = logging.getLogger(__name__)

Instant = Union[datetime, date]


def _parse_document_timestamp(value: str, field: str) -> datetime:
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise InvalidEntryData(f"Invalid {field} timestamp: {value!r}") from e


class Entry:
    """A calendar event backed by an Atom entry document."""

    KIND: Optional[str] = EVENT_KIND

    def __init__(
        self,
        document: Optional[AtomDocument] = None,
        recurrence_codec: Optional[RecurrenceCodec] = None,
    ):
        self._recurrence_codec = recurrence_codec
        if document is None:
            document = AtomDocument()
            self._initialize(document)
        self._document = document

    def _initialize(self, document: AtomDocument) -> None:
        if self.KIND:
            document.append_element(ATOM_NS, "category", {"scheme": KIND_SCHEME, "term": self.KIND})

    @classmethod
    def from_xml(cls, data: bytes, recurrence_codec: Optional[RecurrenceCodec] = None) -> Self:
        """Build an entry from a serialized atom:entry document."""
        return cls(AtomDocument(parse_xml(data)), recurrence_codec=recurrence_codec)

    @classmethod
    def from_document(cls, document: AtomDocument, recurrence_codec: Optional[RecurrenceCodec] = None) -> Self:
        return cls(document, recurrence_codec=recurrence_codec)

    @property
    def document(self) -> AtomDocument:
        return self._document

    @property
    def recurrence_codec(self) -> Optional[RecurrenceCodec]:
        return self._recurrence_codec

    def to_xml(self, pretty: bool = False) -> bytes:
        return self._document.to_xml(pretty=pretty)

    def replace_with(self, other: "Entry") -> None:
        """Adopt another entry's document, e.g. the server's answer to a write."""
        self._document = other.document

    # Core Atom fields

    @property
    def id(self) -> Optional[str]:
        return self._document.get_text(ATOM_NS, "id")

    @id.setter
    def id(self, value: Optional[str]) -> None:
        self._document.set_text(ATOM_NS, "id", value)

    @property
    def title(self) -> Optional[str]:
        return self._document.get_text(ATOM_NS, "title")

    @title.setter
    def title(self, value: Optional[str]) -> None:
        self._document.set_text(ATOM_NS, "title", value, {"type": "text"})

    @property
    def content(self) -> Optional[str]:
        return self._document.get_text(ATOM_NS, "content")

    @content.setter
    def content(self, value: Optional[str]) -> None:
        self._document.set_text(ATOM_NS, "content", value, {"type": "text"})

    @property
    def author(self) -> Optional[Person]:
        node = self._document.find(ATOM_NS, "author")
        if node is None:
            return None
        return Person.from_atom_element(node)

    @author.setter
    def author(self, person: Optional[Person]) -> None:
        self._document.remove_all(ATOM_NS, "author")
        if person is not None:
            self._document.append_child(person.to_atom_element("author"))

    @property
    def updated(self) -> Optional[datetime]:
        value = self._document.get_text(ATOM_NS, "updated")
        return _parse_document_timestamp(value, "updated") if value else None

    @property
    def published(self) -> Optional[datetime]:
        value = self._document.get_text(ATOM_NS, "published")
        return _parse_document_timestamp(value, "published") if value else None

    # Enumerated gd fields

    def _get_event_value(self, element_name: str) -> Optional[str]:
        value = self._document.get_attribute(GD_NS, element_name, "value")
        if value is None:
            return None
        if value.startswith(EVENT_VALUE_PREFIX):
            value = value[len(EVENT_VALUE_PREFIX):]
        return value

    def _set_event_value(self, element_name: str, value: Optional[str], allowed: Tuple[str, ...]) -> None:
        if value is None:
            self._document.remove_all(GD_NS, element_name)
            return
        value = value.lower()
        if value not in allowed:
            raise InvalidEntryData(f"Invalid {element_name}: {value!r}. Must be one of: {', '.join(allowed)}")
        self._document.set_element(GD_NS, element_name, {"value": f"{EVENT_VALUE_PREFIX}{value}"})

    @property
    def status(self) -> Optional[str]:
        """One of canceled, confirmed or tentative."""
        return self._get_event_value("eventStatus")

    @status.setter
    def status(self, value: Optional[str]) -> None:
        self._set_event_value("eventStatus", value, VALID_STATUSES)

    @property
    def transparency(self) -> Optional[str]:
        """One of opaque or transparent."""
        return self._get_event_value("transparency")

    @transparency.setter
    def transparency(self, value: Optional[str]) -> None:
        self._set_event_value("transparency", value, VALID_TRANSPARENCIES)

    @property
    def visibility(self) -> Optional[str]:
        """One of confidential, default, private or public."""
        return self._get_event_value("visibility")

    @visibility.setter
    def visibility(self, value: Optional[str]) -> None:
        self._set_event_value("visibility", value, VALID_VISIBILITIES)

    @property
    def location(self) -> Optional[str]:
        return self._document.get_attribute(GD_NS, "where", "valueString")

    @location.setter
    def location(self, value: Optional[str]) -> None:
        if value is None:
            self._document.remove_all(GD_NS, "where")
            return
        self._document.set_element(GD_NS, "where", {"valueString": value})

    # Timing

    @property
    def when(self) -> Tuple[datetime, ...]:
        """
        The event window as UTC datetimes.
        Returns:
            () with no start, (start,) with only a start, (start, end) otherwise.
        Raises:
            InvalidEntryData: If a stored time is not a recognisable timestamp.
        """
        start = self._document.get_attribute(GD_NS, "when", "startTime")
        if not start:
            return ()
        end = self._document.get_attribute(GD_NS, "when", "endTime")
        if not end:
            return (_parse_document_timestamp(start, "startTime"),)
        return (_parse_document_timestamp(start, "startTime"), _parse_document_timestamp(end, "endTime"))

    def set_when(self, start: Instant, end: Instant, all_day: bool = False) -> Tuple[datetime, ...]:
        """
        Set the start and end of the event.
        Args:
            start: Start as a datetime (naive values are local time) or date.
            end: End, strictly after start.
            all_day: Write day-only values instead of full timestamps.
        Returns:
            The window as read back from the document.
        Raises:
            InvalidRange: If end is not after start, or for all-day windows
                if the end day is not after the start day.
        """
        if convert_datetime_to_utc(end) <= convert_datetime_to_utc(start):
            raise InvalidRange("End is not after start")

        if all_day or not isinstance(start, datetime) or not isinstance(end, datetime):
            attributes = {"startTime": format_day(start), "endTime": format_day(end)}
            # the end day is exclusive, so the days themselves must differ
            if attributes["endTime"] <= attributes["startTime"]:
                raise InvalidRange("End day is not after start day")
        else:
            attributes = {"startTime": format_rfc3339_utc(start), "endTime": format_rfc3339_utc(end)}

        self._document.set_element(GD_NS, "when", attributes)
        return self.when

    @property
    def is_all_day(self) -> bool:
        return is_day_value(self._document.get_attribute(GD_NS, "when", "startTime") or "")

    # Attendees

    @property
    def attendees(self) -> List[Person]:
        """Every gd:who on the entry, with whichever of name/email it carries."""
        return [
            Person(name=node.get("valueString"), email=node.get("email"))
            for node in self._document.find_all(GD_NS, "who")
        ]

    @attendees.setter
    def attendees(self, people: List[Person]) -> None:
        self._document.remove_all(GD_NS, "who")
        for person in people or []:
            self._document.append_element(GD_NS, "who", {
                "rel": ATTENDEE_REL,
                "valueString": person.name,
                "email": person.email,
            })

    # Recurrence

    @property
    def recurrence_text(self) -> Optional[str]:
        """The stored gd:recurrence body, without the VEVENT envelope."""
        return self._document.get_text(GD_NS, "recurrence")

    @recurrence_text.setter
    def recurrence_text(self, value: Optional[str]) -> None:
        self._document.set_text(GD_NS, "recurrence", value)

    @property
    def recurrence(self) -> Any:
        """
        The recurrence as a decoded VEVENT object (icalendar.Event by default).
        Returns:
            None if the entry has no recurrence.
        Raises:
            UnsupportedFeature: If no recurrence codec is available.
        """
        text = self.recurrence_text
        if text is None:
            return None
        codec = resolve_codec(self._recurrence_codec)
        return codec.decode(wrap_vevent(text))

    @recurrence.setter
    def recurrence(self, event: Any) -> None:
        if event is None:
            self.recurrence_text = None
            return
        codec = resolve_codec(self._recurrence_codec)
        self.recurrence_text = strip_vevent(codec.encode(event))

    # Links

    @property
    def links(self) -> List[Link]:
        return [Link.from_element(node) for node in self._document.find_all(ATOM_NS, "link")]

    def _link_href(self, rel: str) -> Optional[str]:
        for link in self.links:
            if link.rel == rel:
                return link.href
        return None

    def edit_url(self) -> Optional[str]:
        """The href of the first 'edit' link, used to update and delete."""
        return self._link_href("edit")

    def self_url(self) -> Optional[str]:
        return self._link_href("self")

    def alternate_url(self) -> Optional[str]:
        return self._link_href("alternate")

    def add_link(self, link: LinkLike) -> None:
        self._document.append_child(link_to_element(link))

    @property
    def web_content_links(self) -> List[WebContentLink]:
        return [
            WebContentLink.from_element(node)
            for node in self._document.find_all(ATOM_NS, "link")
            if node.get("rel") == WEB_CONTENT_REL
        ]

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, title={self.title!r})"
