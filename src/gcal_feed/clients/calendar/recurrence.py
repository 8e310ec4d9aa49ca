"""
Bridge between gd:recurrence text and iCalendar VEVENT objects.

The feed stores the body of a VEVENT without its BEGIN/END lines. Entries hand
a codec the full VEVENT text to decode, and strip the envelope from what the
codec encodes before storing it.
"""

import logging
from typing import Any, Optional, Protocol

from ...exceptions import UnsupportedFeature

logger = logging.getLogger(__name__)

VEVENT_BEGIN = "BEGIN:VEVENT"
VEVENT_END = "END:VEVENT"


class RecurrenceCodec(Protocol):
    """Encodes and decodes a recurrence object to and from VEVENT text."""

    def decode(self, text: str) -> Any: ...

    def encode(self, recurrence: Any) -> str: ...


class IcalendarRecurrenceCodec:
    """RecurrenceCodec backed by the icalendar library's Event component."""

    def __init__(self):
        import icalendar
        self._icalendar = icalendar

    def decode(self, text: str):
        return self._icalendar.Event.from_ical(text)

    def encode(self, recurrence) -> str:
        return recurrence.to_ical().decode("utf-8")


def load_default_codec() -> IcalendarRecurrenceCodec:
    """
    Build the icalendar-backed codec.

    Raises:
        UnsupportedFeature: If icalendar is not installed.
    """
    try:
        return IcalendarRecurrenceCodec()
    except ImportError as e:
        logger.warning("Recurrence requested but icalendar is not installed")
        raise UnsupportedFeature(
            "Recurrence support needs the 'icalendar' package (pip install gcal-feed-client[recurrence])"
        ) from e


def wrap_vevent(body: str) -> str:
    """Strip trailing blank lines and add the VEVENT envelope."""
    body = body.replace("\r\n", "\n").rstrip("\n")
    return f"{VEVENT_BEGIN}\n{body}\n{VEVENT_END}\n"


def strip_vevent(text: str) -> str:
    """Remove the VEVENT envelope lines, keeping the body lines in order."""
    lines = text.replace("\r\n", "\n").split("\n")
    body = [line for line in lines if line not in (VEVENT_BEGIN, VEVENT_END)]
    return "\n".join(body).strip("\n") + "\n"


def resolve_codec(codec: Optional[RecurrenceCodec]) -> RecurrenceCodec:
    return codec if codec is not None else load_default_codec()
