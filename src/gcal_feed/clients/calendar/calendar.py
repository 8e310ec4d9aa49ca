from typing import Optional
from urllib.parse import urlsplit

from ...constants import ATOM_NS, GCAL_NS, ALL_CALENDARS_PATH, OWN_CALENDARS_PATH
from .entry import Entry


class Calendar(Entry):
    """
    A calendar resource from the calendars meta-feed rather than an event.

    Note this only covers the common gCal fields; anything else is reachable
    through the underlying document.
    """

    KIND = None

    @property
    def summary(self) -> Optional[str]:
        """A summary of the calendar."""
        return self._document.get_text(ATOM_NS, "summary")

    @summary.setter
    def summary(self, value: Optional[str]) -> None:
        self._document.set_text(ATOM_NS, "summary", value, {"type": "text"})

    def edit_url(self, owned: bool = False) -> Optional[str]:
        """
        The edit url of the calendar.
        Args:
            owned: Target the owned-calendars feed instead of all calendars,
                which is where changes to calendars you own must go.
        """
        url = super().edit_url()
        if url and owned:
            url = url.replace(ALL_CALENDARS_PATH, OWN_CALENDARS_PATH)
        return url

    @property
    def calendar_id(self) -> Optional[str]:
        """The trailing path segment of the calendar's id, as used in feed URLs."""
        entry_id = self.id
        if not entry_id:
            return None
        path = urlsplit(entry_id).path or entry_id
        return path.rstrip("/").rsplit("/", 1)[-1] or None

    def _get_gcal_value(self, name: str) -> Optional[str]:
        return self._document.get_attribute(GCAL_NS, name, "value")

    def _set_gcal_value(self, name: str, value: Optional[str]) -> None:
        if value is None:
            self._document.remove_all(GCAL_NS, name)
            return
        self._document.set_element(GCAL_NS, name, {"value": value})

    @property
    def color(self) -> Optional[str]:
        return self._get_gcal_value("color")

    @color.setter
    def color(self, value: Optional[str]) -> None:
        self._set_gcal_value("color", value)

    @property
    def timezone(self) -> Optional[str]:
        return self._get_gcal_value("timezone")

    @timezone.setter
    def timezone(self, value: Optional[str]) -> None:
        self._set_gcal_value("timezone", value)

    @property
    def hidden(self) -> Optional[bool]:
        value = self._get_gcal_value("hidden")
        return None if value is None else value == "true"

    @hidden.setter
    def hidden(self, value: Optional[bool]) -> None:
        self._set_gcal_value("hidden", None if value is None else str(bool(value)).lower())

    @property
    def selected(self) -> Optional[bool]:
        value = self._get_gcal_value("selected")
        return None if value is None else value == "true"

    @selected.setter
    def selected(self, value: Optional[bool]) -> None:
        self._set_gcal_value("selected", None if value is None else str(bool(value)).lower())

    @property
    def access_level(self) -> Optional[str]:
        return self._get_gcal_value("accesslevel")
