"""
Calendar feed client.

Usage:
    client = CalendarClient()
    client.login("user@gmail.com", "secret")

    for entry in client.get_events(q="party"):
        print(entry.title)

    entry = Entry()
    entry.title = "Test event"
    entry.set_when(start, start + timedelta(hours=1))
    client.add_entry(entry)          # entry now carries its id and edit link

    entry.content = "Updated"
    client.update_entry(entry)
    client.delete_entry(entry)
"""

import logging
import os
import re
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from google.oauth2.credentials import Credentials

from ...auth.session import AuthSession
from ...atom.document import parse_feed
from ...constants import (
    APP_NAME, CLIENT_LOGIN_URL, DEFAULT_ACCOUNT_TYPE, DEFAULT_SERVICE, DEFAULT_TIMEOUT,
    FEEDS_BASE_URL, MAX_REDIRECTS, PRIVATE_FULL,
)
from ...exceptions import InvalidEntryData
from ...utils.log_sanitizer import sanitize_for_logging, sanitize_url
from .calendar import Calendar
from .entry import Entry
from .pipeline import RequestPipeline
from .query_builder import ENTRY_ID_KEY, EventQueryBuilder, encode_query
from .recurrence import RecurrenceCodec
from .transport import HttpTransport, RequestsTransport

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entry)

PRIVATE_KEY_PATTERN = re.compile(r"/private-[^/]+/")


class CalendarClient:
    """
    Programmatic access to a calendar's Atom feed.

    Args:
        url: The active feed URL. Derived from the username on login when omitted.
        base_url: Root of the calendar feeds.
        transport: HTTP transport; a requests-backed one is created by default.
        mutate_entries: Make entries passed to add/update adopt the server's response.
        use_method_override: Send PUT/DELETE as POST + X-HTTP-Method-Override.
        max_redirects: Ceiling for session redirects per request.
        recurrence_codec: Codec handed to entries parsed from responses.
        timeout: Request timeout for the default transport.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        base_url: str = FEEDS_BASE_URL,
        transport: Optional[HttpTransport] = None,
        mutate_entries: bool = True,
        use_method_override: bool = True,
        max_redirects: int = MAX_REDIRECTS,
        recurrence_codec: Optional[RecurrenceCodec] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.url = url
        self.base_url = base_url.rstrip("/")
        self._transport = transport or RequestsTransport(timeout=timeout)
        self._session = AuthSession()
        self._pipeline = RequestPipeline(
            self._transport,
            self._session,
            use_method_override=use_method_override,
            max_redirects=max_redirects,
            mutate_entries=mutate_entries,
        )
        self._recurrence_codec = recurrence_codec

    @classmethod
    def from_env(cls, **kwargs: Any) -> "CalendarClient":
        """
        Build a client from GCAL_* environment variables.

        GCAL_FEED_URL and GCAL_FEEDS_BASE_URL configure the feed; when
        GCAL_USERNAME and GCAL_PASSWORD are both set the client logs in.
        """
        if os.getenv("GCAL_FEED_URL"):
            kwargs.setdefault("url", os.getenv("GCAL_FEED_URL"))
        if os.getenv("GCAL_FEEDS_BASE_URL"):
            kwargs.setdefault("base_url", os.getenv("GCAL_FEEDS_BASE_URL"))
        client = cls(**kwargs)

        username, password = os.getenv("GCAL_USERNAME"), os.getenv("GCAL_PASSWORD")
        if username and password:
            client.login(username, password)
        return client

    # Session state

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def session_id(self) -> Optional[str]:
        return self._pipeline.session_id

    @property
    def force_no_session_id(self) -> bool:
        return self._pipeline.force_no_session_id

    @force_no_session_id.setter
    def force_no_session_id(self, value: bool) -> None:
        self._pipeline.force_no_session_id = bool(value)

    @property
    def mutate_entries(self) -> bool:
        return self._pipeline.mutate_entries

    @mutate_entries.setter
    def mutate_entries(self, value: bool) -> None:
        self._pipeline.mutate_entries = bool(value)

    # Authentication

    def login(
        self,
        username: str,
        password: str,
        service: str = DEFAULT_SERVICE,
        source: str = APP_NAME,
        account_type: str = DEFAULT_ACCOUNT_TYPE,
        login_url: str = CLIENT_LOGIN_URL,
    ) -> None:
        """
        Log in with a username and password (ClientLogin).

        Raises:
            AuthError: If the credential exchange fails.
        """
        self._session.login(
            self._transport, username, password,
            service=service, source=source, account_type=account_type, login_url=login_url,
        )
        self._derive_feed_url(username)

    def auth(self, username: str, token: Union[str, Credentials]) -> None:
        """Use a token (or google-auth Credentials) obtained out of band."""
        self._session.auth(username, token)
        self._derive_feed_url(username)

    def logout(self) -> None:
        self._session.clear()
        self._pipeline.session_id = None

    def _derive_feed_url(self, username: str) -> None:
        if not self.url:
            self.url = f"{self.base_url}/{username}/{PRIVATE_FULL}"
        self.url = PRIVATE_KEY_PATTERN.sub("/private/", self.url)
        logger.info("Active feed is %s", sanitize_url(self.url))

    # Reads

    def _require_url(self) -> str:
        if not self.url:
            raise InvalidEntryData("No feed URL; pass url= or log in first")
        return self.url

    def get_feed(self, url: str, entry_class: Type[E] = Entry) -> List[E]:
        """Fetch any feed URL and parse its entries as entry_class."""
        body = self._pipeline.fetch(url)
        entries = [
            entry_class.from_document(document, recurrence_codec=self._recurrence_codec)
            for document in parse_feed(body)
        ]
        logger.info("Fetched %d entries", len(entries))
        return entries

    def get_events(self, filters: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> List[Entry]:
        """
        List events in the active feed.

        Args:
            filters: Query filters (see encode_query); may also be passed as
                keyword arguments with underscores for hyphens, e.g.
                max_results=10, start_min=datetime(...).

        Returns:
            The matching entries.
        """
        merged = dict(filters or {})
        merged.update(kwargs)
        sanitized = sanitize_for_logging(query=merged.get("q"))
        logger.info("Fetching events with query=%s, filters=%s", sanitized["query"], sorted(merged))
        return self.get_feed(encode_query(self._require_url(), merged))

    list_events = get_events

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Fetch a single entry by id; None if the feed returns nothing."""
        entries = self.get_events({ENTRY_ID_KEY: entry_id})
        return entries[0] if entries else None

    def query(self) -> EventQueryBuilder:
        """
        Create a new EventQueryBuilder for building feed queries with a fluent API.

        Example:
            events = (client.query()
                .search("meeting")
                .starting_after(start)
                .execute())
        """
        return EventQueryBuilder(self)

    # Writes

    def add_entry(self, entry: E) -> E:
        """Create an entry in the active calendar."""
        return self._pipeline.execute(entry, self._require_url(), "POST")

    def update_entry(self, entry: E) -> E:
        """Update an entry at its edit url."""
        return self._pipeline.execute(entry, self._edit_url(entry), "PUT")

    def delete_entry(self, entry: E) -> E:
        """Delete an entry at its edit url."""
        return self._pipeline.execute(entry, self._edit_url(entry), "DELETE")

    @staticmethod
    def _edit_url(entry: Entry, owned: bool = False) -> str:
        url = entry.edit_url(owned=owned) if isinstance(entry, Calendar) else entry.edit_url()
        if not url:
            raise InvalidEntryData(f"{entry!r} has no edit link; has it been added yet?")
        return url

    # Calendars

    def calendars_url(self, owned: bool = False) -> str:
        projection = "owncalendars" if owned else "allcalendars"
        return f"{self.base_url}/default/{projection}/full"

    def get_calendars(self, owned: bool = False) -> List[Calendar]:
        """List the user's calendars, or only the ones they own."""
        return self.get_feed(self.calendars_url(owned), entry_class=Calendar)

    def set_calendar(self, calendar: Calendar) -> str:
        """
        Make a calendar the target of subsequent reads and adds.

        Returns:
            The new active feed URL.
        """
        calendar_id = calendar.calendar_id
        if not calendar_id:
            raise InvalidEntryData("Calendar has no id to select")
        self.url = f"{self.base_url}/{calendar_id}/{PRIVATE_FULL}"
        logger.info("Selected calendar feed %s", sanitize_url(self.url))
        return self.url

    select_calendar = set_calendar

    def add_calendar(self, calendar: Calendar) -> Calendar:
        return self._pipeline.execute(calendar, self.calendars_url(owned=True), "POST")

    def update_calendar(self, calendar: Calendar) -> Calendar:
        return self._pipeline.execute(calendar, self._edit_url(calendar, owned=True), "PUT")

    def delete_calendar(self, calendar: Calendar) -> Calendar:
        return self._pipeline.execute(calendar, self._edit_url(calendar, owned=True), "DELETE")
