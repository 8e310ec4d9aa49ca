from datetime import datetime, date
from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit
import logging

from ...exceptions import InvalidQuery
from ...utils.datetime import format_rfc3339_utc
from ...utils.log_sanitizer import sanitize_url

if TYPE_CHECKING:
    from .client import CalendarClient
    from .entry import Entry

logger = logging.getLogger(__name__)

ENTRY_ID_KEY = "entryID"
CATEGORY_KEY = "category"
CATEGORY_PATH_MARKER = "-"
# Characters of the category grammar that must reach the server literally
CATEGORY_SAFE = "|"

KEY_ALIASES = {
    "entry_id": ENTRY_ID_KEY,
    "entryid": ENTRY_ID_KEY,
}


def normalize_key(key: str) -> str:
    """Map Python-friendly names (max_results, entry_id) to feed parameter names."""
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    if key == ENTRY_ID_KEY:
        return key
    return key.replace("_", "-")


def format_value(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return format_rfc3339_utc(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(base_url: str, filters: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the request URL for a feed read.

    Args:
        base_url: The feed URL, e.g. '<base>/<calendar>/private/full'.
        filters: Mapping of filter name to value. 'category' may be a string
            (passed as a query parameter, '|' meaning OR and a leading '-'
            meaning NOT) or a list (AND-ed as '/-/A/B' path segments).
            Datetime values are sent as RFC 3339 UTC. 'entryID' fetches a
            single entry and cannot be combined with anything else.

    Returns:
        The full request URL.

    Raises:
        InvalidQuery: If entryID is combined with other filters.
    """
    filters = {normalize_key(k): v for k, v in (filters or {}).items() if v is not None}
    parts = urlsplit(base_url)
    path = parts.path.rstrip("/")

    if ENTRY_ID_KEY in filters:
        if len(filters) > 1:
            raise InvalidQuery("entryID cannot be combined with other filters")
        entry_id = format_value(filters[ENTRY_ID_KEY])
        if not entry_id:
            raise InvalidQuery("entryID cannot be empty")
        path = f"{path}/{quote(entry_id, safe='')}"
        return urlunsplit(parts._replace(path=path))

    params = parse_qsl(parts.query, keep_blank_values=True)
    for key, value in filters.items():
        if key == CATEGORY_KEY and isinstance(value, (list, tuple)):
            categories = [quote(format_value(category), safe=CATEGORY_SAFE) for category in value]
            if not categories:
                continue
            path = "/".join([path, CATEGORY_PATH_MARKER, *categories])
        elif isinstance(value, (list, tuple)):
            raise InvalidQuery(f"Only 'category' accepts a list of values, got one for {key!r}")
        else:
            params.append((key, format_value(value)))

    url = urlunsplit(parts._replace(path=path, query=urlencode(params, safe=CATEGORY_SAFE)))
    logger.debug("Encoded feed query: %s", sanitize_url(url))
    return url


class EventQueryBuilder:
    """
    Builder pattern for constructing calendar feed queries with a fluent API.
    Provides a clean, readable way to build complex event queries.

    Example usage:
        events = (client.query()
            .search("meeting")
            .in_categories("Fritz", "Laurie")
            .starting_after(start)
            .limit(25)
            .execute())
    """

    def __init__(self, client: Optional["CalendarClient"] = None, base_url: Optional[str] = None):
        self._client = client
        self._base_url = base_url
        self._filters: Dict[str, Any] = {}

    def _set(self, key: str, value: Any) -> "EventQueryBuilder":
        self._filters[key] = value
        return self

    def search(self, text: str) -> "EventQueryBuilder":
        """
        Full-text search across entries.
        Args:
            text: Search terms
        Returns:
            Self for method chaining
        """
        return self._set("q", text)

    def in_categories(self, *categories: str) -> "EventQueryBuilder":
        """
        Require every given category (each may itself use '|' and a leading '-').
        Returns:
            Self for method chaining
        """
        return self._set(CATEGORY_KEY, list(categories))

    def category_expression(self, expression: str) -> "EventQueryBuilder":
        """Filter with a raw category expression such as 'Fritz|Laurie' or '-Fritz'."""
        return self._set(CATEGORY_KEY, expression)

    def by_author(self, author: str) -> "EventQueryBuilder":
        return self._set("author", author)

    def updated_after(self, min_date: datetime) -> "EventQueryBuilder":
        return self._set("updated-min", min_date)

    def updated_before(self, max_date: datetime) -> "EventQueryBuilder":
        return self._set("updated-max", max_date)

    def starting_after(self, min_date: datetime) -> "EventQueryBuilder":
        return self._set("start-min", min_date)

    def starting_before(self, max_date: datetime) -> "EventQueryBuilder":
        return self._set("start-max", max_date)

    def in_date_range(self, start: datetime, end: datetime) -> "EventQueryBuilder":
        """
        Only events starting within [start, end).
        Args:
            start: Earliest start
            end: Latest start
        Returns:
            Self for method chaining
        """
        if start >= end:
            raise InvalidQuery("Start date must be before end date")
        self._set("start-min", start)
        return self._set("start-max", end)

    def start_index(self, index: int) -> "EventQueryBuilder":
        return self._set("start-index", index)

    def limit(self, count: int) -> "EventQueryBuilder":
        """
        Set the maximum number of entries to retrieve.
        Args:
            count: Maximum number of entries
        Returns:
            Self for method chaining
        """
        if count < 1:
            raise InvalidQuery("Limit must be at least 1")
        return self._set("max-results", count)

    def entry(self, entry_id: str) -> "EventQueryBuilder":
        """Fetch a single entry by id; excludes every other filter."""
        return self._set(ENTRY_ID_KEY, entry_id)

    def with_param(self, name: str, value: Any) -> "EventQueryBuilder":
        """Pass through any other feed parameter unchanged."""
        return self._set(name, value)

    def to_filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    def build_url(self) -> str:
        base_url = self._base_url
        if base_url is None and self._client is not None:
            base_url = self._client.url
        if not base_url:
            raise InvalidQuery("No feed URL to query; log in or pass a url first")
        return encode_query(base_url, self._filters)

    def execute(self) -> List["Entry"]:
        """
        Execute the query and return the matching entries.
        Returns:
            List of Entry objects
        """
        if self._client is None:
            raise InvalidQuery("This query builder is not bound to a client")
        logger.info("Executing event query with builder")
        if self._base_url is not None:
            return self._client.get_feed(self.build_url())
        return self._client.get_events(self._filters)

    def first(self) -> Optional["Entry"]:
        if ENTRY_ID_KEY not in self._filters:
            self.limit(1)
        entries = self.execute()
        return entries[0] if entries else None

    def count(self) -> int:
        return len(self.execute())

    def exists(self) -> bool:
        return self.first() is not None
