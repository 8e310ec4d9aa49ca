"""
Authenticated request execution for the calendar feed.

Writes go out as POSTs (PUT and DELETE ride on X-HTTP-Method-Override unless
native verbs are enabled). The service may answer a request with a 302 whose
Location carries a gsessionid; that id is cached and attached to every later
request, and the same payload is replayed against the new location.
"""

from typing import Dict, Optional, TYPE_CHECKING
from urllib.parse import parse_qs, parse_qsl, urlencode, urljoin, urlsplit, urlunsplit
import logging

from ...auth.session import AuthSession
from ...constants import ATOM_CONTENT_TYPE, MAX_REDIRECTS, METHOD_OVERRIDE_HEADER, SESSION_ID_PARAM
from ...exceptions import (
    NotAuthenticated, RequestFailed, CalendarPermissionError, EntryNotFoundError, TooManyRedirects,
)
from ...utils.log_sanitizer import sanitize_for_logging, sanitize_url
from .transport import HttpResponse, HttpTransport

if TYPE_CHECKING:
    from .entry import Entry

logger = logging.getLogger(__name__)

WRITE_METHODS = ("POST", "PUT", "DELETE")


def with_session_id(url: str, session_id: str) -> str:
    """Set the gsessionid query parameter on a URL, replacing any existing one."""
    parts = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != SESSION_ID_PARAM]
    params.append((SESSION_ID_PARAM, session_id))
    return urlunsplit(parts._replace(query=urlencode(params, safe="|")))


def extract_session_id(url: str) -> Optional[str]:
    values = parse_qs(urlsplit(url).query).get(SESSION_ID_PARAM)
    return values[0] if values else None


def raise_for_status(response: HttpResponse) -> None:
    """Map a non-success response onto the RequestFailed family."""
    if 200 <= response.status < 300:
        return
    if response.status in (401, 403):
        raise CalendarPermissionError(response.status, response.reason, response.body)
    if response.status == 404:
        raise EntryNotFoundError(response.status, response.reason, response.body)
    raise RequestFailed(response.status, response.reason, response.body)


class RequestPipeline:
    """
    Executes feed reads and entry writes with auth and session affinity.

    Args:
        transport: The HTTP transport.
        session: Authentication state supplying the Authorization header.
        use_method_override: Send PUT/DELETE as POST + X-HTTP-Method-Override.
        max_redirects: How many session redirects to follow per request.
        mutate_entries: Make the caller's entry adopt the server's response.
    """

    def __init__(
        self,
        transport: HttpTransport,
        session: AuthSession,
        use_method_override: bool = True,
        max_redirects: int = MAX_REDIRECTS,
        mutate_entries: bool = True,
    ):
        self._transport = transport
        self._session = session
        self.use_method_override = use_method_override
        self.max_redirects = max_redirects
        self.mutate_entries = mutate_entries
        self.session_id: Optional[str] = None
        self.force_no_session_id = False

    def _headers(self) -> Dict[str, str]:
        headers = {}
        auth = self._session.authorization_header_value()
        if auth:
            headers["Authorization"] = auth
        return headers

    def _prepare_url(self, url: str) -> str:
        if self.session_id and not self.force_no_session_id:
            return with_session_id(url, self.session_id)
        return url

    def _send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes]) -> HttpResponse:
        """Issue a request, following session redirects up to the ceiling."""
        url = self._prepare_url(url)
        for _ in range(self.max_redirects + 1):
            response = self._transport.request(method, url, headers=headers, data=body)
            if response.status != 302:
                return response

            location = response.header("Location")
            if not location:
                raise RequestFailed(response.status, response.reason, response.body,
                                    message="Redirect without a Location header")
            url = urljoin(url, location)
            session_id = extract_session_id(url)
            if session_id:
                self.session_id = session_id
            logger.info("Following session redirect to %s", sanitize_url(url))

        logger.warning("Giving up after %d redirects", self.max_redirects)
        raise TooManyRedirects(302, "Found", b"", message=f"Exceeded {self.max_redirects} redirects")

    def fetch(self, url: str) -> bytes:
        """
        GET a feed or entry document.
        Returns:
            The response body.
        Raises:
            RequestFailed: On any non-success response.
        """
        response = self._send("GET", url, self._headers(), None)
        raise_for_status(response)
        return response.body

    def execute(self, entry: "Entry", url: str, method: str) -> "Entry":
        """
        Send an entry to the service.

        Args:
            entry: The entry to serialize and send.
            url: Target URL (the feed for POST, the edit url otherwise).
            method: POST, PUT or DELETE.

        Returns:
            The entry parsed from the response, or the original entry when
            the response has no body (the normal answer to a delete). With
            mutate_entries on, the original entry adopts the response and is
            returned.

        Raises:
            NotAuthenticated: If there is no credential.
            RequestFailed: On any non-success response.
        """
        method = method.upper()
        if method not in WRITE_METHODS:
            raise ValueError(f"Unsupported write method: {method}")
        if not self._session.is_authenticated:
            raise NotAuthenticated(f"Must be logged in to {method} entries")

        headers = self._headers()
        headers["Content-Type"] = ATOM_CONTENT_TYPE
        http_method = method
        if method != "POST" and self.use_method_override:
            headers[METHOD_OVERRIDE_HEADER] = method
            http_method = "POST"

        sanitized = sanitize_for_logging(url=url, title=entry.title)
        logger.info("%s entry %s to %s", method, sanitized["title"], sanitized["url"])

        response = self._send(http_method, url, headers, entry.to_xml())
        raise_for_status(response)

        if not response.body.strip():
            return entry

        result = type(entry).from_xml(response.body, recurrence_codec=entry.recurrence_codec)
        if self.mutate_entries:
            entry.replace_with(result)
            return entry
        return result
