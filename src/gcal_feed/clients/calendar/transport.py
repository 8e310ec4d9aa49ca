from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Union
import logging

import requests

from ...constants import DEFAULT_TIMEOUT
from ...exceptions import TransportError
from ...utils.log_sanitizer import sanitize_url

logger = logging.getLogger(__name__)

RequestBody = Union[bytes, Mapping[str, str], None]


@dataclass
class HttpResponse:
    """
    Transport-neutral HTTP response.
    Args:
        status: Numeric status code.
        reason: Reason phrase.
        headers: Response headers.
        body: Raw response body.
    """
    status: int
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.reason}".strip()

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class HttpTransport(Protocol):
    """Issues one HTTP request; redirects are never followed by the transport."""

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        data: RequestBody = None,
    ) -> HttpResponse: ...


class RequestsTransport:
    """HttpTransport over a requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def session(self) -> requests.Session:
        return self._session

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        data: RequestBody = None,
    ) -> HttpResponse:
        logger.debug("%s %s", method, sanitize_url(url))
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers or {}),
                data=data,
                timeout=self._timeout,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            raise TransportError(f"HTTP {method} failed: {e}") from e

        return HttpResponse(
            status=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers),
            body=response.content or b"",
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
