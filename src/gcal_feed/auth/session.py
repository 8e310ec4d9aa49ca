"""
Authentication state for the calendar feed.

Two modes are supported: ClientLogin, which trades a username and password for
a token, and AuthSub-style delegated tokens obtained out of band. A delegated
token may also be a google-auth Credentials object, which is refreshed on
demand before its token is used.
"""

import enum
import logging
import re
from typing import Optional, Union, TYPE_CHECKING

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from ..constants import APP_NAME, CLIENT_LOGIN_URL, DEFAULT_ACCOUNT_TYPE, DEFAULT_SERVICE
from ..exceptions import AuthError
from ..utils.log_sanitizer import sanitize_for_logging

if TYPE_CHECKING:
    from ..clients.calendar.transport import HttpTransport

logger = logging.getLogger(__name__)

AUTH_TOKEN_PATTERN = re.compile(r"^Auth=(\S+)", re.MULTILINE)


class AuthMode(enum.Enum):
    CLIENT_LOGIN = "GoogleLogin"
    AUTHSUB = "AuthSub"


class AuthSession:
    """
    Holds the current credential and renders the Authorization header.

    Usage:
        session = AuthSession()
        session.login(transport, "user@gmail.com", "secret")
        headers["Authorization"] = session.authorization_header_value()
    """

    def __init__(self):
        self._token: Optional[Union[str, Credentials]] = None
        self._mode: Optional[AuthMode] = None
        self._username: Optional[str] = None

    @property
    def mode(self) -> Optional[AuthMode]:
        return self._mode

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def is_authenticated(self) -> bool:
        """True when a credential is stored that can produce a token."""
        token = self._token
        if isinstance(token, Credentials):
            return bool(token.token) or bool(token.refresh_token)
        return bool(token)

    def login(
        self,
        transport: "HttpTransport",
        username: str,
        password: str,
        service: str = DEFAULT_SERVICE,
        source: str = APP_NAME,
        account_type: str = DEFAULT_ACCOUNT_TYPE,
        login_url: str = CLIENT_LOGIN_URL,
    ) -> str:
        """
        Exchange a username and password for a ClientLogin token.

        Args:
            transport: HTTP transport used for the exchange request.
            username: Account email address.
            password: Account password.
            service: Service identifier ('cl' for calendar).
            source: Client application tag.
            account_type: GOOGLE, HOSTED or HOSTED_OR_GOOGLE.
            login_url: Credential exchange endpoint.

        Returns:
            The auth token.

        Raises:
            AuthError: If the exchange fails or no token is in the response.
                Existing session state is left untouched.
        """
        sanitized = sanitize_for_logging(username=username)
        logger.info("Logging in as %s", sanitized["username"])

        form = {
            "Email": username,
            "Passwd": password,
            "service": service,
            "source": source,
            "accountType": account_type,
        }
        response = transport.request(
            "POST",
            login_url,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data=form,
        )
        if not 200 <= response.status < 300:
            logger.warning("Login failed: %s", response.status_line)
            raise AuthError(response.status_line)

        match = AUTH_TOKEN_PATTERN.search(response.text)
        if not match:
            raise AuthError("Could not extract auth token from login response")

        self._token = match.group(1)
        self._mode = AuthMode.CLIENT_LOGIN
        self._username = username
        logger.info("Login succeeded for %s", sanitized["username"])
        return self._token

    def auth(self, username: str, token: Union[str, Credentials]) -> None:
        """
        Use a token obtained out of band.

        Args:
            username: Account the token belongs to.
            token: The token string, or google-auth Credentials carrying it.
                No check is made against the server; an empty token leaves
                the session unauthenticated.
        """
        self._token = token
        self._mode = AuthMode.AUTHSUB
        self._username = username
        logger.info("Using delegated token for %s", sanitize_for_logging(username=username)["username"])

    def clear(self) -> None:
        self._token = None
        self._mode = None
        self._username = None

    def _token_value(self) -> Optional[str]:
        token = self._token
        if isinstance(token, Credentials):
            if not token.valid and token.refresh_token:
                logger.info("Refreshing delegated credentials")
                try:
                    token.refresh(Request())
                except RefreshError as e:
                    raise AuthError(f"Could not refresh delegated credentials: {e}") from e
            return token.token
        return token

    def authorization_header_value(self) -> Optional[str]:
        """
        The Authorization header for the current credential.

        Returns:
            'GoogleLogin auth=<token>' or 'AuthSub token="<token>"', or None
            when no credential is stored.
        """
        token = self._token_value()
        if not token:
            return None
        if self._mode is AuthMode.AUTHSUB:
            return f'AuthSub token="{token}"'
        return f"GoogleLogin auth={token}"
