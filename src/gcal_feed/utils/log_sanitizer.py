"""
Log sanitization utilities to keep credentials and PII out of logs.

Usernames, search queries, auth tokens and session-bearing URLs pass through
these helpers before they reach a logger.
"""

import re
from typing import List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

SECRET_QUERY_PARAMS = ("gsessionid", "token", "auth", "key")


def sanitize_email(email: str) -> str:
    """
    Sanitize email address for logging by showing only domain and length.

    Args:
        email: Email address to sanitize

    Returns:
        Sanitized email representation

    Example:
        "user@example.com" -> "***@example.com (16 chars)"
    """
    if not email or '@' not in email:
        return "[invalid-email]"

    local_part, domain = email.split('@', 1)
    return f"***@{domain} ({len(email)} chars)"


def sanitize_email_list(emails: List[str]) -> str:
    """
    Sanitize list of email addresses, such as an attendee list, for logging.

    Args:
        emails: List of email addresses

    Returns:
        Sanitized representation of email list
    """
    if not emails:
        return "[]"

    domains = []
    for email in emails:
        if email and '@' in email:
            domains.append(email.split('@', 1)[1])

    return f"[{len(emails)} attendees from domains: {', '.join(sorted(set(domains)))}]"


def sanitize_title(title: Optional[str], max_preview_length: int = 20) -> str:
    """
    Sanitize an entry title for logging.

    Args:
        title: Entry title to sanitize
        max_preview_length: Maximum characters to show from the title

    Returns:
        Sanitized title representation
    """
    if not title:
        return "[empty-title]"

    preview = title[:max_preview_length]
    if len(title) > max_preview_length:
        preview += "..."

    return f"'{preview}' ({len(title)} chars)"


def sanitize_query(query: str, max_length: int = 30) -> str:
    """
    Sanitize full-text search query for logging by removing potential PII.

    Args:
        query: Search query to sanitize
        max_length: Maximum length to show

    Returns:
        Sanitized query representation
    """
    if not query:
        return "[empty-query]"

    sanitized = re.sub(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b',
                       '[EMAIL]', query)
    sanitized = re.sub(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b', '[PHONE]', sanitized)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."

    return f"'{sanitized}' ({len(query)} chars)"


def sanitize_token(token: Optional[str]) -> str:
    """
    Sanitize an auth or session token: only its tail and length survive.

    Example:
        "DQAAAHoAAAB1234abcd" -> "[token: ...abcd (19 chars)]"
    """
    if not token:
        return "[no-token]"
    if len(token) <= 8:
        return f"[token: ({len(token)} chars)]"
    return f"[token: ...{token[-4:]} ({len(token)} chars)]"


def sanitize_url(url: Optional[str]) -> str:
    """
    Mask secret query parameters (session ids, tokens) in a URL.

    Args:
        url: URL to sanitize

    Returns:
        The URL with secret parameter values replaced by '***'
    """
    if not url:
        return "[no-url]"

    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [
        (key, "***" if key.lower() in SECRET_QUERY_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(params, safe="*|")))


def sanitize_for_logging(**kwargs) -> dict:
    """
    Sanitize multiple fields for logging in one call.

    Args:
        **kwargs: Fields to sanitize (username, query, title, url, token, etc.)

    Returns:
        Dictionary with sanitized values
    """
    sanitized = {}

    for key, value in kwargs.items():
        if key in ('username', 'email', 'author') and isinstance(value, str):
            sanitized[key] = sanitize_email(value)
        elif key == 'attendees' and isinstance(value, list):
            sanitized[key] = sanitize_email_list(value)
        elif key in ('query', 'q'):
            sanitized[key] = sanitize_query(value) if value else None
        elif key == 'title':
            sanitized[key] = sanitize_title(value)
        elif key in ('url', 'location_header'):
            sanitized[key] = sanitize_url(value)
        elif key in ('token', 'session_id', 'password'):
            sanitized[key] = sanitize_token(value)
        else:
            # For other fields, just include as-is (non-PII data)
            sanitized[key] = value

    return sanitized
