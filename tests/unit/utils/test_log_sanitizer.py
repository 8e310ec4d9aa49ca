"""
Unit tests for log sanitization utilities.

Tests the security features that prevent PII, tokens and session ids from being logged.
"""

import pytest
from gcal_feed.utils.log_sanitizer import (
    sanitize_email,
    sanitize_email_list,
    sanitize_title,
    sanitize_query,
    sanitize_token,
    sanitize_url,
    sanitize_for_logging
)


@pytest.mark.unit
class TestEmailSanitization:
    """Test email address sanitization."""

    def test_basic_email_sanitization(self):
        """Test basic email sanitization."""
        result = sanitize_email("user@example.com")
        assert result == "***@example.com (16 chars)"

    def test_invalid_email_sanitization(self):
        """Test invalid email handling."""
        assert sanitize_email("invalid-email") == "[invalid-email]"
        assert sanitize_email("") == "[invalid-email]"

    def test_attendee_list_sanitization(self):
        """Test attendee list sanitization."""
        emails = ["jo@example.com", "admin@company.org", "beth@example.com"]
        result = sanitize_email_list(emails)
        assert result == "[3 attendees from domains: company.org, example.com]"
        assert "jo" not in result

    def test_empty_email_list(self):
        assert sanitize_email_list([]) == "[]"
        assert sanitize_email_list(["invalid"]) == "[1 attendees from domains: ]"


@pytest.mark.unit
class TestTitleSanitization:
    """Test entry title sanitization."""

    def test_basic_title(self):
        assert sanitize_title("Tennis with Beth") == "'Tennis with Beth' (16 chars)"

    def test_long_title_is_truncated(self):
        result = sanitize_title("Quarterly planning with the whole family")
        assert result == "'Quarterly planning w...' (40 chars)"

    def test_empty_title(self):
        assert sanitize_title(None) == "[empty-title]"
        assert sanitize_title("") == "[empty-title]"


@pytest.mark.unit
class TestQuerySanitization:
    """Test full-text query sanitization."""

    def test_email_in_query(self):
        result = sanitize_query("from jo@example.com")
        assert "jo@example.com" not in result
        assert "[EMAIL]" in result

    def test_phone_in_query(self):
        result = sanitize_query("call 555-123-4567")
        assert "[PHONE]" in result

    def test_long_query(self):
        result = sanitize_query("x" * 50)
        assert result == f"'{'x' * 30}...' (50 chars)"

    def test_empty_query(self):
        assert sanitize_query("") == "[empty-query]"


@pytest.mark.unit
class TestTokenSanitization:
    """Test token and URL sanitization."""

    def test_token(self):
        assert sanitize_token("DQAAAHoAAAB1234abcd") == "[token: ...abcd (19 chars)]"

    def test_short_token(self):
        assert sanitize_token("abc") == "[token: (3 chars)]"

    def test_missing_token(self):
        assert sanitize_token(None) == "[no-token]"

    def test_url_session_id_is_masked(self):
        url = "http://www.google.com/calendar/feeds/default/private/full?q=x&gsessionid=SECRET"
        result = sanitize_url(url)
        assert "SECRET" not in result
        assert result.endswith("?q=x&gsessionid=***")

    def test_url_without_query(self):
        url = "http://www.google.com/calendar/feeds/default/private/full"
        assert sanitize_url(url) == url
        assert sanitize_url(None) == "[no-url]"

    def test_category_operators_survive(self):
        url = "http://example.com/feed?category=Fritz|Laurie&token=abc"
        assert sanitize_url(url) == "http://example.com/feed?category=Fritz|Laurie&token=***"


@pytest.mark.unit
class TestSanitizeForLogging:
    """Test the multi-field helper."""

    def test_routes_fields(self):
        result = sanitize_for_logging(
            username="jo@example.com",
            query="Tennis",
            title="Tennis with Beth",
            url="http://example.com/feed?gsessionid=S",
            token="DQAAAHoAAAB1234abcd",
            count=3,
        )
        assert result["username"] == "***@example.com (14 chars)"
        assert result["query"] == "'Tennis' (6 chars)"
        assert result["title"] == "'Tennis with Beth' (16 chars)"
        assert result["url"] == "http://example.com/feed?gsessionid=***"
        assert result["token"] == "[token: ...abcd (19 chars)]"
        assert result["count"] == 3

    def test_missing_query(self):
        assert sanitize_for_logging(query=None) == {"query": None}
