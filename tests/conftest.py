import pytest
import sys
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from gcal_feed.clients.calendar.transport import HttpResponse


class FakeTransport:
    """Records every request and answers from a queue of canned responses."""

    def __init__(self, *responses):
        self.responses = deque(responses)
        self.requests = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, headers=None, data=None):
        self.requests.append({
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "data": data,
        })
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.popleft()

    @property
    def last(self):
        return self.requests[-1]


ENTRY_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<entry xmlns="http://www.w3.org/2005/Atom"
       xmlns:gd="http://schemas.google.com/g/2005"
       xmlns:gCal="http://schemas.google.com/gCal/2005">
  <id>http://www.google.com/calendar/feeds/user%40example.com/private/full/abc123</id>
  <published>2006-03-20T10:00:00.000Z</published>
  <updated>2006-03-21T11:30:00.000Z</updated>
  <category scheme="http://schemas.google.com/g/2005#kind" term="http://schemas.google.com/g/2005#event"/>
  <title type="text">Tennis with Beth</title>
  <content type="text">Meet for a quick lesson.</content>
  <link rel="alternate" type="text/html" href="http://www.google.com/calendar/event?eid=abc123"/>
  <link rel="self" type="application/atom+xml" href="http://www.google.com/calendar/feeds/user%40example.com/private/full/abc123"/>
  <link rel="edit" type="application/atom+xml" href="http://www.google.com/calendar/feeds/user%40example.com/private/full/abc123/63310109397"/>
  <author>
    <name>Jo March</name>
    <email>jo@example.com</email>
  </author>
  <gd:eventStatus value="http://schemas.google.com/g/2005#event.confirmed"/>
  <gd:transparency value="http://schemas.google.com/g/2005#event.opaque"/>
  <gd:visibility value="http://schemas.google.com/g/2005#event.default"/>
  <gd:where valueString="Rolling Lawn Courts"/>
  <gd:when startTime="2006-04-17T15:00:00.000Z" endTime="2006-04-17T17:00:00.000Z"/>
  <gd:who rel="http://schemas.google.com/g/2005#event.organizer" valueString="Jo March" email="jo@example.com"/>
  <gd:who rel="http://schemas.google.com/g/2005#event.attendee" valueString="Beth March"/>
</entry>
"""

FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:gd="http://schemas.google.com/g/2005"
      xmlns:gCal="http://schemas.google.com/gCal/2005">
  <id>http://www.google.com/calendar/feeds/user%40example.com/private/full</id>
  <title type="text">Jo March</title>
  <entry>
    <id>http://www.google.com/calendar/feeds/user%40example.com/private/full/first</id>
    <title type="text">First event</title>
    <link rel="edit" href="http://www.google.com/calendar/feeds/user%40example.com/private/full/first/1"/>
  </entry>
  <entry>
    <id>http://www.google.com/calendar/feeds/user%40example.com/private/full/second</id>
    <title type="text">Second event</title>
    <link rel="edit" href="http://www.google.com/calendar/feeds/user%40example.com/private/full/second/1"/>
  </entry>
</feed>
"""

CALENDARS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:gCal="http://schemas.google.com/gCal/2005">
  <id>http://www.google.com/calendar/feeds/default/allcalendars/full</id>
  <entry>
    <id>http://www.google.com/calendar/feeds/default/allcalendars/full/work%40example.com</id>
    <title type="text">Work</title>
    <summary type="text">Work meetings</summary>
    <link rel="edit" href="http://www.google.com/calendar/feeds/default/allcalendars/full/work%40example.com"/>
    <gCal:color value="#2952A3"/>
    <gCal:hidden value="false"/>
    <gCal:timezone value="Europe/London"/>
    <gCal:accesslevel value="owner"/>
  </entry>
</feed>
"""


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def entry_xml():
    return ENTRY_XML


@pytest.fixture
def feed_xml():
    return FEED_XML


@pytest.fixture
def calendars_xml():
    return CALENDARS_XML


@pytest.fixture
def ok_login_response():
    return HttpResponse(200, "OK", {}, b"SID=sid-value\nLSID=lsid-value\nAuth=DQAAAHoAAAB-token-value\n")


@pytest.fixture
def sample_start():
    """Sample timezone-aware start for testing."""
    return datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_end():
    """Sample timezone-aware end for testing."""
    return datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def transport_factory():
    """Build FakeTransports for tests that need more than one."""
    return FakeTransport
