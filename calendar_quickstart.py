"""
Quickstart: log in, add an event, change it, then remove it again.

Set GCAL_USERNAME and GCAL_PASSWORD (or GCAL_FEED_URL for a read-only
private feed) before running.
"""

import logging
from datetime import timedelta

from gcal_feed import CalendarClient, Entry, GCalFeedError
from gcal_feed.utils.datetime import current_datetime_local_timezone


def main():
    logging.basicConfig(level=logging.INFO)
    client = CalendarClient.from_env()

    for event in client.get_events(max_results=10):
        print(f"{event.title}: {event.when}")

    if not client.session.is_authenticated:
        return

    start = current_datetime_local_timezone().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
    entry = Entry()
    entry.title = "Quickstart event"
    entry.content = "Created by calendar_quickstart.py"
    entry.location = "Somewhere"
    entry.set_when(start, start + timedelta(hours=1))

    try:
        client.add_entry(entry)
        print(f"Added {entry.id}")

        entry.title = "Quickstart event (updated)"
        client.update_entry(entry)
        print(f"Updated {entry.title}")

        client.delete_entry(entry)
        print("Deleted")
    except GCalFeedError as e:
        print(f"Calendar error: {e}")


if __name__ == "__main__":
    main()
