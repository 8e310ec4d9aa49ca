"""Default endpoints, namespaces and protocol constants for the calendar feed."""

__version__ = "0.2.0"

APP_NAME = f"gcal-feed-client-{__version__}"

# Endpoints
FEEDS_BASE_URL = "https://www.google.com/calendar/feeds"
CLIENT_LOGIN_URL = "https://www.google.com/accounts/ClientLogin"

# ClientLogin protocol defaults
DEFAULT_SERVICE = "cl"
DEFAULT_ACCOUNT_TYPE = "HOSTED_OR_GOOGLE"

# Wire format
ATOM_CONTENT_TYPE = "application/atom+xml; charset=UTF-8"
METHOD_OVERRIDE_HEADER = "X-HTTP-Method-Override"
SESSION_ID_PARAM = "gsessionid"

# Request handling
MAX_REDIRECTS = 5
DEFAULT_TIMEOUT = 30

# XML namespaces
ATOM_NS = "http://www.w3.org/2005/Atom"
GD_NS = "http://schemas.google.com/g/2005"
GCAL_NS = "http://schemas.google.com/gCal/2005"

NSMAP = {
    None: ATOM_NS,
    "gd": GD_NS,
    "gCal": GCAL_NS,
}

# GData kinds and enumerations
KIND_SCHEME = "http://schemas.google.com/g/2005#kind"
EVENT_KIND = "http://schemas.google.com/g/2005#event"
EVENT_VALUE_PREFIX = "http://schemas.google.com/g/2005#event."
ATTENDEE_REL = "http://schemas.google.com/g/2005#event.attendee"
WEB_CONTENT_REL = "http://schemas.google.com/gCal/2005/webContent"

VALID_STATUSES = ("canceled", "confirmed", "tentative")
VALID_TRANSPARENCIES = ("opaque", "transparent")
VALID_VISIBILITIES = ("confidential", "default", "private", "public")

WEB_CONTENT_TYPES = ("text/html", "application/x-google-gadgets+xml")

# Feed projections
ALL_CALENDARS_PATH = "/allcalendars/full"
OWN_CALENDARS_PATH = "/owncalendars/full"
PRIVATE_FULL = "private/full"
