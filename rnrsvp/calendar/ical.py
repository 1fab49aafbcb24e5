"""iCalendar (.ics) export for a lunch date."""
import logging
import re
from datetime import UTC, date, datetime, timedelta

from rnrsvp.core.config import settings
from rnrsvp.models import MeetingSettings

logger = logging.getLogger(__name__)

TIMEZONE_ID = "America/New_York"
EVENT_DURATION = timedelta(minutes=90)
DEFAULT_TIME = (12, 0)

_time_pattern = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)?", re.IGNORECASE)

# US Eastern with the post-2007 DST rules, written out rather than computed
VTIMEZONE = [
    "BEGIN:VTIMEZONE",
    f"TZID:{TIMEZONE_ID}",
    "BEGIN:DAYLIGHT",
    "TZOFFSETFROM:-0500",
    "TZOFFSETTO:-0400",
    "TZNAME:EDT",
    "DTSTART:19700308T020000",
    "RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=2SU",
    "END:DAYLIGHT",
    "BEGIN:STANDARD",
    "TZOFFSETFROM:-0400",
    "TZOFFSETTO:-0500",
    "TZNAME:EST",
    "DTSTART:19701101T020000",
    "RRULE:FREQ=YEARLY;BYMONTH=11;BYDAY=1SU",
    "END:STANDARD",
    "END:VTIMEZONE",
]


def parse_meeting_time(text: str | None) -> tuple[int, int]:
    """
    Parse a loose "H:MM AM/PM" string into a 24-hour (hour, minute) pair.

    The first "H:MM" in the text wins and the AM/PM suffix is optional. 12 AM is
    hour 0, 12 PM stays 12, other PM hours get 12 added. Anything that does not
    parse to a real clock time falls back to noon, with a warning in the log.
    """
    match = _time_pattern.search(text or "")
    if not match:
        logger.warning(f"Unparseable meeting time {text!r}, defaulting to 12:00")
        return DEFAULT_TIME

    hour = int(match.group(1))
    minute = int(match.group(2))
    meridiem = (match.group(3) or "").upper()

    if meridiem == "PM" and hour != 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        logger.warning(f"Out of range meeting time {text!r}, defaulting to 12:00")
        return DEFAULT_TIME

    return hour, minute


def _format_local(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%S")


def _format_utc(dt: datetime) -> str:
    return dt.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


def event_uid(event_date: date) -> str:
    """Stable UID so re-importing the same date updates instead of duplicating."""
    return f"{settings.ical_filename_prefix}-{event_date:%Y%m%d}@rnrsvp"


def ical_filename(event_date: date) -> str:
    return f"{settings.ical_filename_prefix}-{event_date.isoformat()}.ics"


def build_ical(
    event_date: date,
    meeting: MeetingSettings,
    *,
    now: datetime | None = None,
) -> str:
    """Return ICS text for the lunch on event_date.

    Start and end are local wall-clock times anchored to America/New_York; the
    lunch lasts 90 minutes. Only DTSTAMP depends on the current time.
    """
    hour, minute = parse_meeting_time(meeting.meeting_time)
    start = datetime(event_date.year, event_date.month, event_date.day, hour, minute)
    end = start + EVENT_DURATION
    dtstamp = _format_utc(now or datetime.now(UTC))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{settings.app_name}//{settings.event_title}//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        *VTIMEZONE,
        "BEGIN:VEVENT",
        f"UID:{event_uid(event_date)}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART;TZID={TIMEZONE_ID}:{_format_local(start)}",
        f"DTEND;TZID={TIMEZONE_ID}:{_format_local(end)}",
        f"SUMMARY:{settings.event_title}",
        f"DESCRIPTION:{settings.event_title} on {event_date:%B} {event_date.day}. "
        f"Questions? Contact {meeting.organizer_email}",
        f"LOCATION:{meeting.location_name}, {meeting.location_address}",
        f"ORGANIZER:mailto:{meeting.organizer_email}",
        "STATUS:CONFIRMED",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"
