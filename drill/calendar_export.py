"""Export scheduled reviews to calendars.

Produces an iCalendar (RFC 5545) document or a Google Calendar template link.
Both are plain strings; delivering them is up to the caller.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from drill.constants import REVIEW_EVENT_MINUTES
from drill.models import ReviewSchedule

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
PRODUCT_ID = "-//Drill//Spaced Repetition//EN"

EVENT_TITLE = "Review session"
EVENT_DESCRIPTION = "Scheduled spaced repetition review"


@dataclass
class CalendarEvent:
    id: str
    title: str
    description: str
    start: datetime
    end: datetime
    url: str | None = None


def review_event(review: ReviewSchedule, app_url: str = "") -> CalendarEvent:
    """A fixed-length calendar event for one scheduled review."""
    start = review.scheduled_date
    return CalendarEvent(
        id=review.id,
        title=EVENT_TITLE,
        description=EVENT_DESCRIPTION,
        start=start,
        end=start + timedelta(minutes=REVIEW_EVENT_MINUTES),
        url=f"{app_url.rstrip('/')}/review/{review.item_id}" if app_url else None,
    )


def format_timestamp(value: datetime) -> str:
    """Format as UTC `YYYYMMDDTHHMMSSZ`. Naive datetimes are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%dT%H%M%SZ")


def escape_text(value: str) -> str:
    """Escape a TEXT property value."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def _event_lines(event: CalendarEvent, stamp: str) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.id}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{format_timestamp(event.start)}",
        f"DTEND:{format_timestamp(event.end)}",
        f"SUMMARY:{escape_text(event.title)}",
        f"DESCRIPTION:{escape_text(event.description)}",
    ]
    if event.url:
        lines.append(f"URL:{event.url}")
    lines.append("END:VEVENT")
    return lines


def generate_icalendar(
    reviews: list[ReviewSchedule],
    app_url: str = "",
    now: datetime | None = None,
) -> str:
    """Render reviews as an iCalendar document with CRLF line endings."""
    stamp = format_timestamp(now or datetime.now(timezone.utc))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for review in reviews:
        lines.extend(_event_lines(review_event(review, app_url), stamp))
    lines.append("END:VCALENDAR")

    return "\r\n".join(lines) + "\r\n"


def generate_google_calendar_url(reviews: list[ReviewSchedule], app_url: str = "") -> str:
    """Build a Google Calendar template link covering every review."""
    params: list[tuple[str, str]] = []
    for review in reviews:
        event = review_event(review, app_url)
        params.append(("action", "TEMPLATE"))
        params.append(("text", event.title))
        params.append(("details", event.description))
        params.append(("dates", f"{format_timestamp(event.start)}/{format_timestamp(event.end)}"))
        if event.url:
            params.append(("location", event.url))

    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
