# /app/services/calendar_helpers/ical_sync.py

"""
iCalendar (RFC 5545) interchange for professor calendars.

`CalendarSyncService` turns stored events into a VCALENDAR feed, stores the
feed on disk per professor, builds the public and third-party subscription
links, and reads external feeds back into `ExternalEvent` models.

The service holds no state besides its configuration. It is built per request
by `get_calendar_sync_service`, and tests construct it directly with a
temporary directory.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from icalendar import Calendar, Event, vCalAddress, vText

from ...core import config
from ...core.exceptions import InvalidInputError
from ...models.calendar_model import EventLocation, EventType, ExternalEvent
from .timing import END_OF_DAY

logger = logging.getLogger(__name__)

# Keyword -> internal event type. Checked in order; the first keyword found
# anywhere in the label wins.
EVENT_TYPE_KEYWORDS = [
    ("lecture", EventType.LECTURE),
    ("class", EventType.LECTURE),
    ("exam", EventType.EXAM),
    ("test", EventType.EXAM),
    ("quiz", EventType.QUIZ),
    ("assignment", EventType.ASSIGNMENT_DUE),
    ("project", EventType.PROJECT_DUE),
    ("office hours", EventType.OFFICE_HOURS),
    ("meeting", EventType.MEETING),
    ("sync", EventType.MEETING),
    ("standup", EventType.MEETING),
    ("conference", EventType.CONFERENCE),
    ("holiday", EventType.HOLIDAY),
    ("break", EventType.BREAK),
    ("deadline", EventType.DEADLINE),
    ("presentation", EventType.PRESENTATION),
    ("lab", EventType.LAB),
    ("seminar", EventType.SEMINAR),
    ("workshop", EventType.WORKSHOP),
]


def map_event_type(external_label: Optional[str]) -> EventType:
    """Maps a free-text category or title onto an internal event type."""
    label = (external_label or "").lower().replace("_", " ")
    for keyword, event_type in EVENT_TYPE_KEYWORDS:
        if keyword in label:
            return event_type
    return EventType.OTHER


def format_location(location: Optional[EventLocation]) -> str:
    """One-line rendering of a structured location, e.g. "Science Hall, 204, North"."""
    if location is None:
        return ""
    parts = [part for part in (location.building, location.room, location.campus) if part]
    if parts:
        return ", ".join(parts)
    if location.virtual is not None:
        return location.virtual.link or location.virtual.platform or ""
    return ""


def _first_category(component) -> Optional[str]:
    raw = component.get("categories")
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if raw is None:
        return None
    cats = getattr(raw, "cats", None)
    if cats is not None:
        return str(cats[0]) if cats else None
    return str(raw)


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise ValueError(f"Unsupported date value: {value!r}")


class CalendarSyncService:
    def __init__(self, data_dir, base_url: str, timezone_name: str, product_id: str):
        self.data_dir = Path(data_dir)
        self.base_url = base_url.rstrip("/")
        self.timezone_name = timezone_name
        self.product_id = product_id

    # --- Export ---

    def generate_icalendar(self, events: List, professor) -> str:
        """
        Serializes events into a single VCALENDAR, one VEVENT per event, with
        the professor as organizer. Timed events are written as stored; all-day
        events are written as DATE values with the exclusive next-day DTEND.
        """
        organizer_name = f"{professor.firstName} {professor.lastName}"

        calendar = Calendar()
        calendar.add("prodid", self.product_id)
        calendar.add("version", "2.0")
        calendar.add("x-wr-calname", f"{organizer_name}'s Class Schedule")
        calendar.add("x-wr-timezone", self.timezone_name)

        stamp = datetime.now(timezone.utc)
        for event in events:
            vevent = Event()
            vevent.add("uid", str(event.id))
            vevent.add("dtstamp", stamp)
            if event.isAllDay:
                vevent.add("dtstart", event.startDateTime.date())
                vevent.add("dtend", event.endDateTime.date() + timedelta(days=1))
            else:
                vevent.add("dtstart", event.startDateTime)
                vevent.add("dtend", event.endDateTime)
            vevent.add("summary", event.title)
            if event.description:
                vevent.add("description", event.description)
            location = format_location(event.location)
            if location:
                vevent.add("location", location)
            vevent.add("status", "CONFIRMED")
            vevent.add("categories", [event.eventType.value])

            organizer = vCalAddress(f"mailto:{professor.email}")
            organizer.params["cn"] = vText(organizer_name)
            vevent["organizer"] = organizer

            calendar.add_component(vevent)

        return calendar.to_ical().decode("utf-8")

    def file_path_for(self, professor_id: str) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / f"{professor_id}.ics"

    def save_icalendar(self, ical_content: str, professor_id: str) -> Path:
        file_path = self.file_path_for(professor_id)
        file_path.write_text(ical_content, encoding="utf-8")
        logger.info(f"Saved calendar feed for professor {professor_id} to {file_path}")
        return file_path

    def public_url(self, professor_id: str) -> str:
        return f"{self.base_url}/public/calendar/ical/{professor_id}"

    @staticmethod
    def google_calendar_link(ical_url: str) -> str:
        return f"https://calendar.google.com/calendar/r?cid={quote(ical_url, safe='')}"

    @staticmethod
    def outlook_calendar_link(ical_url: str) -> str:
        return f"https://outlook.office.com/calendar/addcalendar?url={quote(ical_url, safe='')}&name=Class+Schedule"

    # --- Import ---

    def parse_icalendar(self, ical_content: str) -> List[ExternalEvent]:
        """
        Reads every VEVENT in the feed. Other component types are ignored,
        and a VEVENT that cannot be read is logged and skipped without
        affecting the rest.

        Raises:
            InvalidInputError: if the text is not iCalendar data at all.
        """
        try:
            components = Calendar.from_ical(ical_content, multiple=True)
        except ValueError as e:
            raise InvalidInputError(f"Could not parse iCalendar content: {e}")

        events = []
        for component in components:
            for vevent in component.walk("VEVENT"):
                try:
                    events.append(self._external_event_from(vevent))
                except (ValueError, TypeError, AttributeError, KeyError) as e:
                    logger.warning(f"Skipping unreadable VEVENT {vevent.get('uid', '<no uid>')}: {e}")
        return events

    def _external_event_from(self, vevent) -> ExternalEvent:
        dtstart = vevent.get("dtstart")
        if dtstart is None:
            raise ValueError("VEVENT has no DTSTART")

        raw_start = dtstart.dt
        is_all_day = not isinstance(raw_start, datetime)
        start = _as_datetime(raw_start)

        end = None
        dtend = vevent.get("dtend")
        duration = vevent.get("duration")
        if dtend is not None:
            raw_end = dtend.dt
            if is_all_day and not isinstance(raw_end, datetime):
                # DTEND of an all-day event is exclusive: the next day.
                last_day = max(raw_end - timedelta(days=1), raw_start)
                end = datetime.combine(last_day, END_OF_DAY)
            else:
                end = _as_datetime(raw_end)
        elif duration is not None:
            end = start + vevent.decoded("duration")
        elif is_all_day:
            end = datetime.combine(raw_start, END_OF_DAY)

        uid = vevent.get("uid")
        return ExternalEvent(
            title=str(vevent.get("summary", "")) or "Untitled event",
            description=str(vevent.get("description", "")),
            startDateTime=start,
            endDateTime=end,
            isAllDay=is_all_day,
            location=str(vevent.get("location", "")),
            eventType=map_event_type(_first_category(vevent) or "other"),
            isRecurring=vevent.get("rrule") is not None,
            externalId=str(uid) if uid is not None else None,
        )


def get_calendar_sync_service() -> CalendarSyncService:
    """FastAPI dependency that builds the sync service from configuration."""
    return CalendarSyncService(
        data_dir=config.CALENDAR_DATA_DIR,
        base_url=config.PUBLIC_BASE_URL,
        timezone_name=config.CALENDAR_TIMEZONE,
        product_id=config.CALENDAR_PRODUCT_ID,
    )
