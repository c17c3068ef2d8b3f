# /app/services/calendar_service.py

"""
This service module is the business logic layer for the professor calendar:
event CRUD, the weekly schedule view, attendee RSVPs, analytics and
iCalendar import/export.

The time rules live in `calendar_helpers.timing`, attendee and status rules
in `calendar_helpers.attendees`, and the iCalendar format in
`calendar_helpers.ical_sync`. Attendee and status changes are read-modify-
write on a single event row; the row's version counter turns a write based on
a stale read into a `ConcurrentUpdateError`.
"""

import logging
import math
import uuid
from datetime import datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

import pandas as pd
from pydantic import ValidationError

from ..core import config
from ..core.exceptions import InvalidInputError, NotFoundError, PortalError
from ..models import calendar_model
from ..models.grade_model import Pagination
from .calendar_helpers import attendees, records, timing
from .calendar_helpers.ical_sync import CalendarSyncService
from .class_helpers import records as class_records
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _calendar_timezone() -> ZoneInfo:
    return ZoneInfo(config.CALENDAR_TIMEZONE)


def _ensure_owned_class(class_id: Optional[str], professor_id: str, db: DatabaseService) -> None:
    if class_id and db.get_class_by_id(class_id=class_id, professor_id=professor_id) is None:
        raise NotFoundError("Class not found")


def _get_event_row(event_id: str, professor_id: str, db: DatabaseService):
    row = db.get_event(event_id=event_id, professor_id=professor_id)
    if row is None:
        raise NotFoundError("Calendar event not found")
    return row


def _prepare_times(event):
    """Stores times as naive wall-clock values in the calendar timezone."""
    tz = _calendar_timezone()
    event.startDateTime = timing.to_local(event.startDateTime, tz)
    event.endDateTime = timing.to_local(event.endDateTime, tz)
    timing.normalize_all_day(event)
    timing.truncate_to_seconds(event)
    timing.validate_time_range(event.startDateTime, event.endDateTime)
    return event


# --- CRUD ---

def create_event(
    event_data: calendar_model.CalendarEventCreate,
    db: DatabaseService,
    professor_id: str,
    is_external: bool = False,
    external_id: Optional[str] = None,
) -> calendar_model.CalendarEvent:
    """
    Raises:
        NotFoundError: if `classId` is not one of the professor's classes.
        InvalidRangeError: if the event does not end after it starts.
    """
    _ensure_owned_class(event_data.classId, professor_id, db)
    event = _prepare_times(event_data.model_copy(deep=True))

    event_record = records.row_values_from_event(event)
    event_record.update({
        "id": f"evt_{uuid.uuid4().hex[:12]}",
        "professor_id": professor_id,
        "is_external": is_external,
        "external_id": external_id,
    })
    row = db.add_event(event_record)
    logger.info(f"Professor {professor_id} created {row.event_type} event {row.id}")
    return records.event_from_row(row)


def list_events(
    db: DatabaseService,
    professor_id: str,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    event_type: Optional[str] = None,
    class_id: Optional[str] = None,
    page: int = 1,
    limit: int = 50,
) -> calendar_model.CalendarEventListResponse:
    if page < 1 or limit < 1:
        raise InvalidInputError("Page and limit must be positive.")
    tz = _calendar_timezone()
    start_date = timing.to_local(start_date, tz) if start_date else None
    end_date = timing.to_local(end_date, tz) if end_date else None
    if start_date is not None and end_date is not None:
        timing.validate_time_range(start_date, end_date)
    rows, total = db.query_events(
        professor_id=professor_id, start_from=start_date, start_to=end_date,
        event_type=event_type, class_id=class_id, skip=(page - 1) * limit, limit=limit,
    )
    return calendar_model.CalendarEventListResponse(
        events=[records.event_from_row(row) for row in rows],
        pagination=Pagination(current=page, pages=math.ceil(total / limit), total=total, limit=limit),
    )


def get_upcoming_events(db: DatabaseService, professor_id: str, limit: int = 10) -> List[calendar_model.CalendarEvent]:
    rows, _ = db.query_events(
        professor_id=professor_id, start_from=datetime.now(),
        status=calendar_model.EventStatus.SCHEDULED.value, limit=limit,
    )
    return [records.event_from_row(row) for row in rows]


def get_event(event_id: str, professor_id: str, db: DatabaseService) -> calendar_model.CalendarEvent:
    return records.event_from_row(_get_event_row(event_id, professor_id, db))


def update_event(
    event_id: str,
    event_update: calendar_model.CalendarEventUpdate,
    db: DatabaseService,
    professor_id: str,
) -> calendar_model.CalendarEvent:
    """
    Merges a partial update onto the stored event. The merged event is
    re-normalized and its time range re-validated; a status change must be
    an allowed transition.
    """
    changes = event_update.model_dump(exclude_unset=True)
    if not changes:
        raise InvalidInputError("No update data provided.")

    current = records.event_from_row(_get_event_row(event_id, professor_id, db))
    if changes.get("status") is not None:
        attendees.validate_status_transition(current.status, changes["status"])
    if changes.get("classId") and changes["classId"] != current.classId:
        _ensure_owned_class(changes["classId"], professor_id, db)

    try:
        merged = calendar_model.CalendarEventBase.model_validate({
            **current.model_dump(include=set(calendar_model.CalendarEventBase.model_fields)),
            **changes,
        })
    except ValidationError as e:
        raise InvalidInputError(f"Invalid event update: {e.errors()[0]['msg']}")
    _prepare_times(merged)

    row = db.update_event(event_id=event_id, professor_id=professor_id, data=records.row_values_from_event(merged))
    return records.event_from_row(row)


def delete_event(event_id: str, professor_id: str, db: DatabaseService) -> None:
    if not db.delete_event(event_id=event_id, professor_id=professor_id):
        raise NotFoundError("Calendar event not found")
    logger.info(f"Deleted calendar event {event_id}")


# --- Schedule & Attendees ---

def get_weekly_schedule(
    db: DatabaseService,
    professor_id: str,
    week_start: Optional[datetime] = None,
) -> calendar_model.WeeklySchedule:
    tz = _calendar_timezone()
    window_start, window_end = timing.week_bounds(timing.to_local(week_start or datetime.now(), tz))
    # One day of slack on both sides; the exact local-day window is applied in memory.
    rows, _ = db.query_events(
        professor_id=professor_id,
        start_from=window_start - timedelta(days=1),
        start_to=window_end + timedelta(days=1),
    )
    events = [records.event_from_row(row) for row in rows]
    return calendar_model.WeeklySchedule(
        weekStart=window_start,
        weekEnd=window_end,
        schedule=timing.weekly_schedule(events, window_start, tz),
    )


def add_attendees(
    event_id: str,
    student_ids: List[str],
    db: DatabaseService,
    professor_id: str,
) -> calendar_model.CalendarEvent:
    """
    Invites students to an event. Already-invited students are left as they are.

    Raises:
        NotFoundError: if the event or any of the students does not exist.
        ConcurrentUpdateError: if the event changed since it was read.
    """
    event = records.event_from_row(_get_event_row(event_id, professor_id, db))
    known = {row.id for row in db.get_students_by_ids(set(student_ids))}
    missing = [sid for sid in student_ids if sid not in known]
    if missing:
        raise NotFoundError(f"Student not found: {', '.join(sorted(set(missing)))}")

    added = attendees.add_attendees(event, student_ids)
    if not added:
        return event

    row = db.update_event(
        event_id=event_id, professor_id=professor_id,
        data={"attendees": [a.model_dump(mode="json") for a in event.attendees]},
    )
    logger.info(f"Invited {len(added)} student(s) to event {event_id}")
    return records.event_from_row(row)


def update_attendee_status(
    event_id: str,
    student_id: str,
    status,
    db: DatabaseService,
    professor_id: str,
) -> calendar_model.Attendee:
    event = records.event_from_row(_get_event_row(event_id, professor_id, db))
    attendee = attendees.set_attendee_status(event, student_id, status)
    db.update_event(
        event_id=event_id, professor_id=professor_id,
        data={"attendees": [a.model_dump(mode="json") for a in event.attendees]},
    )
    return attendee


# --- Analytics ---

def get_analytics(db: DatabaseService, professor_id: str, now: Optional[datetime] = None) -> calendar_model.CalendarAnalytics:
    """
    Counts for the current calendar month, broken down by event type (most
    frequent first) and by weekday of the start time.
    """
    now = now or datetime.now()
    month_start = timing.start_of_day(now.replace(day=1))
    next_month = (month_start + timedelta(days=32)).replace(day=1)
    month_end = timing.end_of_day(next_month - timedelta(days=1))

    month_rows, events_this_month = db.query_events(
        professor_id=professor_id, start_from=month_start, start_to=month_end, visible_only=False,
    )
    _, upcoming = db.query_events(
        professor_id=professor_id, start_from=now,
        status=calendar_model.EventStatus.SCHEDULED.value, visible_only=False,
    )

    df = pd.DataFrame(
        [{"eventType": row.event_type, "day": timing.day_name(row.start_date_time)} for row in month_rows],
        columns=["eventType", "day"],
    )
    by_type = df["eventType"].value_counts()
    by_day = df["day"].value_counts()

    return calendar_model.CalendarAnalytics(
        eventsThisMonth=events_this_month,
        upcomingEvents=upcoming,
        eventsByType=[calendar_model.TypeCount(eventType=str(k), count=int(v)) for k, v in by_type.items()],
        eventsByDay=[
            calendar_model.DayCount(day=day, count=int(by_day[day]))
            for day in timing.DAY_NAMES if day in by_day.index
        ],
    )


# --- iCalendar Sync ---

def build_icalendar_feed(professor_id: str, db: DatabaseService, sync_service: CalendarSyncService) -> str:
    """Renders all visible events of a professor as iCalendar text and stores the feed file."""
    professor_row = db.get_professor_by_id(professor_id)
    if professor_row is None:
        raise NotFoundError("Professor not found")

    rows, _ = db.query_events(professor_id=professor_id)
    events = [records.event_from_row(row) for row in rows]
    content = sync_service.generate_icalendar(events, class_records.professor_from_row(professor_row))
    sync_service.save_icalendar(content, professor_id)
    return content


def get_sync_links(professor_id: str, db: DatabaseService, sync_service: CalendarSyncService) -> calendar_model.CalendarSyncLinks:
    content = build_icalendar_feed(professor_id, db, sync_service)
    ical_url = sync_service.public_url(professor_id)
    return calendar_model.CalendarSyncLinks(
        icalUrl=ical_url,
        googleCalendarUrl=sync_service.google_calendar_link(ical_url),
        outlookCalendarUrl=sync_service.outlook_calendar_link(ical_url),
        eventCount=content.count("BEGIN:VEVENT"),
    )


def _event_create_from_external(external: calendar_model.ExternalEvent) -> calendar_model.CalendarEventCreate:
    # A timed event without DTEND or DURATION has no length and fails range validation.
    return calendar_model.CalendarEventCreate(
        title=external.title.strip()[:200] or "Untitled event",
        description=(external.description or None) and external.description[:1000],
        eventType=external.eventType,
        startDateTime=external.startDateTime,
        endDateTime=external.endDateTime or external.startDateTime,
        isAllDay=external.isAllDay,
        location=calendar_model.EventLocation(building=external.location) if external.location else None,
        recurrence=calendar_model.Recurrence(isRecurring=external.isRecurring),
    )


def import_icalendar(
    ical_content: str,
    db: DatabaseService,
    professor_id: str,
    sync_service: CalendarSyncService,
) -> calendar_model.CalendarImportResult:
    """
    Imports the VEVENTs of an external feed as the professor's events.

    Each event is validated on its own: invalid ones are counted as skipped,
    and events whose UID was imported before are counted as duplicates.
    """
    imported, skipped, duplicates = [], 0, 0
    seen = set()
    for external in sync_service.parse_icalendar(ical_content):
        if external.externalId:
            if external.externalId in seen or db.find_event_by_external_id(professor_id, external.externalId):
                duplicates += 1
                continue
            seen.add(external.externalId)
        try:
            event_data = _event_create_from_external(external)
            imported.append(create_event(
                event_data, db, professor_id, is_external=True, external_id=external.externalId
            ))
        except (PortalError, ValidationError) as e:
            skipped += 1
            logger.warning(f"Skipping imported event '{external.title}': {e}")

    logger.info(f"Imported {len(imported)} event(s) for professor {professor_id}; "
                f"{skipped} skipped, {duplicates} duplicate(s)")
    return calendar_model.CalendarImportResult(imported=imported, skipped=skipped, duplicates=duplicates)
