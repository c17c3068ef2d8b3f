# /app/services/calendar_helpers/records.py

"""
Translation between `calendar_events` rows and the `CalendarEvent` API model.
"""

from typing import Dict

from ...db.models.calendar_models import CalendarEvent as CalendarEventRow
from ...models.calendar_model import (
    Attachment,
    Attendee,
    CalendarEvent,
    CalendarEventBase,
    EventLocation,
    Recurrence,
    Reminder,
)
from .timing import duration_minutes


def event_from_row(row: CalendarEventRow) -> CalendarEvent:
    return CalendarEvent(
        id=row.id,
        professorId=row.professor_id,
        classId=row.class_id,
        title=row.title,
        description=row.description,
        eventType=row.event_type,
        startDateTime=row.start_date_time,
        endDateTime=row.end_date_time,
        isAllDay=row.is_all_day,
        location=EventLocation.model_validate(row.location) if row.location else None,
        recurrence=Recurrence.model_validate(row.recurrence or {}),
        attendees=[Attendee.model_validate(a) for a in (row.attendees or [])],
        priority=row.priority,
        status=row.status,
        color=row.color,
        reminders=[Reminder.model_validate(r) for r in (row.reminders or [])],
        attachments=[Attachment.model_validate(a) for a in (row.attachments or [])],
        notes=row.notes,
        isVisible=row.is_visible,
        isExternal=row.is_external,
        externalId=row.external_id,
        durationMinutes=duration_minutes(row.start_date_time, row.end_date_time),
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


def row_values_from_event(event: CalendarEventBase) -> Dict:
    """Column values for the writable part of an event."""
    return {
        "class_id": event.classId,
        "title": event.title.strip(),
        "description": event.description,
        "event_type": event.eventType.value,
        "start_date_time": event.startDateTime,
        "end_date_time": event.endDateTime,
        "is_all_day": event.isAllDay,
        "location": event.location.model_dump(mode="json") if event.location else None,
        "recurrence": event.recurrence.model_dump(mode="json"),
        "attendees": [a.model_dump(mode="json") for a in event.attendees],
        "priority": event.priority.value,
        "status": event.status.value,
        "color": event.color,
        "reminders": [r.model_dump(mode="json") for r in event.reminders],
        "attachments": [a.model_dump(mode="json") for a in event.attachments],
        "notes": event.notes,
        "is_visible": event.isVisible,
    }
