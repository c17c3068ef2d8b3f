# /app/routers/calendar_router.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..core.deps import get_current_professor_id
from ..models import calendar_model
from ..services import calendar_service, database_service
from ..services.calendar_helpers.ical_sync import CalendarSyncService, get_calendar_sync_service

router = APIRouter()

# --- EVENT COLLECTION ENDPOINTS (/api/calendar/events) ---

@router.get("/events", response_model=calendar_model.CalendarEventListResponse, summary="List Calendar Events")
def list_events(
    startDate: Optional[datetime] = None,
    endDate: Optional[datetime] = None,
    eventType: Optional[calendar_model.EventType] = None,
    classId: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.list_events(
        db=db, professor_id=professor_id, start_date=startDate, end_date=endDate,
        event_type=eventType.value if eventType else None, class_id=classId, page=page, limit=limit,
    )

@router.get("/events/upcoming", response_model=List[calendar_model.CalendarEvent], summary="Get Upcoming Events")
def get_upcoming_events(
    limit: int = Query(default=10, ge=1, le=100),
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.get_upcoming_events(db=db, professor_id=professor_id, limit=limit)

@router.post("/events", response_model=calendar_model.CalendarEvent, status_code=status.HTTP_201_CREATED, summary="Create a Calendar Event")
def create_event(
    event_create: calendar_model.CalendarEventCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.create_event(event_data=event_create, db=db, professor_id=professor_id)

# --- INDIVIDUAL EVENT ENDPOINTS (/api/calendar/events/{event_id}) ---

@router.get("/events/{event_id}", response_model=calendar_model.CalendarEvent, summary="Get a Single Event")
def get_event(
    event_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.get_event(event_id=event_id, professor_id=professor_id, db=db)

@router.put("/events/{event_id}", response_model=calendar_model.CalendarEvent, summary="Update an Event")
def update_event(
    event_id: str,
    event_update: calendar_model.CalendarEventUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.update_event(event_id=event_id, event_update=event_update, db=db, professor_id=professor_id)

@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Event")
def delete_event(
    event_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    calendar_service.delete_event(event_id=event_id, professor_id=professor_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- ATTENDEE SUB-RESOURCE ENDPOINTS ---

@router.post("/events/{event_id}/attendees", response_model=calendar_model.CalendarEvent, summary="Invite Students to an Event")
def add_attendees(
    event_id: str,
    attendees_request: calendar_model.AttendeesAddRequest,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.add_attendees(
        event_id=event_id, student_ids=attendees_request.studentIds, db=db, professor_id=professor_id
    )

@router.put("/events/{event_id}/attendees/{student_id}/status", response_model=calendar_model.Attendee, summary="Update an Attendee's RSVP")
def update_attendee_status(
    event_id: str,
    student_id: str,
    status_update: calendar_model.AttendeeStatusUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.update_attendee_status(
        event_id=event_id, student_id=student_id, status=status_update.status, db=db, professor_id=professor_id
    )

# --- SCHEDULE & ANALYTICS ---

@router.get("/schedule/weekly", response_model=calendar_model.WeeklySchedule, summary="Get the Weekly Schedule")
def get_weekly_schedule(
    weekStart: Optional[datetime] = None,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.get_weekly_schedule(db=db, professor_id=professor_id, week_start=weekStart)

@router.get("/analytics", response_model=calendar_model.CalendarAnalytics, summary="Get Calendar Analytics")
def get_analytics(
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return calendar_service.get_analytics(db=db, professor_id=professor_id)

# --- ICALENDAR SYNC ---

@router.get("/export", summary="Download the Calendar as iCalendar")
def export_icalendar(
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
    sync_service: CalendarSyncService = Depends(get_calendar_sync_service),
):
    content = calendar_service.build_icalendar_feed(professor_id=professor_id, db=db, sync_service=sync_service)
    return Response(
        content=content, media_type="text/calendar",
        headers={"Content-Disposition": "attachment; filename=calendar.ics"},
    )

@router.get("/sync-links", response_model=calendar_model.CalendarSyncLinks, summary="Get Calendar Subscription Links")
def get_sync_links(
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
    sync_service: CalendarSyncService = Depends(get_calendar_sync_service),
):
    return calendar_service.get_sync_links(professor_id=professor_id, db=db, sync_service=sync_service)

@router.post("/import", response_model=calendar_model.CalendarImportResult, summary="Import Events from iCalendar")
def import_icalendar(
    import_request: calendar_model.CalendarImportRequest,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
    sync_service: CalendarSyncService = Depends(get_calendar_sync_service),
):
    return calendar_service.import_icalendar(
        ical_content=import_request.icalContent, db=db, professor_id=professor_id, sync_service=sync_service
    )
