# /app/routers/public_router.py

from fastapi import APIRouter, Depends, Response

from ..services import calendar_service
from ..services.calendar_helpers.ical_sync import CalendarSyncService, get_calendar_sync_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/calendar/ical/{professor_id}",
    summary="Subscribe to a Professor's Calendar",
    tags=["Public"]
)
def get_public_calendar_feed(
    professor_id: str,
    db: DatabaseService = Depends(get_db_service),
    sync_service: CalendarSyncService = Depends(get_calendar_sync_service),
):
    """
    An unauthenticated iCalendar feed that Google Calendar, Outlook and other
    clients poll through the subscription links.
    """
    content = calendar_service.build_icalendar_feed(professor_id=professor_id, db=db, sync_service=sync_service)
    return Response(content=content, media_type="text/calendar")
