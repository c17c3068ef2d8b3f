# /app/services/database_helpers/calendar_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the CalendarEvent
table. Every method is scoped to the owning professor.

Updates go through the ORM so the row's version counter is checked; a write
based on a stale read surfaces as `ConcurrentUpdateError`.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from app.db.models.calendar_models import CalendarEvent
from .base_repository_sql import BaseRepositorySQL


class CalendarRepositorySQL(BaseRepositorySQL):

    def add_event(self, record: Dict) -> CalendarEvent:
        return self._add(CalendarEvent(**record))

    def get_event(self, event_id: str, professor_id: str) -> Optional[CalendarEvent]:
        return (
            self.db.query(CalendarEvent)
            .filter(CalendarEvent.id == event_id, CalendarEvent.professor_id == professor_id)
            .first()
        )

    def find_event_by_external_id(self, professor_id: str, external_id: str) -> Optional[CalendarEvent]:
        return (
            self.db.query(CalendarEvent)
            .filter(CalendarEvent.professor_id == professor_id, CalendarEvent.external_id == external_id)
            .first()
        )

    def query_events(
        self,
        professor_id: str,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
        event_type: Optional[str] = None,
        class_id: Optional[str] = None,
        status: Optional[str] = None,
        visible_only: bool = True,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[CalendarEvent], int]:
        """Filtered listing ordered by start time. Returns the page and the total match count."""
        query = self.db.query(CalendarEvent).filter(CalendarEvent.professor_id == professor_id)
        if visible_only:
            query = query.filter(CalendarEvent.is_visible.is_(True))
        if start_from is not None:
            query = query.filter(CalendarEvent.start_date_time >= start_from)
        if start_to is not None:
            query = query.filter(CalendarEvent.start_date_time <= start_to)
        if event_type:
            query = query.filter(CalendarEvent.event_type == event_type)
        if class_id:
            query = query.filter(CalendarEvent.class_id == class_id)
        if status:
            query = query.filter(CalendarEvent.status == status)

        total = query.count()
        query = query.order_by(CalendarEvent.start_date_time.asc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all(), total

    def update_event(self, event_id: str, professor_id: str, data: Dict) -> Optional[CalendarEvent]:
        db_event = self.get_event(event_id=event_id, professor_id=professor_id)
        if db_event is None:
            return None
        return self._apply(db_event, data)

    def delete_event(self, event_id: str, professor_id: str) -> bool:
        db_event = self.get_event(event_id=event_id, professor_id=professor_id)
        if db_event is None:
            return False
        self.db.delete(db_event)
        self._commit()
        return True
