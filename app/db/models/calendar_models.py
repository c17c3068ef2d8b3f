# /app/db/models/calendar_models.py

"""
SQLAlchemy ORM model for a professor's calendar event.
"""

from sqlalchemy import Column, String, Integer, Boolean, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class CalendarEvent(Base):
    """
    Attendees, location, recurrence, reminders and attachments are embedded
    documents stored as JSON.

    `version_id` is SQLAlchemy's optimistic concurrency counter. Two sessions
    that both read an event and then write it back cannot both succeed; the
    second flush raises `StaleDataError` instead of overwriting the first.
    """
    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    event_type = Column(String, index=True, nullable=False)
    start_date_time = Column(DateTime, index=True, nullable=False)
    end_date_time = Column(DateTime, nullable=False)
    is_all_day = Column(Boolean, nullable=False, default=False)
    location = Column(JSON, nullable=True)
    recurrence = Column(JSON, nullable=True)
    attendees = Column(JSON, nullable=False, default=list)
    priority = Column(String, nullable=False, default="medium")
    status = Column(String, index=True, nullable=False, default="scheduled")
    color = Column(String, nullable=False, default="#3498db")
    reminders = Column(JSON, nullable=False, default=list)
    attachments = Column(JSON, nullable=False, default=list)
    notes = Column(String, nullable=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    is_external = Column(Boolean, nullable=False, default=False)
    external_id = Column(String, index=True, nullable=True)
    version_id = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    professor_id = Column(String, ForeignKey("professors.id"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=True, index=True)

    class_ = relationship("Class")

    __mapper_args__ = {"version_id_col": version_id}
