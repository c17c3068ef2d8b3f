# /app/models/calendar_model.py

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .grade_model import Pagination

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"


# --- Core Enumerations ---
class EventType(str, Enum):
    LECTURE = "lecture"
    EXAM = "exam"
    QUIZ = "quiz"
    ASSIGNMENT_DUE = "assignment_due"
    PROJECT_DUE = "project_due"
    OFFICE_HOURS = "office_hours"
    MEETING = "meeting"
    CONFERENCE = "conference"
    HOLIDAY = "holiday"
    BREAK = "break"
    DEADLINE = "deadline"
    PRESENTATION = "presentation"
    LAB = "lab"
    SEMINAR = "seminar"
    WORKSHOP = "workshop"
    OTHER = "other"

class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"

class EventPriority(str, Enum):
    LOW = "low"; MEDIUM = "medium"; HIGH = "high"; URGENT = "urgent"

class AttendeeStatus(str, Enum):
    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    TENTATIVE = "tentative"

class RecurrencePattern(str, Enum):
    DAILY = "daily"; WEEKLY = "weekly"; MONTHLY = "monthly"; YEARLY = "yearly"

class ReminderType(str, Enum):
    EMAIL = "email"; NOTIFICATION = "notification"; SMS = "sms"


# --- Embedded Documents ---

class VirtualLocation(BaseModel):
    platform: Optional[str] = None
    link: Optional[str] = None
    meetingId: Optional[str] = None
    password: Optional[str] = None

class EventLocation(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    building: Optional[str] = None
    room: Optional[str] = None
    campus: Optional[str] = None
    virtual: Optional[VirtualLocation] = None

class Recurrence(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    isRecurring: bool = False
    pattern: RecurrencePattern = RecurrencePattern.WEEKLY
    interval: int = Field(default=1, ge=1)
    daysOfWeek: List[str] = Field(default_factory=list)
    endDate: Optional[datetime] = None
    occurrences: Optional[int] = Field(default=None, ge=1)

class Attendee(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    student: str
    status: AttendeeStatus = AttendeeStatus.INVITED

class Reminder(BaseModel):
    type: ReminderType = ReminderType.NOTIFICATION
    minutesBefore: int = Field(default=15, ge=0)
    isEnabled: bool = True

class Attachment(BaseModel):
    fileName: Optional[str] = None
    filePath: Optional[str] = None
    fileSize: Optional[int] = None
    mimeType: Optional[str] = None
    uploadedAt: datetime = Field(default_factory=datetime.now)


# --- API Contract Models ---

class CalendarEventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    classId: Optional[str] = None
    eventType: EventType
    startDateTime: datetime
    endDateTime: datetime
    isAllDay: bool = False
    location: Optional[EventLocation] = None
    recurrence: Recurrence = Field(default_factory=Recurrence)
    attendees: List[Attendee] = Field(default_factory=list)
    priority: EventPriority = EventPriority.MEDIUM
    status: EventStatus = EventStatus.SCHEDULED
    color: str = Field(default="#3498db", pattern=HEX_COLOR_PATTERN)
    reminders: List[Reminder] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=2000)
    isVisible: bool = True

class CalendarEventCreate(CalendarEventBase):
    pass

class CalendarEventUpdate(BaseModel):
    """All fields are optional to allow for partial updates."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    classId: Optional[str] = None
    eventType: Optional[EventType] = None
    startDateTime: Optional[datetime] = None
    endDateTime: Optional[datetime] = None
    isAllDay: Optional[bool] = None
    location: Optional[EventLocation] = None
    recurrence: Optional[Recurrence] = None
    priority: Optional[EventPriority] = None
    status: Optional[EventStatus] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    reminders: Optional[List[Reminder]] = None
    attachments: Optional[List[Attachment]] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    isVisible: Optional[bool] = None

class CalendarEvent(CalendarEventBase):
    model_config = ConfigDict(from_attributes=True)
    id: str
    professorId: str
    isExternal: bool = False
    externalId: Optional[str] = None
    durationMinutes: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class CalendarEventListResponse(BaseModel):
    events: List[CalendarEvent]
    pagination: Pagination

class WeeklySchedule(BaseModel):
    weekStart: datetime
    weekEnd: datetime
    schedule: Dict[str, List[CalendarEvent]]

class AttendeesAddRequest(BaseModel):
    studentIds: List[str]

class AttendeeStatusUpdate(BaseModel):
    status: AttendeeStatus

class ExternalEvent(BaseModel):
    """An event read from an iCalendar feed, before it is persisted."""
    title: str
    description: str = ""
    startDateTime: datetime
    endDateTime: Optional[datetime] = None
    isAllDay: bool = False
    location: str = ""
    eventType: EventType = EventType.OTHER
    isRecurring: bool = False
    externalId: Optional[str] = None

class CalendarImportResult(BaseModel):
    imported: List[CalendarEvent]
    skipped: int
    duplicates: int

class CalendarSyncLinks(BaseModel):
    icalUrl: str
    googleCalendarUrl: str
    outlookCalendarUrl: str
    eventCount: int

class TypeCount(BaseModel):
    eventType: str
    count: int

class DayCount(BaseModel):
    day: str
    count: int

class CalendarAnalytics(BaseModel):
    eventsThisMonth: int
    upcomingEvents: int
    eventsByType: List[TypeCount]
    eventsByDay: List[DayCount]

class CalendarImportRequest(BaseModel):
    icalContent: str = Field(..., min_length=1, description="Raw iCalendar (.ics) text.")
