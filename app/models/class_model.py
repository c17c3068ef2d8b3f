# /app/models/class_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .student_model import Student

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


# --- Core Enumerations ---
class Semester(str, Enum):
    FALL = "Fall"; SPRING = "Spring"; SUMMER = "Summer"; WINTER = "Winter"

class Weekday(str, Enum):
    MONDAY = "Monday"; TUESDAY = "Tuesday"; WEDNESDAY = "Wednesday"; THURSDAY = "Thursday"
    FRIDAY = "Friday"; SATURDAY = "Saturday"; SUNDAY = "Sunday"

class EnrollmentStatus(str, Enum):
    ENROLLED = "enrolled"
    DROPPED = "dropped"
    COMPLETED = "completed"

class AnnouncementPriority(str, Enum):
    LOW = "low"; MEDIUM = "medium"; HIGH = "high"


# --- Embedded Documents ---

class ClassLocation(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    building: Optional[str] = None
    room: Optional[str] = None
    campus: Optional[str] = None

class ClassSchedule(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    days: List[Weekday] = Field(default_factory=list)
    startTime: str = Field(..., pattern=TIME_PATTERN, description="Start time in HH:MM format.")
    endTime: str = Field(..., pattern=TIME_PATTERN, description="End time in HH:MM format.")
    location: ClassLocation = Field(default_factory=ClassLocation)

class Enrollment(BaseModel):
    """A student's participation record in a class."""
    model_config = ConfigDict(from_attributes=True)
    student: str = Field(..., description="The ID of the enrolled student.")
    enrollmentDate: datetime = Field(default_factory=datetime.now)
    status: EnrollmentStatus = EnrollmentStatus.ENROLLED

class RequiredBook(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    edition: Optional[str] = None

class GradingPolicy(BaseModel):
    attendance: float = Field(default=10, ge=0, le=100)
    assignments: float = Field(default=30, ge=0, le=100)
    midterm: float = Field(default=25, ge=0, le=100)
    final: float = Field(default=35, ge=0, le=100)

class Syllabus(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    objectives: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    requiredBooks: List[RequiredBook] = Field(default_factory=list)
    gradingPolicy: GradingPolicy = Field(default_factory=GradingPolicy)

class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM
    expiryDate: Optional[datetime] = None

class Announcement(AnnouncementCreate):
    model_config = ConfigDict(from_attributes=True)
    publishDate: datetime = Field(default_factory=datetime.now)


# --- API Contract Models ---

class ClassBase(BaseModel):
    className: str = Field(..., min_length=1, max_length=100)
    courseCode: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = Field(default=None, max_length=1000)
    semester: Semester
    year: int = Field(..., ge=2000, le=2100)
    credits: int = Field(..., ge=1, le=10)
    schedule: ClassSchedule
    maxEnrollment: int = Field(default=30, ge=1)
    syllabus: Optional[Syllabus] = None

    @field_validator("courseCode")
    @classmethod
    def normalize_course_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Course code cannot be blank.")
        return v

    @field_validator("className")
    @classmethod
    def strip_class_name(cls, v: str) -> str:
        return v.strip()

class ClassCreate(ClassBase):
    pass

class ClassUpdate(BaseModel):
    """All fields are optional to allow for partial updates."""
    className: Optional[str] = Field(default=None, min_length=1, max_length=100)
    courseCode: Optional[str] = Field(default=None, min_length=1, max_length=20)
    description: Optional[str] = Field(default=None, max_length=1000)
    semester: Optional[Semester] = None
    year: Optional[int] = Field(default=None, ge=2000, le=2100)
    credits: Optional[int] = Field(default=None, ge=1, le=10)
    schedule: Optional[ClassSchedule] = None
    maxEnrollment: Optional[int] = Field(default=None, ge=1)
    syllabus: Optional[Syllabus] = None
    isActive: Optional[bool] = None

    @field_validator("courseCode")
    @classmethod
    def normalize_course_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v is not None else v

class Class(ClassBase):
    """
    The full representation of a class as returned by the API. The three
    derived fields are computed by the class service on every read.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    professorId: str
    enrolledStudents: List[Enrollment] = Field(default_factory=list)
    announcements: List[Announcement] = Field(default_factory=list)
    isActive: bool = True
    currentEnrollment: int = 0
    availableSpots: int = 0
    displayName: str = ""

class RosterEntry(BaseModel):
    enrollment: Enrollment
    student: Optional[Student] = None

class ClassRoster(BaseModel):
    classId: str
    displayName: str
    currentEnrollment: int
    availableSpots: int
    roster: List[RosterEntry]

class EnrollRequest(BaseModel):
    studentId: str = Field(..., min_length=1, description="The ID of the student to enroll.")

class EnrollmentStatusUpdate(BaseModel):
    status: EnrollmentStatus
