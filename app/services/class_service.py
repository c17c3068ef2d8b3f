# /app/services/class_service.py

"""
This service module acts as the primary business logic layer for classes,
their enrollment rosters and announcements.

It is a facade: the enrollment rules live in `class_helpers.enrollment`, row
translation in `class_helpers.records`, and persistence behind the
`DatabaseService`. Every function requires the `professor_id` of the caller,
so all operations are scoped to classes that professor owns.
"""

import logging
import uuid
from typing import List, Optional

import pandas as pd

from ..core.exceptions import InvalidInputError, NotFoundError
from ..models import class_model
from .calendar_helpers.timing import validate_class_schedule
from .class_helpers import enrollment, records
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

ROSTER_CSV_COLUMNS = ["Student ID", "First Name", "Last Name", "Email", "Status", "Enrollment Date", "Class"]


def _get_owned_class_row(class_id: str, professor_id: str, db: DatabaseService):
    row = db.get_class_by_id(class_id=class_id, professor_id=professor_id)
    if row is None:
        raise NotFoundError("Class not found")
    return row


# --- Facade Methods for CRUD Operations ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, professor_id: str) -> class_model.Class:
    """
    Creates a class owned by `professor_id`. The course code arrives already
    trimmed and upper-cased by the model.

    Raises:
        InvalidRangeError: if the schedule ends before it starts.
        DuplicateError: if the professor already has this course code in the
            same semester and year.
    """
    validate_class_schedule(class_data.schedule.startTime, class_data.schedule.endTime)

    class_record = records.row_values_from_class(class_data)
    class_record.update({
        "id": f"cls_{uuid.uuid4().hex[:12]}",
        "professor_id": professor_id,
        "enrolled_students": [],
        "announcements": [],
        "is_active": True,
    })
    row = db.add_class(class_record)
    logger.info(f"Professor {professor_id} created class {row.id} ({row.course_code})")
    return records.class_from_row(row)


def get_classes(
    professor_id: str,
    db: DatabaseService,
    semester: Optional[str] = None,
    year: Optional[int] = None,
    is_active: Optional[bool] = None,
) -> List[class_model.Class]:
    rows = db.get_classes(professor_id=professor_id, semester=semester, year=year, is_active=is_active)
    return [records.class_from_row(row) for row in rows]


def get_class(class_id: str, professor_id: str, db: DatabaseService) -> class_model.Class:
    return records.class_from_row(_get_owned_class_row(class_id, professor_id, db))


def update_class(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService,
    professor_id: str,
) -> class_model.Class:
    update_data = records.row_values_from_class(class_update, exclude_unset=True)
    if not update_data:
        raise InvalidInputError("No update data provided.")
    if class_update.schedule is not None:
        validate_class_schedule(class_update.schedule.startTime, class_update.schedule.endTime)

    row = db.update_class(class_id=class_id, professor_id=professor_id, data=update_data)
    if row is None:
        raise NotFoundError("Class not found")
    return records.class_from_row(row)


def delete_class(class_id: str, db: DatabaseService, professor_id: str) -> None:
    """Soft delete: the class is marked inactive and keeps its grades and roster."""
    row = db.update_class(class_id=class_id, professor_id=professor_id, data={"is_active": False})
    if row is None:
        raise NotFoundError("Class not found")
    logger.info(f"Professor {professor_id} deactivated class {class_id}")


# --- Enrollment ---

def enroll_student(class_id: str, student_id: str, db: DatabaseService, professor_id: str) -> class_model.Class:
    """
    Raises:
        NotFoundError: if the class or the student does not exist.
        AlreadyEnrolledError: if the student is already enrolled.
        ClassFullError: if the class has no available spots.
    """
    current = get_class(class_id, professor_id, db)
    if db.get_student_by_id(student_id) is None:
        raise NotFoundError("Student not found")

    roster = enrollment.enroll(current.enrolledStudents, student_id, current.maxEnrollment)
    row = db.update_class(
        class_id=class_id, professor_id=professor_id,
        data={"enrolled_students": records.enrollments_to_json(roster)},
    )
    logger.info(f"Enrolled student {student_id} in class {class_id}")
    return records.class_from_row(row)


def update_enrollment_status(
    class_id: str,
    student_id: str,
    status: class_model.EnrollmentStatus,
    db: DatabaseService,
    professor_id: str,
) -> class_model.Class:
    current = get_class(class_id, professor_id, db)
    roster = enrollment.set_enrollment_status(current.enrolledStudents, student_id, status, current.maxEnrollment)
    row = db.update_class(
        class_id=class_id, professor_id=professor_id,
        data={"enrolled_students": records.enrollments_to_json(roster)},
    )
    return records.class_from_row(row)


def add_announcement(
    class_id: str,
    announcement_data: class_model.AnnouncementCreate,
    db: DatabaseService,
    professor_id: str,
) -> class_model.Class:
    current = get_class(class_id, professor_id, db)
    announcement = class_model.Announcement(**announcement_data.model_dump())
    announcements = [a.model_dump(mode="json") for a in current.announcements]
    announcements.append(announcement.model_dump(mode="json"))
    row = db.update_class(class_id=class_id, professor_id=professor_id, data={"announcements": announcements})
    return records.class_from_row(row)


# --- Data Assembly & Export Logic ---

def get_roster(class_id: str, professor_id: str, db: DatabaseService) -> class_model.ClassRoster:
    """The class's enrollment entries, each populated with its student record."""
    current = get_class(class_id, professor_id, db)
    students = {
        row.id: records.student_from_row(row)
        for row in db.get_students_by_ids(e.student for e in current.enrolledStudents)
    }
    return class_model.ClassRoster(
        classId=current.id,
        displayName=current.displayName,
        currentEnrollment=current.currentEnrollment,
        availableSpots=current.availableSpots,
        roster=[
            class_model.RosterEntry(enrollment=e, student=students.get(e.student))
            for e in current.enrolledStudents
        ],
    )


def export_roster_as_csv(class_id: str, professor_id: str, db: DatabaseService) -> str:
    """Generates a CSV export of a class roster, one row per enrollment entry."""
    roster = get_roster(class_id, professor_id, db)

    export_data = [
        {
            "Student ID": entry.student.studentId if entry.student else entry.enrollment.student,
            "First Name": entry.student.firstName if entry.student else "",
            "Last Name": entry.student.lastName if entry.student else "",
            "Email": entry.student.email if entry.student else "",
            "Status": entry.enrollment.status.value,
            "Enrollment Date": entry.enrollment.enrollmentDate.date().isoformat(),
            "Class": roster.displayName,
        }
        for entry in roster.roster
    ]

    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=ROSTER_CSV_COLUMNS)
    return df.to_csv(index=False)
