# /app/services/student_service.py

"""
Business logic for student records and professor profiles.

Students are shared across professors, so lookups are global. Listing by
class is the one scoped operation: it goes through a class the caller owns.
"""

import logging
import uuid
from typing import List, Optional

from ..core.exceptions import DuplicateError, InvalidInputError, NotFoundError
from ..models import professor_model, student_model
from ..models.class_model import EnrollmentStatus
from .class_helpers import records
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Students ---

def create_student(student_data: student_model.StudentCreate, db: DatabaseService) -> student_model.Student:
    """
    Raises:
        DuplicateError: if the institution-issued student ID is already taken.
    """
    if db.get_student_by_student_number(student_data.studentId) is not None:
        raise DuplicateError("A student with this student ID already exists")

    student_record = records.row_values_from_student(student_data)
    student_record["id"] = f"stu_{uuid.uuid4().hex[:12]}"
    student_record["is_active"] = True
    row = db.add_student(student_record)
    logger.info(f"Created student {row.id} ({row.student_number})")
    return records.student_from_row(row)


def get_students(
    db: DatabaseService,
    professor_id: str,
    search: Optional[str] = None,
    class_id: Optional[str] = None,
    include_inactive: bool = False,
) -> List[student_model.Student]:
    """
    Lists students, optionally narrowed by a search term and to the students
    currently enrolled in one of the caller's classes.
    """
    rows = db.get_students(search=search, include_inactive=include_inactive)
    if class_id:
        class_row = db.get_class_by_id(class_id=class_id, professor_id=professor_id)
        if class_row is None:
            raise NotFoundError("Class not found")
        enrolled_ids = {
            e["student"] for e in (class_row.enrolled_students or [])
            if e.get("status") == EnrollmentStatus.ENROLLED.value
        }
        rows = [row for row in rows if row.id in enrolled_ids]
    return [records.student_from_row(row) for row in rows]


def get_student(student_id: str, db: DatabaseService) -> student_model.Student:
    row = db.get_student_by_id(student_id)
    if row is None:
        raise NotFoundError("Student not found")
    return records.student_from_row(row)


def update_student(
    student_id: str,
    student_update: student_model.StudentUpdate,
    db: DatabaseService,
) -> student_model.Student:
    update_data = records.row_values_from_student(student_update, exclude_unset=True)
    if not update_data:
        raise InvalidInputError("No update data provided.")
    if "email" in update_data and update_data["email"]:
        update_data["email"] = update_data["email"].strip().lower()

    row = db.update_student(student_id, update_data)
    if row is None:
        raise NotFoundError("Student not found")
    return records.student_from_row(row)


def delete_student(student_id: str, db: DatabaseService) -> None:
    """Soft delete. Enrollment entries referring to the student are left as they are."""
    row = db.update_student(student_id, {"is_active": False})
    if row is None:
        raise NotFoundError("Student not found")
    logger.info(f"Deactivated student {student_id}")


# --- Professors ---

def create_professor(professor_data: professor_model.ProfessorCreate, db: DatabaseService) -> professor_model.Professor:
    professor_record = records.row_values_from_professor(professor_data)
    if db.get_professor_by_email(professor_record["email"]) is not None:
        raise DuplicateError("A professor with this email already exists")

    professor_record["id"] = f"prof_{uuid.uuid4().hex[:12]}"
    row = db.add_professor(professor_record)
    logger.info(f"Created professor profile {row.id}")
    return records.professor_from_row(row)


def get_professor(professor_id: str, db: DatabaseService) -> professor_model.Professor:
    row = db.get_professor_by_id(professor_id)
    if row is None:
        raise NotFoundError("Professor not found")
    return records.professor_from_row(row)
