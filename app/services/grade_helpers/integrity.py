# /app/services/grade_helpers/integrity.py

"""
Cross-record invariants checked at the boundary before a grade is written.

The database only knows about the (student, class, assignment name) unique
key; enrollment state lives on the class record, so "a graded student must be
enrolled" is checked here explicitly.
"""

from typing import Iterable, Optional

from ...core.exceptions import DuplicateError, NotEnrolledError
from ...models.class_model import Enrollment, EnrollmentStatus
from ..database_service import DatabaseService


def is_enrolled(enrollments: Iterable[Enrollment], student_id: str) -> bool:
    return any(
        e.student == student_id and e.status == EnrollmentStatus.ENROLLED
        for e in enrollments
    )


def ensure_enrolled(class_record, student_id: str) -> None:
    """
    Raises:
        NotEnrolledError: unless the student is currently enrolled in the class.
    """
    if not is_enrolled(class_record.enrolledStudents, student_id):
        raise NotEnrolledError("Student is not enrolled in this class")


def validate_unique_assignment(
    db: DatabaseService,
    student_id: str,
    class_id: str,
    assignment_name: str,
    exclude_grade_id: Optional[str] = None,
) -> None:
    """
    Rejects a second grade for the same assignment of the same student in the
    same class. `exclude_grade_id` lets an update keep its own name.

    Raises:
        DuplicateError: if another grade already holds the key.
    """
    existing = db.find_grade_by_assignment(
        student_id=student_id, class_id=class_id, assignment_name=assignment_name
    )
    if existing is not None and existing.id != exclude_grade_id:
        raise DuplicateError("Grade already exists for this assignment")
