# /app/services/class_helpers/enrollment.py

"""
Enrollment state changes on a class's embedded roster.

Functions here take the current list of `Enrollment` entries and return a new
list; the caller writes that list back to the class row.
"""

from datetime import datetime
from typing import List

from ...core.exceptions import AlreadyEnrolledError, ClassFullError, InvalidInputError, NotFoundError
from ...models.class_model import Enrollment, EnrollmentStatus


def count_enrolled(enrollments: List[Enrollment]) -> int:
    return sum(1 for e in enrollments if e.status == EnrollmentStatus.ENROLLED)


def enroll(enrollments: List[Enrollment], student_id: str, max_enrollment: int) -> List[Enrollment]:
    """
    Adds `student_id` to the roster. A student with an earlier dropped or
    completed entry gets that entry re-activated rather than a second one.

    Raises:
        AlreadyEnrolledError: if the student is currently enrolled.
        ClassFullError: if every seat is taken.
    """
    if any(e.student == student_id and e.status == EnrollmentStatus.ENROLLED for e in enrollments):
        raise AlreadyEnrolledError("Student is already enrolled in this class")
    if count_enrolled(enrollments) >= max_enrollment:
        raise ClassFullError("Class is full")

    entry = Enrollment(student=student_id, enrollmentDate=datetime.now(), status=EnrollmentStatus.ENROLLED)
    updated = [e for e in enrollments if e.student != student_id]
    updated.append(entry)
    return updated


def set_enrollment_status(
    enrollments: List[Enrollment], student_id: str, status, max_enrollment: int
) -> List[Enrollment]:
    """
    Any of enrolled, dropped or completed may be set from any other. Moving a
    dropped or completed entry back to enrolled needs a free seat.

    Raises:
        InvalidInputError: for an unknown status.
        NotFoundError: if the student has no entry on the roster.
        ClassFullError: if re-enrolling while every seat is taken.
    """
    try:
        new_status = EnrollmentStatus(status)
    except ValueError:
        raise InvalidInputError("Invalid enrollment status")

    updated = list(enrollments)
    for index, entry in enumerate(updated):
        if entry.student == student_id:
            reopening = new_status == EnrollmentStatus.ENROLLED and entry.status != EnrollmentStatus.ENROLLED
            if reopening and count_enrolled(enrollments) >= max_enrollment:
                raise ClassFullError("Class is full")
            updated[index] = entry.model_copy(update={"status": new_status})
            return updated
    raise NotFoundError("Student not found in this class")
