# /app/services/grade_service.py

"""
This service module is the business logic layer for grades.

It checks the cross-record invariants (owned class, enrolled student, one
grade per assignment) before every write, delegates score and lateness
rules to `grade_helpers.scoring`, aggregation to `grade_helpers.summaries`,
and persistence to the `DatabaseService`.
"""

import logging
import math
import uuid
from typing import Optional

import pandas as pd
from pydantic import ValidationError

from ..core.exceptions import InvalidInputError, NotFoundError, PortalError
from ..models import grade_model
from .class_helpers import records as class_records
from .database_service import DatabaseService
from .grade_helpers import integrity, records, scoring, summaries

logger = logging.getLogger(__name__)

GRADEBOOK_CSV_COLUMNS = [
    "Student ID", "Student Name", "Assignment", "Type", "Due Date",
    "Points", "Max Points", "Percentage", "Letter Grade", "Late", "Excused", "Extra Credit",
]


def _get_owned_class(class_id: str, professor_id: str, db: DatabaseService):
    row = db.get_class_by_id(class_id=class_id, professor_id=professor_id)
    if row is None:
        raise NotFoundError("Class not found")
    return class_records.class_from_row(row)


def _get_grade_row(grade_id: str, professor_id: str, db: DatabaseService):
    row = db.get_grade(grade_id=grade_id, professor_id=professor_id)
    if row is None:
        raise NotFoundError("Grade not found")
    return row


# --- CRUD ---

def create_grade(grade_data: grade_model.GradeCreate, db: DatabaseService, professor_id: str) -> grade_model.Grade:
    """
    Raises:
        NotFoundError: if the class is not one of the professor's classes.
        NotEnrolledError: if the student is not enrolled in the class.
        DuplicateError: if the student already has a grade for the assignment.
        InvalidInputError: if the score cannot be derived.
    """
    class_record = _get_owned_class(grade_data.classId, professor_id, db)
    integrity.ensure_enrolled(class_record, grade_data.studentId)
    integrity.validate_unique_assignment(
        db, grade_data.studentId, grade_data.classId, grade_data.assignment.name.strip()
    )
    scoring.derive_score(grade_data.score.points, grade_data.assignment.maxPoints)

    grade_data = grade_data.model_copy(deep=True)
    scoring.mark_lateness(grade_data)

    grade_record = records.row_values_from_grade(grade_data)
    grade_record["id"] = f"grd_{uuid.uuid4().hex[:12]}"
    grade_record["professor_id"] = professor_id
    row = db.add_grade(grade_record)
    logger.info(f"Recorded grade {row.id} for student {row.student_id} in class {row.class_id}")
    return records.grade_from_row(row)


def list_grades(
    db: DatabaseService,
    professor_id: str,
    class_id: Optional[str] = None,
    student_id: Optional[str] = None,
    assignment_type: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> grade_model.GradeListResponse:
    if page < 1 or limit < 1:
        raise InvalidInputError("Page and limit must be positive.")
    rows, total = db.query_grades(
        professor_id=professor_id, class_id=class_id, student_id=student_id,
        assignment_type=assignment_type, skip=(page - 1) * limit, limit=limit,
    )
    return grade_model.GradeListResponse(
        grades=[records.grade_from_row(row) for row in rows],
        pagination=grade_model.Pagination(current=page, pages=math.ceil(total / limit), total=total, limit=limit),
    )


def get_grade(grade_id: str, professor_id: str, db: DatabaseService) -> grade_model.Grade:
    return records.grade_from_row(_get_grade_row(grade_id, professor_id, db))


def update_grade(
    grade_id: str,
    grade_update: grade_model.GradeUpdate,
    db: DatabaseService,
    professor_id: str,
) -> grade_model.Grade:
    """
    Merges the partial update onto the stored grade, then re-checks the
    assignment key and recomputes lateness from the merged values.
    """
    changes = grade_update.model_dump(exclude_unset=True)
    if not changes:
        raise InvalidInputError("No update data provided.")

    row = _get_grade_row(grade_id, professor_id, db)
    current = records.grade_from_row(row)
    # Stored overrides only; the derived values are recomputed on read.
    current.score = grade_model.Score(points=row.points, percentage=row.percentage, letterGrade=row.letter_grade)

    try:
        merged = grade_model.GradeCreate.model_validate({
            **current.model_dump(include=set(grade_model.GradeCreate.model_fields)),
            **changes,
        })
    except ValidationError as e:
        raise InvalidInputError(f"Invalid grade update: {e.errors()[0]['msg']}")
    if merged.assignment.name.strip() != row.assignment_name:
        integrity.validate_unique_assignment(
            db, merged.studentId, merged.classId, merged.assignment.name.strip(), exclude_grade_id=grade_id
        )
    scoring.derive_score(merged.score.points, merged.assignment.maxPoints)
    scoring.mark_lateness(merged)
    date_removed = (
        (row.due_date is not None and merged.assignment.dueDate is None)
        or (row.submitted_at is not None and merged.submissionInfo.submittedAt is None)
    )
    if date_removed:
        merged.submissionInfo.isLate = False

    update_data = records.row_values_from_grade(merged)
    row = db.update_grade(grade_id=grade_id, professor_id=professor_id, data=update_data)
    return records.grade_from_row(row)


def delete_grade(grade_id: str, professor_id: str, db: DatabaseService) -> None:
    if not db.delete_grade(grade_id=grade_id, professor_id=professor_id):
        raise NotFoundError("Grade not found")
    logger.info(f"Deleted grade {grade_id}")


def bulk_create_grades(
    bulk_data: grade_model.BulkGradeCreate,
    db: DatabaseService,
    professor_id: str,
) -> grade_model.BulkGradeResult:
    """
    Creates each grade independently. A grade that fails validation is
    reported by its index and does not stop the rest of the batch.
    """
    created, failed = [], []
    for index, grade_data in enumerate(bulk_data.grades):
        try:
            created.append(create_grade(grade_data, db, professor_id))
        except PortalError as e:
            logger.warning(f"Bulk grade {index} rejected: {e.message}")
            failed.append(grade_model.BulkGradeFailure(index=index, kind=e.kind, message=e.message))
    return grade_model.BulkGradeResult(created=created, failed=failed)


# --- Summaries & Export ---

def _student_names(db: DatabaseService, student_ids) -> dict:
    return {row.id: f"{row.first_name} {row.last_name}" for row in db.get_students_by_ids(set(student_ids))}


def get_class_summary(class_id: str, professor_id: str, db: DatabaseService) -> grade_model.ClassGradeSummary:
    _get_owned_class(class_id, professor_id, db)
    grades = [records.grade_from_row(row) for row in db.get_grades_for_class(class_id=class_id, professor_id=professor_id)]
    return summaries.summarize_for_class(grades, student_names=_student_names(db, (g.studentId for g in grades)))


def get_student_summary(student_id: str, professor_id: str, db: DatabaseService) -> grade_model.StudentGradeReport:
    if db.get_student_by_id(student_id) is None:
        raise NotFoundError("Student not found")
    grades = [records.grade_from_row(row) for row in db.get_grades_for_student(student_id=student_id, professor_id=professor_id)]
    class_names = {
        row.id: class_records.display_name(row.course_code, row.class_name)
        for row in db.get_classes(professor_id=professor_id)
    }
    return summaries.summarize_for_student(grades, class_names=class_names)


def export_gradebook_as_csv(class_id: str, professor_id: str, db: DatabaseService) -> str:
    """One CSV row per grade recorded in the class."""
    _get_owned_class(class_id, professor_id, db)
    rows = db.get_grades_for_class(class_id=class_id, professor_id=professor_id)
    grades = [records.grade_from_row(row) for row in rows]
    students = {row.id: row for row in db.get_students_by_ids({g.studentId for g in grades})}

    export_data = []
    for grade in grades:
        student = students.get(grade.studentId)
        export_data.append({
            "Student ID": student.student_number if student else grade.studentId,
            "Student Name": f"{student.first_name} {student.last_name}" if student else "",
            "Assignment": grade.assignment.name,
            "Type": grade.assignment.type.value,
            "Due Date": grade.assignment.dueDate.date().isoformat() if grade.assignment.dueDate else "",
            "Points": grade.score.points,
            "Max Points": grade.assignment.maxPoints,
            "Percentage": grade.score.percentage,
            "Letter Grade": grade.score.letterGrade.value,
            "Late": grade.submissionInfo.isLate,
            "Excused": grade.isExcused,
            "Extra Credit": grade.isExtra,
        })

    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=GRADEBOOK_CSV_COLUMNS)
    return df.to_csv(index=False)
