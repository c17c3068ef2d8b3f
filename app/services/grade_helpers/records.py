# /app/services/grade_helpers/records.py

"""
Translation between the flat `grades` table and the nested `Grade` API model.
"""

from typing import Dict

from ...db.models.grade_models import Grade as GradeRow
from ...models.grade_model import (
    Assignment,
    Feedback,
    Grade,
    GradeCreate,
    RubricItem,
    Score,
    SubmissionInfo,
)
from .scoring import apply_derived_score


def grade_from_row(row: GradeRow) -> Grade:
    """Builds the API model from a row, deriving any missing score values."""
    grade = Grade(
        id=row.id,
        studentId=row.student_id,
        classId=row.class_id,
        professorId=row.professor_id,
        assignment=Assignment(
            name=row.assignment_name,
            type=row.assignment_type,
            dueDate=row.due_date,
            maxPoints=row.max_points,
            weight=row.weight,
        ),
        score=Score(points=row.points, percentage=row.percentage, letterGrade=row.letter_grade),
        feedback=Feedback.model_validate(row.feedback or {}),
        submissionInfo=SubmissionInfo(
            submittedAt=row.submitted_at,
            isLate=row.is_late,
            latePenalty=row.late_penalty,
        ),
        rubric=[RubricItem.model_validate(item) for item in (row.rubric or [])],
        isExcused=row.is_excused,
        isExtra=row.is_extra,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )
    return apply_derived_score(grade)


def row_values_from_grade(grade: GradeCreate) -> Dict:
    """Column values for the writable part of a grade."""
    return {
        "student_id": grade.studentId,
        "class_id": grade.classId,
        "assignment_name": grade.assignment.name.strip(),
        "assignment_type": grade.assignment.type.value,
        "due_date": grade.assignment.dueDate,
        "max_points": grade.assignment.maxPoints,
        "weight": grade.assignment.weight,
        "points": grade.score.points,
        "percentage": grade.score.percentage,
        "letter_grade": grade.score.letterGrade.value if grade.score.letterGrade else None,
        "feedback": grade.feedback.model_dump(mode="json"),
        "submitted_at": grade.submissionInfo.submittedAt,
        "is_late": grade.submissionInfo.isLate,
        "late_penalty": grade.submissionInfo.latePenalty,
        "rubric": [item.model_dump(mode="json") for item in grade.rubric],
        "is_excused": grade.isExcused,
        "is_extra": grade.isExtra,
    }
