# /app/services/grade_helpers/scoring.py

"""
Pure scoring rules for a single grade: percentage and letter grade derivation
and the late-submission flag.

Nothing in this module touches the database. Percentage and letter grade are
derived on read; a value stored on the grade is treated as an explicit
override made by the professor.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from ...core.exceptions import InvalidInputError
from ...models.grade_model import Grade, LetterGrade, ScoreBreakdown

# Lower bound (inclusive) of each band, highest first.
LETTER_GRADE_THRESHOLDS = [
    (97, LetterGrade.A_PLUS),
    (93, LetterGrade.A),
    (90, LetterGrade.A_MINUS),
    (87, LetterGrade.B_PLUS),
    (83, LetterGrade.B),
    (80, LetterGrade.B_MINUS),
    (77, LetterGrade.C_PLUS),
    (73, LetterGrade.C),
    (70, LetterGrade.C_MINUS),
    (67, LetterGrade.D_PLUS),
    (63, LetterGrade.D),
    (60, LetterGrade.D_MINUS),
]


def _require_non_negative(value: float, field: str) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be a number.")
    if math.isnan(number) or math.isinf(number):
        raise InvalidInputError(f"{field} must be a finite number.")
    if number < 0:
        raise InvalidInputError(f"{field} cannot be negative.")
    return number


def letter_grade_for(percentage: float) -> LetterGrade:
    """Maps a percentage onto the fixed letter grade scale."""
    for lower_bound, letter in LETTER_GRADE_THRESHOLDS:
        if percentage >= lower_bound:
            return letter
    return LetterGrade.F


def calculate_percentage(points: float, max_points: float) -> float:
    if max_points == 0:
        return 0
    return round(points / max_points * 100, 2)


def derive_score(points: float, max_points: float) -> ScoreBreakdown:
    """
    Derives the percentage and letter grade for `points` out of `max_points`.

    A zero `max_points` yields a percentage of 0 rather than dividing by zero.

    Raises:
        InvalidInputError: if either value is negative or not a number.
    """
    points = _require_non_negative(points, "Points")
    max_points = _require_non_negative(max_points, "Maximum points")
    percentage = calculate_percentage(points, max_points)
    return ScoreBreakdown(percentage=percentage, letterGrade=letter_grade_for(percentage))


def apply_derived_score(grade: Grade) -> Grade:
    """Fills in percentage and letter grade where no override is stored."""
    if grade.score.percentage is None or grade.score.letterGrade is None:
        derived = derive_score(grade.score.points, grade.assignment.maxPoints)
        if grade.score.percentage is None:
            grade.score.percentage = derived.percentage
        if grade.score.letterGrade is None:
            grade.score.letterGrade = letter_grade_for(grade.score.percentage)
    return grade


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC so they compare with aware ones.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_submission_late(submitted_at: Optional[datetime], due_date: Optional[datetime]) -> Optional[bool]:
    """Strictly after the due date is late. Returns None when either date is missing."""
    if submitted_at is None or due_date is None:
        return None
    return _as_utc(submitted_at) > _as_utc(due_date)


def mark_lateness(grade):
    """
    Sets `submissionInfo.isLate` from the due date and submission time.
    Leaves the flag untouched when either date is missing.
    """
    late = is_submission_late(grade.submissionInfo.submittedAt, grade.assignment.dueDate)
    if late is not None:
        grade.submissionInfo.isLate = late
    return grade
