# /tests/test_grade_scoring.py

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import InvalidInputError
from app.models.grade_model import Assignment, Grade, LetterGrade, Score, SubmissionInfo
from app.services.grade_helpers.scoring import (
    apply_derived_score,
    derive_score,
    is_submission_late,
    letter_grade_for,
    mark_lateness,
)


def _grade(points=45, max_points=50, percentage=None, letter=None, due=None, submitted=None) -> Grade:
    return Grade(
        id="grd_1",
        professorId="prof_1",
        studentId="stu_1",
        classId="cls_1",
        assignment=Assignment(name="Homework 1", type="homework", maxPoints=max_points, dueDate=due),
        score=Score(points=points, percentage=percentage, letterGrade=letter),
        submissionInfo=SubmissionInfo(submittedAt=submitted),
    )


# --- derive_score ---

@pytest.mark.parametrize("points, max_points, expected_letter", [
    (97, 100, LetterGrade.A_PLUS),
    (96.99, 100, LetterGrade.A),
    (93, 100, LetterGrade.A),
    (90, 100, LetterGrade.A_MINUS),
    (89.99, 100, LetterGrade.B_PLUS),
    (83, 100, LetterGrade.B),
    (80, 100, LetterGrade.B_MINUS),
    (77, 100, LetterGrade.C_PLUS),
    (73, 100, LetterGrade.C),
    (70, 100, LetterGrade.C_MINUS),
    (67, 100, LetterGrade.D_PLUS),
    (63, 100, LetterGrade.D),
    (60, 100, LetterGrade.D_MINUS),
    (59.99, 100, LetterGrade.F),
    (0, 100, LetterGrade.F),
])
def test_letter_grade_thresholds(points, max_points, expected_letter):
    assert derive_score(points, max_points).letterGrade == expected_letter


def test_percentage_is_rounded_to_two_places():
    result = derive_score(2, 3)
    assert result.percentage == 66.67
    assert result.letterGrade == LetterGrade.D


def test_zero_max_points_gives_zero_percentage():
    result = derive_score(5, 0)
    assert result.percentage == 0
    assert result.letterGrade == LetterGrade.F


def test_extra_credit_can_exceed_one_hundred_percent():
    result = derive_score(110, 100)
    assert result.percentage == 110
    assert result.letterGrade == LetterGrade.A_PLUS


@pytest.mark.parametrize("points, max_points", [(-1, 100), (10, -5), (float("nan"), 100), (None, 100), ("ten", 100)])
def test_invalid_inputs_are_rejected(points, max_points):
    with pytest.raises(InvalidInputError):
        derive_score(points, max_points)


def test_letter_grade_for_matches_derive_score():
    assert letter_grade_for(92.5) == derive_score(92.5, 100).letterGrade == LetterGrade.A_MINUS


# --- apply_derived_score ---

def test_missing_values_are_derived_on_read():
    grade = apply_derived_score(_grade(points=45, max_points=50))
    assert grade.score.percentage == 90.0
    assert grade.score.letterGrade == LetterGrade.A_MINUS


def test_stored_overrides_are_kept():
    grade = apply_derived_score(_grade(points=45, max_points=50, percentage=95.0, letter=LetterGrade.INCOMPLETE))
    assert grade.score.percentage == 95.0
    assert grade.score.letterGrade == LetterGrade.INCOMPLETE


def test_letter_follows_an_overridden_percentage():
    grade = apply_derived_score(_grade(points=10, max_points=50, percentage=98.0))
    assert grade.score.letterGrade == LetterGrade.A_PLUS


# --- mark_lateness ---

def test_submission_after_due_date_is_late():
    due = datetime(2025, 3, 10, 23, 59)
    grade = mark_lateness(_grade(due=due, submitted=due + timedelta(minutes=1)))
    assert grade.submissionInfo.isLate is True


def test_submission_exactly_at_due_date_is_on_time():
    due = datetime(2025, 3, 10, 23, 59)
    grade = mark_lateness(_grade(due=due, submitted=due))
    assert grade.submissionInfo.isLate is False


def test_lateness_untouched_without_both_dates():
    grade = _grade(due=None, submitted=datetime(2025, 3, 11))
    grade.submissionInfo.isLate = True
    assert mark_lateness(grade).submissionInfo.isLate is True


def test_lateness_compares_naive_and_aware_times():
    due = datetime(2025, 3, 10, 12, 0)
    submitted = datetime(2025, 3, 10, 12, 30, tzinfo=timezone.utc)
    assert is_submission_late(submitted, due) is True
