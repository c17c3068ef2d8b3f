# /tests/test_grade_service.py

from datetime import datetime
from io import StringIO

import pandas as pd
import pytest

from app.core.exceptions import DuplicateError, InvalidInputError, NotEnrolledError, NotFoundError
from app.models.grade_model import BulkGradeCreate, GradeCreate, GradeUpdate, LetterGrade
from app.services import class_service, grade_service
from app.services.grade_helpers import integrity


def grade_payload(student_id, class_id, name="Homework 1", points=45, max_points=50, **overrides) -> GradeCreate:
    data = {
        "studentId": student_id,
        "classId": class_id,
        "assignment": {
            "name": name,
            "type": "homework",
            "dueDate": datetime(2025, 9, 15, 23, 59),
            "maxPoints": max_points,
        },
        "score": {"points": points},
    }
    data.update(overrides)
    return GradeCreate(**data)


# --- Creation ---

def test_create_grade_derives_score(db_service, professor, enrolled_course, students):
    grade = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)

    assert grade.id.startswith("grd_")
    assert grade.professorId == professor.id
    assert grade.score.percentage == 90.0
    assert grade.score.letterGrade == LetterGrade.A_MINUS
    assert grade.submissionInfo.isLate is False


def test_create_grade_marks_late_submission(db_service, professor, enrolled_course, students):
    payload = grade_payload(
        students[0].id, enrolled_course.id,
        submissionInfo={"submittedAt": datetime(2025, 9, 16, 8, 0)},
    )
    grade = grade_service.create_grade(payload, db_service, professor.id)
    assert grade.submissionInfo.isLate is True


def test_grade_for_student_not_enrolled_is_rejected(db_service, professor, enrolled_course, students):
    with pytest.raises(NotEnrolledError):
        grade_service.create_grade(grade_payload(students[2].id, enrolled_course.id), db_service, professor.id)


def test_dropped_student_cannot_be_graded(db_service, professor, enrolled_course, students):
    class_service.update_enrollment_status(enrolled_course.id, students[1].id, "dropped", db_service, professor.id)

    with pytest.raises(NotEnrolledError):
        grade_service.create_grade(grade_payload(students[1].id, enrolled_course.id), db_service, professor.id)


def test_grade_for_another_professors_class_is_not_found(db_service, other_professor, enrolled_course, students):
    with pytest.raises(NotFoundError):
        grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, other_professor.id)


def test_second_grade_for_same_assignment_is_duplicate(db_service, professor, enrolled_course, students):
    payload = grade_payload(students[0].id, enrolled_course.id)
    grade_service.create_grade(payload, db_service, professor.id)

    with pytest.raises(DuplicateError, match="Grade already exists for this assignment"):
        grade_service.create_grade(payload, db_service, professor.id)


def test_constraint_catches_duplicate_that_slips_past_precheck(mocker, db_service, professor, enrolled_course, students):
    """Two concurrent creates both pass the pre-check; the database rejects the loser."""
    mocker.patch.object(integrity, "validate_unique_assignment", return_value=None)
    payload = grade_payload(students[0].id, enrolled_course.id)
    grade_service.create_grade(payload, db_service, professor.id)

    with pytest.raises(DuplicateError):
        grade_service.create_grade(payload, db_service, professor.id)
    # The session is usable again after the rollback.
    assert db_service.count_grades(professor.id) == 1


def test_same_assignment_for_different_students_is_allowed(db_service, professor, enrolled_course, students):
    grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)
    grade_service.create_grade(grade_payload(students[1].id, enrolled_course.id), db_service, professor.id)
    assert db_service.count_grades(professor.id) == 2


# --- Listing, Update & Delete ---

def test_list_grades_paginates_and_filters(db_service, professor, enrolled_course, students):
    for i in range(3):
        grade_service.create_grade(
            grade_payload(students[0].id, enrolled_course.id, name=f"Homework {i}"), db_service, professor.id
        )
    grade_service.create_grade(grade_payload(students[1].id, enrolled_course.id), db_service, professor.id)

    page = grade_service.list_grades(db_service, professor.id, student_id=students[0].id, page=1, limit=2)
    assert page.pagination.total == 3
    assert page.pagination.pages == 2
    assert len(page.grades) == 2

    second = grade_service.list_grades(db_service, professor.id, student_id=students[0].id, page=2, limit=2)
    assert len(second.grades) == 1

    assert grade_service.list_grades(db_service, professor.id, assignment_type="exam").pagination.total == 0


def test_update_grade_rederives_score(db_service, professor, enrolled_course, students):
    grade = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)

    updated = grade_service.update_grade(grade.id, GradeUpdate(score={"points": 30}), db_service, professor.id)

    assert updated.score.points == 30
    assert updated.score.percentage == 60.0
    assert updated.score.letterGrade == LetterGrade.D_MINUS


def test_removing_the_due_date_clears_lateness(db_service, professor, enrolled_course, students):
    payload = grade_payload(
        students[0].id, enrolled_course.id,
        submissionInfo={"submittedAt": datetime(2025, 9, 16, 8, 0)},
    )
    grade = grade_service.create_grade(payload, db_service, professor.id)
    assert grade.submissionInfo.isLate is True

    no_due_date = GradeUpdate(assignment={"name": "Homework 1", "type": "homework", "maxPoints": 50})
    updated = grade_service.update_grade(grade.id, no_due_date, db_service, professor.id)

    assert updated.assignment.dueDate is None
    assert updated.submissionInfo.submittedAt == datetime(2025, 9, 16, 8, 0)
    assert updated.submissionInfo.isLate is False


def test_update_grade_keeps_explicit_letter_override(db_service, professor, enrolled_course, students):
    grade = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)
    grade_service.update_grade(grade.id, GradeUpdate(score={"points": 45, "letterGrade": "I"}), db_service, professor.id)

    updated = grade_service.update_grade(grade.id, GradeUpdate(isExcused=True), db_service, professor.id)
    assert updated.score.letterGrade == LetterGrade.INCOMPLETE
    assert updated.isExcused is True


def test_renaming_onto_existing_assignment_is_duplicate(db_service, professor, enrolled_course, students):
    grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id, name="Quiz 1"), db_service, professor.id)
    second = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id, name="Quiz 2"), db_service, professor.id)

    rename = GradeUpdate(assignment={"name": "Quiz 1", "type": "quiz", "maxPoints": 50})
    with pytest.raises(DuplicateError):
        grade_service.update_grade(second.id, rename, db_service, professor.id)


def test_empty_update_is_rejected(db_service, professor, enrolled_course, students):
    grade = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)
    with pytest.raises(InvalidInputError):
        grade_service.update_grade(grade.id, GradeUpdate(), db_service, professor.id)


def test_delete_grade(db_service, professor, enrolled_course, students):
    grade = grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)
    grade_service.delete_grade(grade.id, professor.id, db_service)

    with pytest.raises(NotFoundError):
        grade_service.get_grade(grade.id, professor.id, db_service)
    with pytest.raises(NotFoundError):
        grade_service.delete_grade(grade.id, professor.id, db_service)


# --- Bulk, Summaries & Export ---

def test_bulk_create_reports_failures_by_index(db_service, professor, enrolled_course, students):
    bulk = BulkGradeCreate(grades=[
        grade_payload(students[0].id, enrolled_course.id),
        grade_payload(students[2].id, enrolled_course.id),
        grade_payload(students[0].id, enrolled_course.id),
        grade_payload(students[1].id, enrolled_course.id),
    ])
    result = grade_service.bulk_create_grades(bulk, db_service, professor.id)

    assert len(result.created) == 2
    assert [(f.index, f.kind) for f in result.failed] == [(1, "not_enrolled"), (2, "duplicate")]


def test_class_summary_includes_student_names(db_service, professor, enrolled_course, students):
    grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id, points=50), db_service, professor.id)
    grade_service.create_grade(grade_payload(students[1].id, enrolled_course.id, points=40), db_service, professor.id)

    summary = grade_service.get_class_summary(enrolled_course.id, professor.id, db_service)

    names = {s.studentId: s.studentName for s in summary.studentGrades}
    assert names[students[0].id] == "Alice Anders"
    assert summary.statistics.classAverage == 90.0
    assert summary.statistics.highestGrade == 100
    assert summary.statistics.lowestGrade == 80


def test_student_summary_uses_class_display_name(db_service, professor, enrolled_course, students):
    grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)

    report = grade_service.get_student_summary(students[0].id, professor.id, db_service)

    assert report.totalGrades == 1
    assert report.classSummaries[0].className == "PHYS201 - Classical Mechanics"


def test_gradebook_export_has_one_row_per_grade(db_service, professor, enrolled_course, students):
    grade_service.create_grade(grade_payload(students[0].id, enrolled_course.id), db_service, professor.id)
    grade_service.create_grade(grade_payload(students[1].id, enrolled_course.id, points=20), db_service, professor.id)

    csv_string = grade_service.export_gradebook_as_csv(enrolled_course.id, professor.id, db_service)
    df = pd.read_csv(StringIO(csv_string))

    assert len(df) == 2
    assert set(df["Student ID"]) == {"S1001", "S1002"}
    assert set(df["Letter Grade"]) == {"A-", "F"}


def test_gradebook_export_of_empty_class_has_headers_only(db_service, professor, course):
    csv_string = grade_service.export_gradebook_as_csv(course.id, professor.id, db_service)
    assert csv_string.strip() == ",".join(grade_service.GRADEBOOK_CSV_COLUMNS)
