# /tests/test_grade_summaries.py

import pytest

from app.models.grade_model import Assignment, Grade, Score
from app.services.grade_helpers.summaries import (
    calculate_class_statistics,
    summarize_for_class,
    summarize_for_student,
)


def make_grade(grade_id, student_id, points, max_points=100, class_id="cls_1", excused=False, extra=False) -> Grade:
    return Grade(
        id=grade_id,
        professorId="prof_1",
        studentId=student_id,
        classId=class_id,
        assignment=Assignment(name=f"Assignment {grade_id}", type="homework", maxPoints=max_points),
        score=Score(points=points),
        isExcused=excused,
        isExtra=extra,
    )


@pytest.fixture
def class_grades():
    """Student A scores 100, B scores 80, C's only grade is excused."""
    return [
        make_grade("g1", "stu_A", 100),
        make_grade("g2", "stu_B", 80),
        make_grade("g3", "stu_C", 50, excused=True),
    ]


def test_class_statistics_ignore_zero_percentages(class_grades):
    summary = summarize_for_class(class_grades)

    stats = summary.statistics
    assert stats.totalStudents == 3
    assert stats.totalGrades == 3
    assert stats.classAverage == 90.0
    assert stats.highestGrade == 100
    assert stats.lowestGrade == 80


def test_excused_grade_is_listed_but_not_counted(class_grades):
    summary = summarize_for_class(class_grades)

    carol = next(s for s in summary.studentGrades if s.studentId == "stu_C")
    assert len(carol.grades) == 1
    assert carol.totalPoints == 0
    assert carol.maxTotalPoints == 0
    assert carol.percentage == 0


def test_student_totals_sum_counted_grades():
    grades = [
        make_grade("g1", "stu_A", 18, max_points=20),
        make_grade("g2", "stu_A", 45, max_points=50),
        make_grade("g3", "stu_A", 5, max_points=10, extra=True),
    ]
    summary = summarize_for_class(grades, student_names={"stu_A": "Alice Anders"})

    [alice] = summary.studentGrades
    assert alice.studentName == "Alice Anders"
    assert alice.totalPoints == 63
    assert alice.maxTotalPoints == 70
    assert alice.percentage == 90.0
    assert len(alice.grades) == 3


def test_students_keep_first_seen_order():
    grades = [make_grade("g1", "stu_B", 70), make_grade("g2", "stu_A", 90), make_grade("g3", "stu_B", 80)]
    summary = summarize_for_class(grades)
    assert [s.studentId for s in summary.studentGrades] == ["stu_B", "stu_A"]


def test_empty_class_has_zero_statistics():
    summary = summarize_for_class([])
    assert summary.studentGrades == []
    assert summary.statistics.model_dump() == {
        "totalStudents": 0, "totalGrades": 0, "classAverage": 0, "highestGrade": 0, "lowestGrade": 0,
    }


def test_class_average_is_rounded():
    stats = calculate_class_statistics([100, 90, 85.5], total_grades=3)
    assert stats.classAverage == 91.83


def test_student_report_groups_by_class():
    grades = [
        make_grade("g1", "stu_A", 90, class_id="cls_1"),
        make_grade("g2", "stu_A", 60, class_id="cls_2"),
        make_grade("g3", "stu_A", 70, class_id="cls_1"),
    ]
    report = summarize_for_student(grades, class_names={"cls_1": "PHYS201 - Mechanics"})

    assert report.totalGrades == 3
    assert [c.classId for c in report.classSummaries] == ["cls_1", "cls_2"]
    physics = report.classSummaries[0]
    assert physics.className == "PHYS201 - Mechanics"
    assert physics.percentage == 80.0
    assert report.classSummaries[1].className is None
