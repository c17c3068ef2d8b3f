# /app/services/grade_helpers/summaries.py

"""
Aggregation of already-fetched grades into per-student and per-class
summaries.

Every function here is pure: it receives a list of `Grade` models and returns
summary models. Excused and extra-credit grades are listed in a summary but
do not count towards its points.
"""

from typing import Callable, Dict, List, Optional

import pandas as pd

from ...models.grade_model import (
    ClassGradeStatistics,
    ClassGradeSummary,
    ClassScoreSummary,
    Grade,
    StudentGradeReport,
    StudentGradeSummary,
)
from .scoring import calculate_percentage


def counts_towards_total(grade: Grade) -> bool:
    return not grade.isExcused and not grade.isExtra


def _group_totals(grades: List[Grade], key: Callable[[Grade], str]) -> Dict[str, Dict]:
    """Groups grades by `key`, preserving first-seen order, and sums points."""
    groups: Dict[str, Dict] = {}
    for grade in grades:
        group = groups.setdefault(key(grade), {"grades": [], "totalPoints": 0.0, "maxTotalPoints": 0.0})
        group["grades"].append(grade)
        if counts_towards_total(grade):
            group["totalPoints"] += grade.score.points
            group["maxTotalPoints"] += grade.assignment.maxPoints

    for group in groups.values():
        group["percentage"] = calculate_percentage(group["totalPoints"], group["maxTotalPoints"])
    return groups


def calculate_class_statistics(percentages: List[float], total_grades: int) -> ClassGradeStatistics:
    """
    Average, highest and lowest are taken over the non-zero percentages only,
    so students whose every grade is excused do not drag the average down.
    """
    series = pd.Series(percentages, dtype="float64")
    scored = series[series > 0]
    if scored.empty:
        return ClassGradeStatistics(
            totalStudents=len(percentages), totalGrades=total_grades,
            classAverage=0, highestGrade=0, lowestGrade=0
        )
    return ClassGradeStatistics(
        totalStudents=len(percentages),
        totalGrades=total_grades,
        classAverage=round(float(scored.mean()), 2),
        highestGrade=float(scored.max()),
        lowestGrade=float(scored.min()),
    )


def summarize_for_class(grades: List[Grade], student_names: Optional[Dict[str, str]] = None) -> ClassGradeSummary:
    """Summarizes all grades of one class, grouped by student."""
    student_names = student_names or {}
    groups = _group_totals(grades, key=lambda g: g.studentId)

    student_summaries = [
        StudentGradeSummary(studentId=student_id, studentName=student_names.get(student_id), **group)
        for student_id, group in groups.items()
    ]
    statistics = calculate_class_statistics([s.percentage for s in student_summaries], total_grades=len(grades))
    return ClassGradeSummary(studentGrades=student_summaries, statistics=statistics)


def summarize_for_student(grades: List[Grade], class_names: Optional[Dict[str, str]] = None) -> StudentGradeReport:
    """Summarizes all grades of one student, grouped by class."""
    class_names = class_names or {}
    groups = _group_totals(grades, key=lambda g: g.classId)

    class_summaries = [
        ClassScoreSummary(classId=class_id, className=class_names.get(class_id), **group)
        for class_id, group in groups.items()
    ]
    return StudentGradeReport(classSummaries=class_summaries, totalGrades=len(grades))
