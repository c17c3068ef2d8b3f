# /tests/test_database_service.py

from datetime import datetime

import pytest

from app.core.exceptions import DuplicateError
from app.services.database_service import DatabaseService


@pytest.fixture
def seeded(db_service):
    """Two professors, one class each and one student, written as raw row values."""
    db_service.add_professor({"id": "prof_a", "first_name": "Ada", "last_name": "Lovelace", "email": "ada@college.edu"})
    db_service.add_professor({"id": "prof_b", "first_name": "Alan", "last_name": "Turing", "email": "alan@college.edu"})
    for class_id, professor_id in [("cls_a", "prof_a"), ("cls_b", "prof_b")]:
        db_service.add_class({
            "id": class_id, "professor_id": professor_id, "class_name": "Mechanics", "course_code": "PHYS201",
            "semester": "Fall", "year": 2025, "credits": 4,
            "schedule": {"days": ["Monday"], "startTime": "09:00", "endTime": "10:00"},
        })
    db_service.add_student({
        "id": "stu_1", "student_number": "S1", "first_name": "Alice", "last_name": "Anders", "email": "alice@college.edu",
    })
    return db_service


def grade_record(grade_id, assignment_name="Homework 1", professor_id="prof_a", class_id="cls_a", due=None):
    return {
        "id": grade_id, "professor_id": professor_id, "class_id": class_id, "student_id": "stu_1",
        "assignment_name": assignment_name, "assignment_type": "homework", "due_date": due,
        "max_points": 10, "points": 9,
    }


def test_a_session_is_required():
    with pytest.raises(ValueError):
        DatabaseService(db_session=None)


# --- Professors, Classes & Students ---

def test_class_lookup_is_scoped_to_owner(seeded):
    assert seeded.get_class_by_id("cls_a", "prof_a").course_code == "PHYS201"
    assert seeded.get_class_by_id("cls_a", "prof_b") is None
    assert seeded.update_class("cls_a", "prof_b", {"class_name": "Stolen"}) is None
    assert [c.id for c in seeded.get_classes("prof_b")] == ["cls_b"]


def test_class_defaults_are_filled_by_the_table(seeded):
    row = seeded.get_class_by_id("cls_a", "prof_a")
    assert row.enrolled_students == []
    assert row.announcements == []
    assert row.max_enrollment == 30
    assert row.is_active is True


def test_course_code_is_unique_per_professor_and_term(seeded):
    with pytest.raises(DuplicateError):
        seeded.add_class({
            "id": "cls_a2", "professor_id": "prof_a", "class_name": "Mechanics II", "course_code": "PHYS201",
            "semester": "Fall", "year": 2025, "credits": 4, "schedule": {},
        })
    # The session is usable after the rollback.
    assert len(seeded.get_classes("prof_a")) == 1


def test_professor_email_is_unique(seeded):
    with pytest.raises(DuplicateError, match="email"):
        seeded.add_professor({"id": "prof_c", "first_name": "A", "last_name": "L", "email": "ada@college.edu"})


def test_student_lookups(seeded):
    assert seeded.get_student_by_student_number("S1").id == "stu_1"
    assert seeded.get_students_by_ids([]) == []
    assert [s.id for s in seeded.get_students_by_ids(["stu_1", "stu_unknown"])] == ["stu_1"]
    assert [s.id for s in seeded.get_students(search="ANDERS")] == ["stu_1"]

    seeded.update_student("stu_1", {"is_active": False})
    assert seeded.get_students() == []
    assert len(seeded.get_students(include_inactive=True)) == 1


# --- Grades ---

def test_grade_key_is_unique_across_professors(seeded):
    seeded.add_grade(grade_record("grd_1"))
    with pytest.raises(DuplicateError, match="Grade already exists for this assignment"):
        seeded.add_grade(grade_record("grd_2", professor_id="prof_b"))


def test_grade_queries_filter_and_page(seeded):
    seeded.add_grade(grade_record("grd_1", "Homework 1", due=datetime(2025, 9, 1)))
    seeded.add_grade(grade_record("grd_2", "Homework 2", due=datetime(2025, 9, 8)))
    seeded.add_grade(grade_record("grd_3", "Homework 3", due=datetime(2025, 9, 15)))

    rows, total = seeded.query_grades("prof_a", class_id="cls_a", skip=1, limit=1)
    assert total == 3
    assert [r.id for r in rows] == ["grd_2"]

    assert [r.id for r in seeded.get_grades_for_class("cls_a", "prof_a")] == ["grd_1", "grd_2", "grd_3"]
    assert seeded.get_grades_for_class("cls_a", "prof_b") == []
    assert seeded.count_grades("prof_a") == 3
    assert seeded.find_grade_by_assignment("stu_1", "cls_a", "Homework 2").id == "grd_2"


def test_grade_update_and_delete_are_scoped(seeded):
    seeded.add_grade(grade_record("grd_1"))

    assert seeded.update_grade("grd_1", "prof_b", {"points": 1}) is None
    assert seeded.update_grade("grd_1", "prof_a", {"points": 7}).points == 7
    assert seeded.delete_grade("grd_1", "prof_b") is False
    assert seeded.delete_grade("grd_1", "prof_a") is True
    assert seeded.get_grade("grd_1", "prof_a") is None


# --- Calendar Events ---

def event_record(event_id, start, **overrides):
    record = {
        "id": event_id, "professor_id": "prof_a", "title": event_id, "event_type": "lecture",
        "start_date_time": start, "end_date_time": start.replace(hour=start.hour + 1),
    }
    record.update(overrides)
    return record


def test_event_versions_increase_on_each_write(seeded):
    row = seeded.add_event(event_record("evt_1", datetime(2025, 3, 10, 9)))
    assert row.version_id == 1

    updated = seeded.update_event("evt_1", "prof_a", {"title": "Renamed"})
    assert updated.version_id == 2


def test_event_query_filters(seeded):
    seeded.add_event(event_record("evt_1", datetime(2025, 3, 10, 9)))
    seeded.add_event(event_record("evt_2", datetime(2025, 3, 11, 9), event_type="exam", class_id="cls_a"))
    seeded.add_event(event_record("evt_3", datetime(2025, 3, 12, 9), is_visible=False))
    seeded.add_event(event_record("evt_4", datetime(2025, 3, 13, 9), status="cancelled", external_id="ext-4"))

    rows, total = seeded.query_events("prof_a")
    assert total == 3
    assert [r.id for r in rows] == ["evt_1", "evt_2", "evt_4"]

    _, everything = seeded.query_events("prof_a", visible_only=False)
    assert everything == 4

    rows, _ = seeded.query_events("prof_a", start_from=datetime(2025, 3, 11), start_to=datetime(2025, 3, 11, 23, 59))
    assert [r.id for r in rows] == ["evt_2"]
    assert [r.id for r in seeded.query_events("prof_a", event_type="exam")[0]] == ["evt_2"]
    assert [r.id for r in seeded.query_events("prof_a", class_id="cls_a")[0]] == ["evt_2"]
    assert [r.id for r in seeded.query_events("prof_a", status="cancelled")[0]] == ["evt_4"]

    rows, total = seeded.query_events("prof_a", limit=0)
    assert rows == [] and total == 3

    assert seeded.find_event_by_external_id("prof_a", "ext-4").id == "evt_4"
    assert seeded.find_event_by_external_id("prof_b", "ext-4") is None
    assert seeded.query_events("prof_b") == ([], 0)
