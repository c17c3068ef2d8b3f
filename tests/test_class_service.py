# /tests/test_class_service.py

from datetime import datetime, timedelta
from io import StringIO

import pandas as pd
import pytest

from app.core.exceptions import (
    AlreadyEnrolledError,
    ClassFullError,
    DuplicateError,
    InvalidInputError,
    InvalidRangeError,
    NotFoundError,
)
from app.models.calendar_model import CalendarEventCreate
from app.models.class_model import AnnouncementCreate, ClassUpdate, EnrollmentStatus
from app.models.professor_model import ProfessorCreate
from app.models.student_model import StudentCreate, StudentUpdate
from app.services import calendar_service, class_service, dashboard_service, student_service
from tests.conftest import make_class_data


# --- Class CRUD ---

def test_create_class_normalizes_code_and_derives_fields(course, professor):
    assert course.id.startswith("cls_")
    assert course.professorId == professor.id
    assert course.courseCode == "PHYS201"
    assert course.displayName == "PHYS201 - Classical Mechanics"
    assert course.currentEnrollment == 0
    assert course.availableSpots == 30


def test_same_code_in_same_term_is_duplicate(db_service, professor, course):
    with pytest.raises(DuplicateError, match="course code already exists"):
        class_service.create_class(make_class_data(courseCode="PHYS201"), db_service, professor.id)


def test_same_code_in_other_term_or_for_other_professor_is_allowed(db_service, professor, other_professor, course):
    class_service.create_class(make_class_data(semester="Spring"), db_service, professor.id)
    class_service.create_class(make_class_data(), db_service, other_professor.id)
    assert len(class_service.get_classes(professor.id, db_service)) == 2


def test_schedule_must_end_after_it_starts(db_service, professor):
    data = make_class_data()
    data.schedule.endTime = "08:30"
    with pytest.raises(InvalidRangeError, match="End time must be after start time"):
        class_service.create_class(data, db_service, professor.id)


def test_classes_are_invisible_to_other_professors(db_service, other_professor, course):
    with pytest.raises(NotFoundError, match="Class not found"):
        class_service.get_class(course.id, other_professor.id, db_service)
    assert class_service.get_classes(other_professor.id, db_service) == []


def test_update_class(db_service, professor, course):
    updated = class_service.update_class(
        course.id, ClassUpdate(className="Analytical Mechanics", maxEnrollment=12), db_service, professor.id
    )
    assert updated.displayName == "PHYS201 - Analytical Mechanics"
    assert updated.availableSpots == 12

    with pytest.raises(InvalidInputError, match="No update data provided"):
        class_service.update_class(course.id, ClassUpdate(), db_service, professor.id)


def test_delete_class_is_soft(db_service, professor, course):
    class_service.delete_class(course.id, db_service, professor.id)

    assert class_service.get_class(course.id, professor.id, db_service).isActive is False
    assert class_service.get_classes(professor.id, db_service, is_active=True) == []


# --- Enrollment ---

def test_enrollment_updates_derived_counts(enrolled_course):
    assert enrolled_course.currentEnrollment == 2
    assert enrolled_course.availableSpots == 28
    assert all(e.status == EnrollmentStatus.ENROLLED for e in enrolled_course.enrolledStudents)


def test_enrolling_twice_is_rejected(db_service, professor, enrolled_course, students):
    with pytest.raises(AlreadyEnrolledError, match="already enrolled"):
        class_service.enroll_student(enrolled_course.id, students[0].id, db_service, professor.id)


def test_full_class_rejects_enrollment(db_service, professor, students):
    small = class_service.create_class(make_class_data(courseCode="SEM1", maxEnrollment=1), db_service, professor.id)
    class_service.enroll_student(small.id, students[0].id, db_service, professor.id)

    with pytest.raises(ClassFullError, match="Class is full"):
        class_service.enroll_student(small.id, students[1].id, db_service, professor.id)


def test_unknown_student_cannot_enroll(db_service, professor, course):
    with pytest.raises(NotFoundError, match="Student not found"):
        class_service.enroll_student(course.id, "stu_missing", db_service, professor.id)


def test_dropped_student_frees_a_seat_and_can_reenroll(db_service, professor, enrolled_course, students):
    dropped = class_service.update_enrollment_status(
        enrolled_course.id, students[0].id, "dropped", db_service, professor.id
    )
    assert dropped.currentEnrollment == 1
    assert dropped.availableSpots == 29

    back = class_service.enroll_student(enrolled_course.id, students[0].id, db_service, professor.id)
    entries = [e for e in back.enrolledStudents if e.student == students[0].id]
    assert len(entries) == 1
    assert entries[0].status == EnrollmentStatus.ENROLLED
    assert back.currentEnrollment == 2


def test_status_change_back_to_enrolled_needs_a_free_seat(db_service, professor, students):
    small = class_service.create_class(make_class_data(courseCode="SEM2", maxEnrollment=1), db_service, professor.id)
    class_service.enroll_student(small.id, students[0].id, db_service, professor.id)
    class_service.update_enrollment_status(small.id, students[0].id, "dropped", db_service, professor.id)
    class_service.enroll_student(small.id, students[1].id, db_service, professor.id)

    with pytest.raises(ClassFullError, match="Class is full"):
        class_service.update_enrollment_status(small.id, students[0].id, "enrolled", db_service, professor.id)

    current = class_service.get_class(small.id, professor.id, db_service)
    assert current.currentEnrollment == 1
    assert current.availableSpots == 0


def test_status_of_student_not_on_roster_is_not_found(db_service, professor, enrolled_course, students):
    with pytest.raises(NotFoundError, match="Student not found in this class"):
        class_service.update_enrollment_status(enrolled_course.id, students[2].id, "completed", db_service, professor.id)


def test_unknown_enrollment_status_is_invalid(db_service, professor, enrolled_course, students):
    with pytest.raises(InvalidInputError, match="Invalid enrollment status"):
        class_service.update_enrollment_status(enrolled_course.id, students[0].id, "graduated", db_service, professor.id)


# --- Announcements, Roster & Export ---

def test_announcements_are_appended(db_service, professor, course):
    class_service.add_announcement(
        course.id, AnnouncementCreate(title="Welcome", content="See you Monday"), db_service, professor.id
    )
    updated = class_service.add_announcement(
        course.id, AnnouncementCreate(title="Room change", content="Now in 210", priority="high"),
        db_service, professor.id,
    )
    assert [a.title for a in updated.announcements] == ["Welcome", "Room change"]
    assert updated.announcements[1].publishDate is not None


def test_roster_populates_students(db_service, professor, enrolled_course):
    roster = class_service.get_roster(enrolled_course.id, professor.id, db_service)

    assert roster.currentEnrollment == 2
    assert [entry.student.firstName for entry in roster.roster] == ["Alice", "Bob"]


def test_roster_export(db_service, professor, enrolled_course):
    csv_string = class_service.export_roster_as_csv(enrolled_course.id, professor.id, db_service)
    df = pd.read_csv(StringIO(csv_string))

    assert list(df.columns) == class_service.ROSTER_CSV_COLUMNS
    assert list(df["Student ID"]) == ["S1001", "S1002"]
    assert set(df["Class"]) == {"PHYS201 - Classical Mechanics"}


def test_empty_roster_export_has_headers_only(db_service, professor, course):
    csv_string = class_service.export_roster_as_csv(course.id, professor.id, db_service)
    assert csv_string.strip() == ",".join(class_service.ROSTER_CSV_COLUMNS)


# --- Students & Professors ---

def test_student_numbers_are_unique(db_service, students):
    duplicate = StudentCreate(studentId="S1001", firstName="Other", lastName="Person", email="other@college.edu")
    with pytest.raises(DuplicateError):
        student_service.create_student(duplicate, db_service)


def test_students_can_be_listed_by_class_and_search(db_service, professor, enrolled_course, students):
    in_class = student_service.get_students(db_service, professor.id, class_id=enrolled_course.id)
    assert {s.firstName for s in in_class} == {"Alice", "Bob"}

    found = student_service.get_students(db_service, professor.id, search="chen")
    assert [s.firstName for s in found] == ["Carol"]


def test_student_update_and_soft_delete(db_service, professor, students):
    updated = student_service.update_student(students[0].id, StudentUpdate(email="Alice.A@College.edu"), db_service)
    assert updated.email == "alice.a@college.edu"

    student_service.delete_student(students[0].id, db_service)
    assert student_service.get_student(students[0].id, db_service).isActive is False
    assert len(student_service.get_students(db_service, professor.id)) == 2
    assert len(student_service.get_students(db_service, professor.id, include_inactive=True)) == 3


def test_professor_email_is_stored_lowercase_and_unique(db_service, professor):
    assert professor.email == "ada.lovelace@college.edu"
    with pytest.raises(DuplicateError):
        student_service.create_professor(
            ProfessorCreate(firstName="Ada", lastName="L", email="ADA.LOVELACE@college.edu"), db_service
        )


# --- Dashboard ---

def test_dashboard_counts_distinct_enrolled_students(db_service, professor, enrolled_course, students):
    second = class_service.create_class(make_class_data(courseCode="PHYS202"), db_service, professor.id)
    class_service.enroll_student(second.id, students[0].id, db_service, professor.id)
    class_service.enroll_student(second.id, students[2].id, db_service, professor.id)
    archived = class_service.create_class(make_class_data(courseCode="PHYS101"), db_service, professor.id)
    class_service.delete_class(archived.id, db_service, professor.id)

    future = datetime.now().replace(microsecond=0) + timedelta(days=7)
    calendar_service.create_event(
        CalendarEventCreate(title="Review", eventType="lecture", startDateTime=future,
                            endDateTime=future + timedelta(hours=1)),
        db_service, professor.id,
    )

    summary = dashboard_service.get_summary_data(db_service, professor.id)

    assert summary.totalClasses == 3
    assert summary.activeClasses == 2
    assert summary.totalStudents == 3
    assert summary.totalGrades == 0
    assert summary.upcomingEvents == 1
