# /app/services/class_helpers/records.py

"""
Translation between the `professors`, `classes` and `students` rows and their
API models. Derived class values are computed here on every read.
"""

from typing import Dict

from ...db.models.class_student_models import Class as ClassRow, Professor as ProfessorRow, Student as StudentRow
from ...models.class_model import Announcement, Class, ClassSchedule, Enrollment, Syllabus
from ...models.professor_model import Professor, ProfessorCreate
from ...models.student_model import Student
from .enrollment import count_enrolled


def display_name(course_code: str, class_name: str) -> str:
    return f"{course_code} - {class_name}"


def class_from_row(row: ClassRow) -> Class:
    enrollments = [Enrollment.model_validate(e) for e in (row.enrolled_students or [])]
    current = count_enrolled(enrollments)
    return Class(
        id=row.id,
        professorId=row.professor_id,
        className=row.class_name,
        courseCode=row.course_code,
        description=row.description,
        semester=row.semester,
        year=row.year,
        credits=row.credits,
        schedule=ClassSchedule.model_validate(row.schedule),
        maxEnrollment=row.max_enrollment,
        syllabus=Syllabus.model_validate(row.syllabus) if row.syllabus else None,
        enrolledStudents=enrollments,
        announcements=[Announcement.model_validate(a) for a in (row.announcements or [])],
        isActive=row.is_active,
        currentEnrollment=current,
        availableSpots=row.max_enrollment - current,
        displayName=display_name(row.course_code, row.class_name),
    )


# Maps API field names onto column names for partial updates.
CLASS_COLUMNS = {
    "className": "class_name",
    "courseCode": "course_code",
    "description": "description",
    "semester": "semester",
    "year": "year",
    "credits": "credits",
    "schedule": "schedule",
    "maxEnrollment": "max_enrollment",
    "syllabus": "syllabus",
    "isActive": "is_active",
}


def row_values_from_class(class_data, exclude_unset: bool = False) -> Dict:
    """Column values for a `ClassBase` (create) or a `ClassUpdate` (partial)."""
    values = class_data.model_dump(mode="json", exclude_unset=exclude_unset)
    return {column: values[field] for field, column in CLASS_COLUMNS.items() if field in values}


def enrollments_to_json(enrollments) -> list:
    return [e.model_dump(mode="json") for e in enrollments]


def student_from_row(row: StudentRow) -> Student:
    return Student(
        id=row.id,
        studentId=row.student_number,
        firstName=row.first_name,
        lastName=row.last_name,
        email=row.email,
        phoneNumber=row.phone_number,
        major=row.major,
        academicYear=row.academic_year,
        isActive=row.is_active,
        createdAt=row.created_at,
    )


STUDENT_COLUMNS = {
    "studentId": "student_number",
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phoneNumber": "phone_number",
    "major": "major",
    "academicYear": "academic_year",
}


def row_values_from_student(student, exclude_unset: bool = False) -> Dict:
    """Column values for a `StudentCreate` or a partial `StudentUpdate`."""
    values = student.model_dump(exclude_unset=exclude_unset)
    return {column: values[field] for field, column in STUDENT_COLUMNS.items() if field in values}


def professor_from_row(row: ProfessorRow) -> Professor:
    return Professor(
        id=row.id,
        firstName=row.first_name,
        lastName=row.last_name,
        email=row.email,
        department=row.department,
        createdAt=row.created_at,
    )


def row_values_from_professor(professor: ProfessorCreate) -> Dict:
    return {
        "first_name": professor.firstName,
        "last_name": professor.lastName,
        "email": professor.email.strip().lower(),
        "department": professor.department,
    }
