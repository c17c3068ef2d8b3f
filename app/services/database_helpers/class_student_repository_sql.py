# /app/services/database_helpers/class_student_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Professor, Class,
and Student tables. It is the direct interface to the database for all roster
and account data.

Every method that reads or modifies professor-owned data requires a
`professor_id`, so a professor can never see or change another professor's
classes. Students are shared records and are looked up globally.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_

from app.db.models.class_student_models import Class, Professor, Student
from .base_repository_sql import BaseRepositorySQL

CLASS_DUPLICATE_MESSAGE = "A class with this course code already exists for this semester and year"


class ClassStudentRepositorySQL(BaseRepositorySQL):

    # --- Professor Methods ---

    def get_professor_by_id(self, professor_id: str) -> Optional[Professor]:
        return self.db.query(Professor).filter(Professor.id == professor_id).first()

    def get_professor_by_email(self, email: str) -> Optional[Professor]:
        return self.db.query(Professor).filter(Professor.email == email).first()

    def add_professor(self, record: Dict) -> Professor:
        return self._add(Professor(**record), "A professor with this email already exists")

    # --- Class Methods ---

    def get_classes(
        self,
        professor_id: str,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> List[Class]:
        """Retrieves the classes owned by a professor, newest term first."""
        query = self.db.query(Class).filter(Class.professor_id == professor_id)
        if semester is not None:
            query = query.filter(Class.semester == semester)
        if year is not None:
            query = query.filter(Class.year == year)
        if is_active is not None:
            query = query.filter(Class.is_active == is_active)
        return query.order_by(Class.year.desc(), Class.course_code).all()

    def get_class_by_id(self, class_id: str, professor_id: str) -> Optional[Class]:
        """
        Retrieves a single class by its ID, but only if it is owned by the
        specified professor.
        """
        return self.db.query(Class).filter(Class.id == class_id, Class.professor_id == professor_id).first()

    def add_class(self, record: Dict) -> Class:
        """Creates a new Class record. `record` must carry the `professor_id`."""
        return self._add(Class(**record), CLASS_DUPLICATE_MESSAGE)

    def update_class(self, class_id: str, professor_id: str, data: Dict) -> Optional[Class]:
        """Updates a class, but only if it is owned by the specified professor."""
        db_class = self.get_class_by_id(class_id=class_id, professor_id=professor_id)
        if db_class is None:
            return None
        return self._apply(db_class, data, CLASS_DUPLICATE_MESSAGE)

    # --- Student Methods ---

    def get_students(self, search: Optional[str] = None, include_inactive: bool = False) -> List[Student]:
        query = self.db.query(Student)
        if not include_inactive:
            query = query.filter(Student.is_active.is_(True))
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Student.first_name.ilike(pattern),
                Student.last_name.ilike(pattern),
                Student.student_number.ilike(pattern),
                Student.email.ilike(pattern),
            ))
        return query.order_by(Student.last_name, Student.first_name).all()

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def get_students_by_ids(self, student_ids: Iterable[str]) -> List[Student]:
        student_ids = list(student_ids)
        if not student_ids:
            return []
        return self.db.query(Student).filter(Student.id.in_(student_ids)).all()

    def get_student_by_student_number(self, student_number: str) -> Optional[Student]:
        """
        Retrieves a student by their official (non-primary key) student ID.
        This is a global lookup, as student IDs are unique across the system.
        """
        return self.db.query(Student).filter(Student.student_number == student_number).first()

    def add_student(self, record: Dict) -> Student:
        return self._add(Student(**record), "A student with this student ID already exists")

    def update_student(self, student_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student is None:
            return None
        return self._apply(db_student, data)
