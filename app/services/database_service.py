# /app/services/database_service.py

"""
The persistence facade handed to every service.

Services never talk to SQLAlchemy directly; they call these delegated
methods, which keeps the grade and calendar engines testable against a
mocked `DatabaseService`.
"""

from datetime import datetime
from typing import Dict, Generator, Iterable, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.class_student_repository_sql import ClassStudentRepositorySQL
from .database_helpers.grade_repository_sql import GradeRepositorySQL
from .database_helpers.calendar_repository_sql import CalendarRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.class_student_repo = ClassStudentRepositorySQL(db_session)
        self.grade_repo = GradeRepositorySQL(db_session)
        self.calendar_repo = CalendarRepositorySQL(db_session)

    # --- PROFESSOR METHODS (DELEGATED) ---
    def get_professor_by_id(self, professor_id: str): return self.class_student_repo.get_professor_by_id(professor_id)
    def get_professor_by_email(self, email: str): return self.class_student_repo.get_professor_by_email(email)
    def add_professor(self, record: Dict): return self.class_student_repo.add_professor(record)

    # --- CLASS & STUDENT METHODS (DELEGATED) ---
    def get_classes(self, professor_id: str, semester: Optional[str] = None, year: Optional[int] = None, is_active: Optional[bool] = None) -> List:
        return self.class_student_repo.get_classes(professor_id=professor_id, semester=semester, year=year, is_active=is_active)
    def get_class_by_id(self, class_id: str, professor_id: str): return self.class_student_repo.get_class_by_id(class_id=class_id, professor_id=professor_id)
    def add_class(self, class_record: Dict): return self.class_student_repo.add_class(class_record)
    def update_class(self, class_id: str, professor_id: str, data: Dict): return self.class_student_repo.update_class(class_id=class_id, professor_id=professor_id, data=data)
    def get_students(self, search: Optional[str] = None, include_inactive: bool = False) -> List: return self.class_student_repo.get_students(search=search, include_inactive=include_inactive)
    def get_student_by_id(self, student_id: str): return self.class_student_repo.get_student_by_id(student_id)
    def get_students_by_ids(self, student_ids: Iterable[str]) -> List: return self.class_student_repo.get_students_by_ids(student_ids)
    def get_student_by_student_number(self, student_number: str): return self.class_student_repo.get_student_by_student_number(student_number)
    def add_student(self, student_record: Dict): return self.class_student_repo.add_student(student_record)
    def update_student(self, student_id: str, data: Dict): return self.class_student_repo.update_student(student_id, data)

    # --- GRADE METHODS (DELEGATED) ---
    def add_grade(self, grade_record: Dict): return self.grade_repo.add_grade(grade_record)
    def get_grade(self, grade_id: str, professor_id: str): return self.grade_repo.get_grade(grade_id=grade_id, professor_id=professor_id)
    def find_grade_by_assignment(self, student_id: str, class_id: str, assignment_name: str):
        return self.grade_repo.find_grade_by_assignment(student_id=student_id, class_id=class_id, assignment_name=assignment_name)
    def query_grades(self, professor_id: str, class_id: Optional[str] = None, student_id: Optional[str] = None, assignment_type: Optional[str] = None, skip: int = 0, limit: int = 10) -> Tuple[List, int]:
        return self.grade_repo.query_grades(professor_id=professor_id, class_id=class_id, student_id=student_id, assignment_type=assignment_type, skip=skip, limit=limit)
    def get_grades_for_class(self, class_id: str, professor_id: str) -> List: return self.grade_repo.get_grades_for_class(class_id=class_id, professor_id=professor_id)
    def get_grades_for_student(self, student_id: str, professor_id: str) -> List: return self.grade_repo.get_grades_for_student(student_id=student_id, professor_id=professor_id)
    def count_grades(self, professor_id: str) -> int: return self.grade_repo.count_grades(professor_id)
    def update_grade(self, grade_id: str, professor_id: str, data: Dict): return self.grade_repo.update_grade(grade_id=grade_id, professor_id=professor_id, data=data)
    def delete_grade(self, grade_id: str, professor_id: str) -> bool: return self.grade_repo.delete_grade(grade_id=grade_id, professor_id=professor_id)

    # --- CALENDAR METHODS (DELEGATED) ---
    def add_event(self, event_record: Dict): return self.calendar_repo.add_event(event_record)
    def get_event(self, event_id: str, professor_id: str): return self.calendar_repo.get_event(event_id=event_id, professor_id=professor_id)
    def find_event_by_external_id(self, professor_id: str, external_id: str): return self.calendar_repo.find_event_by_external_id(professor_id=professor_id, external_id=external_id)
    def query_events(self, professor_id: str, start_from: Optional[datetime] = None, start_to: Optional[datetime] = None, event_type: Optional[str] = None, class_id: Optional[str] = None, status: Optional[str] = None, visible_only: bool = True, skip: int = 0, limit: Optional[int] = None) -> Tuple[List, int]:
        return self.calendar_repo.query_events(professor_id=professor_id, start_from=start_from, start_to=start_to, event_type=event_type, class_id=class_id, status=status, visible_only=visible_only, skip=skip, limit=limit)
    def update_event(self, event_id: str, professor_id: str, data: Dict): return self.calendar_repo.update_event(event_id=event_id, professor_id=professor_id, data=data)
    def delete_event(self, event_id: str, professor_id: str) -> bool: return self.calendar_repo.delete_event(event_id=event_id, professor_id=professor_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
