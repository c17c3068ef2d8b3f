# /app/services/database_helpers/grade_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Grade table.

Reads and writes are scoped to the authoring professor. The one exception is
`find_grade_by_assignment`, which looks at the global (student, class,
assignment name) key exactly as the database constraint does.
"""

from typing import Dict, List, Optional, Tuple

from app.db.models.grade_models import Grade
from .base_repository_sql import BaseRepositorySQL

GRADE_DUPLICATE_MESSAGE = "Grade already exists for this assignment"


class GradeRepositorySQL(BaseRepositorySQL):

    def add_grade(self, record: Dict) -> Grade:
        return self._add(Grade(**record), GRADE_DUPLICATE_MESSAGE)

    def get_grade(self, grade_id: str, professor_id: str) -> Optional[Grade]:
        return self.db.query(Grade).filter(Grade.id == grade_id, Grade.professor_id == professor_id).first()

    def find_grade_by_assignment(self, student_id: str, class_id: str, assignment_name: str) -> Optional[Grade]:
        return (
            self.db.query(Grade)
            .filter(
                Grade.student_id == student_id,
                Grade.class_id == class_id,
                Grade.assignment_name == assignment_name,
            )
            .first()
        )

    def query_grades(
        self,
        professor_id: str,
        class_id: Optional[str] = None,
        student_id: Optional[str] = None,
        assignment_type: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Grade], int]:
        """Filtered, paginated listing. Returns the page and the total match count."""
        query = self.db.query(Grade).filter(Grade.professor_id == professor_id)
        if class_id:
            query = query.filter(Grade.class_id == class_id)
        if student_id:
            query = query.filter(Grade.student_id == student_id)
        if assignment_type:
            query = query.filter(Grade.assignment_type == assignment_type)

        total = query.count()
        rows = (
            query.order_by(Grade.due_date.desc(), Grade.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return rows, total

    def get_grades_for_class(self, class_id: str, professor_id: str) -> List[Grade]:
        return (
            self.db.query(Grade)
            .filter(Grade.class_id == class_id, Grade.professor_id == professor_id)
            .order_by(Grade.due_date.asc(), Grade.created_at.asc())
            .all()
        )

    def get_grades_for_student(self, student_id: str, professor_id: str) -> List[Grade]:
        return (
            self.db.query(Grade)
            .filter(Grade.student_id == student_id, Grade.professor_id == professor_id)
            .order_by(Grade.due_date.desc(), Grade.created_at.desc())
            .all()
        )

    def count_grades(self, professor_id: str) -> int:
        return self.db.query(Grade).filter(Grade.professor_id == professor_id).count()

    def update_grade(self, grade_id: str, professor_id: str, data: Dict) -> Optional[Grade]:
        db_grade = self.get_grade(grade_id=grade_id, professor_id=professor_id)
        if db_grade is None:
            return None
        return self._apply(db_grade, data, GRADE_DUPLICATE_MESSAGE)

    def delete_grade(self, grade_id: str, professor_id: str) -> bool:
        db_grade = self.get_grade(grade_id=grade_id, professor_id=professor_id)
        if db_grade is None:
            return False
        self.db.delete(db_grade)
        self._commit()
        return True
