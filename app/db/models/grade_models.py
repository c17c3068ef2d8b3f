# /app/db/models/grade_models.py

"""
SQLAlchemy ORM model for a single graded assignment of one student in one
class.
"""

from sqlalchemy import Column, String, Float, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Grade(Base):
    """
    The assignment descriptor and score are flattened into columns so the
    (student, class, assignment name) uniqueness can be enforced by the
    database itself.

    `percentage` and `letter_grade` hold explicit overrides only. When they
    are NULL the values are derived from points and max points on read.
    """
    __table_args__ = (
        UniqueConstraint("student_id", "class_id", "assignment_name", name="uq_grade_assignment"),
    )

    id = Column(String, primary_key=True, index=True)

    assignment_name = Column(String, nullable=False)
    assignment_type = Column(String, index=True, nullable=False)
    due_date = Column(DateTime, nullable=True)
    max_points = Column(Float, nullable=False)
    weight = Column(Float, nullable=False, default=1)

    points = Column(Float, nullable=False)
    percentage = Column(Float, nullable=True)
    letter_grade = Column(String, nullable=True)

    feedback = Column(JSON, nullable=True)
    submitted_at = Column(DateTime, nullable=True)
    is_late = Column(Boolean, nullable=False, default=False)
    late_penalty = Column(Float, nullable=False, default=0)
    rubric = Column(JSON, nullable=False, default=list)
    is_excused = Column(Boolean, nullable=False, default=False)
    is_extra = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    professor_id = Column(String, ForeignKey("professors.id"), nullable=False, index=True)

    student = relationship("Student")
    class_ = relationship("Class")
