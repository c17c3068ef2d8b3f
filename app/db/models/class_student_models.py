# /app/db/models/class_student_models.py

"""
This module defines the SQLAlchemy ORM models for the `Professor`, `Class`
and `Student` entities.

A professor owns classes. Students are shared records: they are not owned by
any single professor and join classes through the embedded enrollment list
stored on each class.
"""

from sqlalchemy import Column, String, Integer, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Professor(Base):
    """
    SQLAlchemy model for the account holder. Every class, grade and calendar
    event belongs to exactly one professor.
    """
    id = Column(String, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    classes = relationship("Class", back_populates="owner")


class Class(Base):
    """
    SQLAlchemy model representing a course section taught by a professor.

    `schedule`, `enrolled_students`, `syllabus` and `announcements` are
    embedded documents kept as JSON. Derived values such as the current
    enrollment count are never stored; they are computed on read.
    """
    __tablename__ = "classes"
    __table_args__ = (
        UniqueConstraint("professor_id", "course_code", "semester", "year", name="uq_class_course_term"),
    )

    id = Column(String, primary_key=True, index=True)
    class_name = Column(String, index=True, nullable=False)
    course_code = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    semester = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    credits = Column(Integer, nullable=False)
    schedule = Column(JSON, nullable=False)
    enrolled_students = Column(JSON, nullable=False, default=list)
    max_enrollment = Column(Integer, nullable=False, default=30)
    syllabus = Column(JSON, nullable=True)
    announcements = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    professor_id = Column(String, ForeignKey("professors.id"), nullable=False, index=True)
    owner = relationship("Professor", back_populates="classes")


class Student(Base):
    """
    SQLAlchemy model representing a single student. `student_number` is the
    institution-issued identifier and is unique across the whole system.
    """
    id = Column(String, primary_key=True, index=True)
    student_number = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, index=True, nullable=False)
    last_name = Column(String, index=True, nullable=False)
    email = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    major = Column(String, nullable=True)
    academic_year = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
