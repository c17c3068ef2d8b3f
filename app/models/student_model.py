# /app/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]{2,}$"

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    studentId: str = Field(..., min_length=1, description="The official, institution-issued ID number for the student.")
    firstName: str = Field(..., min_length=1, max_length=50)
    lastName: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phoneNumber: Optional[str] = Field(default=None, pattern=r"^\+?[\d\s\-\(\)]+$")
    major: Optional[str] = None
    academicYear: Optional[str] = Field(default=None, description="Freshman, Sophomore, Junior, Senior or Graduate.")

    @field_validator("studentId")
    @classmethod
    def normalize_student_id(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()

class StudentCreate(StudentBase):
    """The model used for creating a new student. Inherits all fields from the base."""
    pass

class StudentUpdate(BaseModel):
    """
    The model for updating a student. All fields are optional to allow for
    partial updates.
    """
    model_config = ConfigDict(from_attributes=True)

    firstName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    phoneNumber: Optional[str] = Field(default=None, pattern=r"^\+?[\d\s\-\(\)]+$")
    major: Optional[str] = None
    academicYear: Optional[str] = None

class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    isActive: bool = True
    createdAt: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}"
