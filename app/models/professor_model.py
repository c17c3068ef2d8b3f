# /app/models/professor_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .student_model import EMAIL_PATTERN


class ProfessorCreate(BaseModel):
    firstName: str = Field(..., min_length=1, max_length=50)
    lastName: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    department: Optional[str] = None


class Professor(ProfessorCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    createdAt: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}"
