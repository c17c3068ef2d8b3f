# /app/models/grade_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Core Enumerations ---
class AssignmentType(str, Enum):
    HOMEWORK = "homework"; QUIZ = "quiz"; EXAM = "exam"; PROJECT = "project"
    PARTICIPATION = "participation"; ATTENDANCE = "attendance"; MIDTERM = "midterm"; FINAL = "final"

class LetterGrade(str, Enum):
    A_PLUS = "A+"; A = "A"; A_MINUS = "A-"
    B_PLUS = "B+"; B = "B"; B_MINUS = "B-"
    C_PLUS = "C+"; C = "C"; C_MINUS = "C-"
    D_PLUS = "D+"; D = "D"; D_MINUS = "D-"
    F = "F"
    INCOMPLETE = "I"  # explicit override only, never derived
    WITHDRAWN = "W"   # explicit override only, never derived


# --- Embedded Documents ---

class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    name: str = Field(..., min_length=1, max_length=100)
    type: AssignmentType
    dueDate: Optional[datetime] = None
    maxPoints: float = Field(..., ge=0)
    weight: float = Field(default=1, ge=0, le=100)

class Score(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    points: float = Field(..., ge=0)
    percentage: Optional[float] = Field(default=None, ge=0)
    letterGrade: Optional[LetterGrade] = None

class ScoreBreakdown(BaseModel):
    """The result of deriving a score from raw points."""
    percentage: float
    letterGrade: LetterGrade

class Feedback(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    comments: Optional[str] = Field(default=None, max_length=1000)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    isPrivate: bool = False

class SubmissionInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    submittedAt: Optional[datetime] = None
    isLate: bool = False
    latePenalty: float = Field(default=0, ge=0, le=100)

class RubricItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    criteria: Optional[str] = None
    maxPoints: Optional[float] = None
    earnedPoints: Optional[float] = None
    comments: Optional[str] = None


# --- API Contract Models ---

class GradeCreate(BaseModel):
    studentId: str = Field(..., min_length=1)
    classId: str = Field(..., min_length=1)
    assignment: Assignment
    score: Score
    feedback: Feedback = Field(default_factory=Feedback)
    submissionInfo: SubmissionInfo = Field(default_factory=SubmissionInfo)
    rubric: List[RubricItem] = Field(default_factory=list)
    isExcused: bool = False
    isExtra: bool = False

class GradeUpdate(BaseModel):
    """
    Partial update. The student/class pair of a grade is fixed at creation;
    only the assignment, score and submission details can change.
    """
    assignment: Optional[Assignment] = None
    score: Optional[Score] = None
    feedback: Optional[Feedback] = None
    submissionInfo: Optional[SubmissionInfo] = None
    rubric: Optional[List[RubricItem]] = None
    isExcused: Optional[bool] = None
    isExtra: Optional[bool] = None

class Grade(GradeCreate):
    model_config = ConfigDict(from_attributes=True)
    id: str
    professorId: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class Pagination(BaseModel):
    current: int
    pages: int
    total: int
    limit: int

class GradeListResponse(BaseModel):
    grades: List[Grade]
    pagination: Pagination

class BulkGradeCreate(BaseModel):
    grades: List[GradeCreate] = Field(..., min_length=1)

class BulkGradeFailure(BaseModel):
    index: int
    kind: str
    message: str

class BulkGradeResult(BaseModel):
    created: List[Grade]
    failed: List[BulkGradeFailure]


# --- Summary Models ---

class StudentGradeSummary(BaseModel):
    studentId: str
    studentName: Optional[str] = None
    grades: List[Grade]
    totalPoints: float = 0
    maxTotalPoints: float = 0
    percentage: float = 0

class ClassGradeStatistics(BaseModel):
    totalStudents: int
    totalGrades: int
    classAverage: float
    highestGrade: float
    lowestGrade: float

class ClassGradeSummary(BaseModel):
    studentGrades: List[StudentGradeSummary]
    statistics: ClassGradeStatistics

class ClassScoreSummary(BaseModel):
    classId: str
    className: Optional[str] = None
    grades: List[Grade]
    totalPoints: float = 0
    maxTotalPoints: float = 0
    percentage: float = 0

class StudentGradeReport(BaseModel):
    classSummaries: List[ClassScoreSummary]
    totalGrades: int
