# /app/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_current_professor_id
from ..models import grade_model, student_model
from ..services import database_service, grade_service, student_service

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="List Students")
def list_students(
    search: Optional[str] = None,
    classId: Optional[str] = None,
    includeInactive: bool = False,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return student_service.get_students(
        db=db, professor_id=professor_id, search=search, class_id=classId, include_inactive=includeInactive
    )

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
def create_student(
    student_create: student_model.StudentCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return student_service.create_student(student_data=student_create, db=db)

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(
    student_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return student_service.get_student(student_id=student_id, db=db)

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student(
    student_id: str,
    student_update: student_model.StudentUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return student_service.update_student(student_id=student_id, student_update=student_update, db=db)

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Deactivate a Student")
def delete_student(
    student_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    student_service.delete_student(student_id=student_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{student_id}/grades", response_model=grade_model.StudentGradeReport, summary="Get a Student's Grades")
def get_student_grades(
    student_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.get_student_summary(student_id=student_id, professor_id=professor_id, db=db)
