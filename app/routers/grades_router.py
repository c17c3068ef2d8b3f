# /app/routers/grades_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import StreamingResponse

from ..core import config
from ..core.deps import get_current_professor_id
from ..models import grade_model
from ..services import database_service, grade_service

router = APIRouter()

# --- GRADE COLLECTION ENDPOINTS (/api/grades) ---

@router.get("", response_model=grade_model.GradeListResponse, summary="List Grades")
def list_grades(
    classId: Optional[str] = None,
    studentId: Optional[str] = None,
    assignmentType: Optional[grade_model.AssignmentType] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=config.DEFAULT_PAGE_SIZE, ge=1, le=100),
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.list_grades(
        db=db, professor_id=professor_id, class_id=classId, student_id=studentId,
        assignment_type=assignmentType.value if assignmentType else None, page=page, limit=limit,
    )

@router.post("", response_model=grade_model.Grade, status_code=status.HTTP_201_CREATED, summary="Record a Grade")
def create_grade(
    grade_create: grade_model.GradeCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.create_grade(grade_data=grade_create, db=db, professor_id=professor_id)

@router.post("/bulk", response_model=grade_model.BulkGradeResult, summary="Record Many Grades")
def bulk_create_grades(
    bulk_create: grade_model.BulkGradeCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.bulk_create_grades(bulk_data=bulk_create, db=db, professor_id=professor_id)

# --- SUMMARY & EXPORT ENDPOINTS ---

@router.get("/class/{class_id}/summary", response_model=grade_model.ClassGradeSummary, summary="Get the Class Grade Summary")
def get_class_summary(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.get_class_summary(class_id=class_id, professor_id=professor_id, db=db)

@router.get("/class/{class_id}/export", summary="Export the Class Gradebook as CSV", response_class=StreamingResponse)
def export_class_gradebook(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    csv_string = grade_service.export_gradebook_as_csv(class_id=class_id, professor_id=professor_id, db=db)
    file_name = f"gradebook_{class_id}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})

@router.get("/student/{student_id}/summary", response_model=grade_model.StudentGradeReport, summary="Get a Student's Grade Report")
def get_student_summary(
    student_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.get_student_summary(student_id=student_id, professor_id=professor_id, db=db)

# --- INDIVIDUAL GRADE RESOURCE ENDPOINTS (/api/grades/{grade_id}) ---

@router.get("/{grade_id}", response_model=grade_model.Grade, summary="Get a Single Grade")
def get_grade(
    grade_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.get_grade(grade_id=grade_id, professor_id=professor_id, db=db)

@router.put("/{grade_id}", response_model=grade_model.Grade, summary="Update a Grade")
def update_grade(
    grade_id: str,
    grade_update: grade_model.GradeUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return grade_service.update_grade(grade_id=grade_id, grade_update=grade_update, db=db, professor_id=professor_id)

@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Grade")
def delete_grade(
    grade_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    grade_service.delete_grade(grade_id=grade_id, professor_id=professor_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
