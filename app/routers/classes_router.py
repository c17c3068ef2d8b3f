# /app/routers/classes_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import StreamingResponse

from ..core.deps import get_current_professor_id
from ..models import class_model
from ..services import class_service, database_service

router = APIRouter()

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.Class], summary="Get All Classes")
def get_all_classes(
    semester: Optional[class_model.Semester] = None,
    year: Optional[int] = None,
    isActive: Optional[bool] = None,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.get_classes(
        professor_id=professor_id, db=db,
        semester=semester.value if semester else None, year=year, is_active=isActive,
    )

@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(
    class_create: class_model.ClassCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.create_class(class_data=class_create, db=db, professor_id=professor_id)

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=class_model.Class, summary="Get a Single Class")
def get_class_by_id(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.get_class(class_id=class_id, professor_id=professor_id, db=db)

@router.put("/{class_id}", response_model=class_model.Class, summary="Update a Class")
def update_class_details(
    class_id: str,
    class_update: class_model.ClassUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.update_class(class_id=class_id, class_update=class_update, db=db, professor_id=professor_id)

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Deactivate a Class")
def delete_class(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    class_service.delete_class(class_id=class_id, db=db, professor_id=professor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- ENROLLMENT SUB-RESOURCE ENDPOINTS ---

@router.post("/{class_id}/enroll", response_model=class_model.Class, summary="Enroll a Student")
def enroll_student(
    class_id: str,
    enroll_request: class_model.EnrollRequest,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.enroll_student(
        class_id=class_id, student_id=enroll_request.studentId, db=db, professor_id=professor_id
    )

@router.put("/{class_id}/students/{student_id}/status", response_model=class_model.Class, summary="Update Enrollment Status")
def update_enrollment_status(
    class_id: str,
    student_id: str,
    status_update: class_model.EnrollmentStatusUpdate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.update_enrollment_status(
        class_id=class_id, student_id=student_id, status=status_update.status, db=db, professor_id=professor_id
    )

@router.post("/{class_id}/announcements", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Post an Announcement")
def add_announcement(
    class_id: str,
    announcement: class_model.AnnouncementCreate,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.add_announcement(
        class_id=class_id, announcement_data=announcement, db=db, professor_id=professor_id
    )

@router.get("/{class_id}/roster", response_model=class_model.ClassRoster, summary="Get the Class Roster")
def get_class_roster(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return class_service.get_roster(class_id=class_id, professor_id=professor_id, db=db)

# --- EXPORT ENDPOINTS ---

@router.get("/{class_id}/export", summary="Export Class Roster as CSV", response_class=StreamingResponse)
def export_class_roster_csv(
    class_id: str,
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    csv_string = class_service.export_roster_as_csv(class_id=class_id, professor_id=professor_id, db=db)
    file_name = f"roster_{class_id}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})

