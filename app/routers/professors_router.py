# /app/routers/professors_router.py

from fastapi import APIRouter, Depends, status

from ..core.deps import get_current_professor_id
from ..models import professor_model
from ..services import database_service, student_service

router = APIRouter()


@router.post("", response_model=professor_model.Professor, status_code=status.HTTP_201_CREATED, summary="Create a Professor Profile")
def create_professor(
    professor_create: professor_model.ProfessorCreate,
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    # Account provisioning happens before authentication, so no caller header is required.
    return student_service.create_professor(professor_data=professor_create, db=db)

@router.get("/profile", response_model=professor_model.Professor, summary="Get the Caller's Profile")
def get_profile(
    professor_id: str = Depends(get_current_professor_id),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return student_service.get_professor(professor_id=professor_id, db=db)
