# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import get_current_professor_id
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service
from ..models.dashboard_model import DashboardSummary

router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves the headline statistics for the professor's home page."
)
def get_dashboard_summary(
    professor_id: str = Depends(get_current_professor_id),
    db: DatabaseService = Depends(get_db_service)
):
    return dashboard_service.get_summary_data(db=db, professor_id=professor_id)
