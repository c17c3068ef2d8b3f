# /app/services/dashboard_service.py

# --- Core Imports ---
import logging
from datetime import datetime

# Import the Pydantic model to ensure our output matches the data contract.
from ..models.dashboard_model import DashboardSummary
from ..models.class_model import EnrollmentStatus
from ..models.calendar_model import EventStatus
# Import the DatabaseService to interact with our data layer.
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Core Public Function ---

def get_summary_data(db: DatabaseService, professor_id: str) -> DashboardSummary:
    """
    Calculates the dashboard statistics for one professor.

    Students are counted once even when enrolled in several of the
    professor's active classes, and only if their record still exists.
    """
    all_classes = db.get_classes(professor_id=professor_id)
    active_classes = [c for c in all_classes if c.is_active]

    enrolled_ids = {
        e["student"]
        for c in active_classes
        for e in (c.enrolled_students or [])
        if e.get("status") == EnrollmentStatus.ENROLLED.value
    }
    student_count = len(db.get_students_by_ids(enrolled_ids))

    _, upcoming = db.query_events(
        professor_id=professor_id, start_from=datetime.now(),
        status=EventStatus.SCHEDULED.value, visible_only=False, limit=0,
    )

    return DashboardSummary(
        totalClasses=len(all_classes),
        activeClasses=len(active_classes),
        totalStudents=student_count,
        totalGrades=db.count_grades(professor_id),
        upcomingEvents=upcoming,
    )
