# /app/models/dashboard_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field

# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint.
    These are the headline numbers shown on a professor's home page.
    """

    totalClasses: int = Field(..., description="Every class the professor owns, active or not.", examples=[5])
    activeClasses: int = Field(..., description="Classes that have not been archived.", examples=[4])
    totalStudents: int = Field(
        ...,
        description="Distinct students currently enrolled across the professor's active classes.",
        examples=[112]
    )
    totalGrades: int = Field(..., description="Grades the professor has recorded.", examples=[640])
    upcomingEvents: int = Field(..., description="Scheduled calendar events that have not started yet.", examples=[7])
