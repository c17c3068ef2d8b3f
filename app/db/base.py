# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here ensures the
# Base class knows about every table before `create_all` runs.

from .base_class import Base

from .models.class_student_models import Professor, Class, Student
from .models.grade_models import Grade
from .models.calendar_models import CalendarEvent
