# /app/core/config.py

"""
Runtime configuration for the portal backend.

Values come from the process environment (optionally seeded from a local
`.env` file) and are exposed as plain module-level constants, so any module
can import exactly the setting it needs.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portal.db")

# --- Calendar sync ---
# Directory where generated .ics files are written, one file per professor.
CALENDAR_DATA_DIR = os.getenv("CALENDAR_DATA_DIR", "app/data/calendars")
# Externally reachable base URL, used to build public calendar feed links.
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")
CALENDAR_TIMEZONE = os.getenv("CALENDAR_TIMEZONE", "America/New_York")
CALENDAR_PRODUCT_ID = os.getenv("CALENDAR_PRODUCT_ID", "-//College Management System//Class Calendar//EN")

# --- API ---
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
