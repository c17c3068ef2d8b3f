# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..core.config import DATABASE_URL
from .base_class import Base

# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables():
    """Creates every table registered on the declarative Base."""
    # Importing the registry makes sure all models are attached to Base.metadata.
    from . import base  # noqa: F401
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session. This is used by the routers via get_db_service.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
