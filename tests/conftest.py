# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import base  # noqa: F401  (registers every model on Base.metadata)
from app.db.base_class import Base
from app.db.database import get_db
from app.main import app
from app.models.class_model import ClassCreate
from app.models.professor_model import ProfessorCreate
from app.models.student_model import StudentCreate
from app.services import class_service, student_service
from app.services.calendar_helpers.ical_sync import CalendarSyncService, get_calendar_sync_service
from app.services.database_service import DatabaseService


# --- Database Fixtures ---

@pytest.fixture
def engine():
    """A fresh in-memory SQLite database for each test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(db_session=session)


@pytest.fixture
def sync_service(tmp_path):
    return CalendarSyncService(
        data_dir=tmp_path / "calendars",
        base_url="http://portal.test/",
        timezone_name="America/New_York",
        product_id="-//Test Portal//Calendar//EN",
    )


# --- Seed Data Fixtures ---

@pytest.fixture
def professor(db_service):
    professor_data = ProfessorCreate(
        firstName="Ada", lastName="Lovelace", email="Ada.Lovelace@College.edu", department="Mathematics"
    )
    return student_service.create_professor(professor_data, db_service)


@pytest.fixture
def other_professor(db_service):
    professor_data = ProfessorCreate(firstName="Alan", lastName="Turing", email="alan@college.edu")
    return student_service.create_professor(professor_data, db_service)


@pytest.fixture
def students(db_service):
    """Three students: Alice, Bob and Carol."""
    raw = [
        ("s1001", "Alice", "Anders", "alice@college.edu"),
        ("s1002", "Bob", "Brown", "bob@college.edu"),
        ("s1003", "Carol", "Chen", "carol@college.edu"),
    ]
    return [
        student_service.create_student(
            StudentCreate(studentId=number, firstName=first, lastName=last, email=email, major="Physics"),
            db_service,
        )
        for number, first, last, email in raw
    ]


def make_class_data(**overrides) -> ClassCreate:
    data = {
        "className": "Classical Mechanics",
        "courseCode": " phys201 ",
        "semester": "Fall",
        "year": 2025,
        "credits": 4,
        "schedule": {
            "days": ["Monday", "Wednesday"],
            "startTime": "09:00",
            "endTime": "10:15",
            "location": {"building": "Science Hall", "room": "204"},
        },
        "maxEnrollment": 30,
    }
    data.update(overrides)
    return ClassCreate(**data)


@pytest.fixture
def course(db_service, professor):
    return class_service.create_class(make_class_data(), db_service, professor.id)


@pytest.fixture
def enrolled_course(db_service, professor, course, students):
    """`course` with Alice and Bob enrolled; Carol is not."""
    class_service.enroll_student(course.id, students[0].id, db_service, professor.id)
    return class_service.enroll_student(course.id, students[1].id, db_service, professor.id)


# --- API Fixtures ---

@pytest.fixture
def client(session, sync_service):
    """
    A TestClient bound to the test database. The lifespan is not run, so the
    application never touches the configured database.
    """
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_calendar_sync_service] = lambda: sync_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(professor):
    return {"X-Professor-Id": professor.id}
