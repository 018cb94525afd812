import os
import sys
import tempfile
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are read at import time, so point them somewhere harmless first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="record-service-logs-"))

# Now import after path is set
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, apply_sqlite_pragmas
from dependencies import RECORD_DEFINITIONS, build_record_service
from models import Department, Employee, Skill


@pytest.fixture
def db_engine():
    """In-memory database shared by every connection of one test"""
    engine = apply_sqlite_pragmas(create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    ))
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create in-memory database for testing"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def staff(db_session):
    """
    Seed a small staff directory.

    - departments: Engineering (1), Sales (2)
    - skills: Python (1), SQL (2), Go (3)
    - employees 1-4: Alice Foo, Bob Stone, Carol Foodie, Dan Smith
    - employees 5-25: Worker 01 .. Worker 21, age 60, no department
    """
    engineering = Department(name="Engineering", code="ENG")
    sales = Department(name="Sales", code="SAL")
    python = Skill(name="Python", level=4)
    sql = Skill(name="SQL", level=3)
    go = Skill(name="Go", level=2)
    db_session.add_all([engineering, sales, python, sql, go])
    db_session.flush()

    employees = [
        Employee(name="Alice Foo", email="alice@example.com", age=34,
                 department=engineering, skills=[python, sql]),
        Employee(name="Bob Stone", email="bob@example.com", age=41,
                 department=sales, skills=[sql]),
        Employee(name="Carol Foodie", email="carol@example.com", age=29,
                 department=engineering, skills=[]),
        Employee(name="Dan Smith", email="dan@example.com", age=45,
                 department=None, skills=[go]),
    ]
    employees += [
        Employee(name=f"Worker {i:02d}", email=f"worker{i:02d}@example.com", age=60)
        for i in range(1, 22)
    ]
    db_session.add_all(employees)
    db_session.commit()

    return {
        "departments": [engineering, sales],
        "skills": [python, sql, go],
        "employees": employees,
    }


@pytest.fixture
def employee_service(db_session, staff):
    return build_record_service(db_session, RECORD_DEFINITIONS["employees"])


@pytest.fixture
def department_service(db_session, staff):
    return build_record_service(db_session, RECORD_DEFINITIONS["departments"])
