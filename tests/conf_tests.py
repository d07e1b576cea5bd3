import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from smart_campus.main import app
from smart_campus.campus import CampusSystem, get_campus
from smart_campus.db import Base, make_engine, init_database
from smart_campus.utils.persistence import CollectionStore

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
init_database(bind=engine)

_state = {}


# Dependency override
def override_get_campus():
    return _state["campus"]


app.dependency_overrides[get_campus] = override_get_campus

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all stored collections and start each test with an empty campus"""
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    campus = CampusSystem(CollectionStore(TestingSessionLocal))
    campus.startup(seed=False)
    _state["campus"] = campus
    yield campus
    _state.pop("campus", None)


@pytest.fixture
def test_store():
    """Provide a collection store bound to the test database"""
    return CollectionStore(TestingSessionLocal)


@pytest.fixture
def test_campus(clear_db):
    """The campus the HTTP client is talking to"""
    return clear_db


def get_next_id():
    """Helper function to generate unique identifiers"""
    if not hasattr(get_next_id, "count"):
        get_next_id.count = 0
    get_next_id.count += 1
    return get_next_id.count


@pytest.fixture
def test_classroom(test_campus):
    """Fixture to create a classroom in the running campus"""
    return test_campus.add_classroom("R101", "Lecture Hall", 120)


@pytest.fixture
def test_student_data():
    """Fixture for student data with a unique ID"""
    n = get_next_id()
    return {
        "id": f"S{2000 + n}",
        "name": f"Student {n}",
        "degree": "Engineering",
        "email": f"student{n}@SmartUni.edu",
    }
