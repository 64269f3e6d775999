import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quarterplan.core.database import get_db
from quarterplan.main import app
from quarterplan.models.base import Base
from quarterplan.services.catalog import InMemoryCatalog
from tests.helpers import course, major


@pytest.fixture
def two_course_catalog():
    c1 = course("c1", units=3)
    c2 = course("c2", units=4, prereqs=["c1"])
    m = major("m", ["c1", "c2"])
    return m, InMemoryCatalog(courses=[c1, c2], majors=[m])


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
