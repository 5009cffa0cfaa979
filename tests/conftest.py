import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.seed.seed_data import seed_db


# Use SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enforce foreign keys so ON DELETE CASCADE behaves as on PostgreSQL."""
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


# Monkey-patch postgresql.UUID to work with SQLite (store as CHAR(36))
import sqlalchemy.dialects.sqlite.base as sqlite_base  # noqa: E402
if not getattr(sqlite_base.SQLiteTypeCompiler, 'visit_UUID', None):
    def visit_UUID(self, type_, **kw):
        return "CHAR(36)"
    sqlite_base.SQLiteTypeCompiler.visit_UUID = visit_UUID

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def seeded_db(db_session):
    """Create a database session with seeded data."""
    seed_db(db_session)
    return db_session


@pytest.fixture(scope="function")
def seeded_client(seeded_db):
    """Create a test client with seeded database."""
    def override_get_db():
        try:
            yield seeded_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def create_stop(client):
    """Fixture that provides a function creating a stop through the API and returning its JSON."""
    def _create(name, latitude=None, longitude=None, description=None):
        response = client.post(
            "/api/v1/stops",
            json={
                "name": name,
                "description": description,
                "latitude": latitude,
                "longitude": longitude,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create
