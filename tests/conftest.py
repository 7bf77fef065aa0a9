# tests/conftest.py
import os
import sys
import uuid
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Point the app at SQLite before any module reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SALES_TIMEZONE", "UTC")

# Add project root to Python path
project_root = Path(__file__).parent.parent.absolute()
sys.path.insert(0, str(project_root))

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from employee_console.db.base import Base, get_db_session
import employee_console.db.models  # noqa: F401
from employee_console.core.dependencies import get_object_storage
from employee_console.services.auth_service import AuthService
from employee_console.services.employee_service import EmployeeService
from employee_console.storage.object_storage import ObjectStorage

MICRO_META_DDL = """
CREATE TABLE micro_category_meta (
    id CHAR(32) PRIMARY KEY,
    {link_column} CHAR(32) NOT NULL,
    meta_title VARCHAR
)
"""


def create_micro_meta_table(session, link_column="micro_category_id"):
    session.execute(text("DROP TABLE IF EXISTS micro_category_meta"))
    session.execute(text(MICRO_META_DDL.format(link_column=link_column)))
    session.commit()


def insert_micro_meta(session, micro_category_id, link_column="micro_category_id"):
    # Uuid columns are stored as 32 char hex on SQLite
    session.execute(
        text(f"INSERT INTO micro_category_meta (id, {link_column}, meta_title) VALUES (:id, :link, 'meta')"),
        {"id": uuid.uuid4().hex, "link": micro_category_id.hex},
    )
    session.commit()


def count_micro_meta(session):
    return session.execute(text("SELECT COUNT(*) FROM micro_category_meta")).scalar()


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite engine with working SAVEPOINTs."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a test database session with the meta side table in place."""
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    create_micro_meta_table(session)

    yield session

    session.close()


class MicroMetaTable:
    """Raw access to micro_category_meta, whose link column varies"""

    def __init__(self, session):
        self.session = session
        self.link_column = "micro_category_id"

    def use_legacy_layout(self):
        self.link_column = "micro_categories"
        create_micro_meta_table(self.session, self.link_column)

    def drop(self):
        self.session.execute(text("DROP TABLE micro_category_meta"))
        self.session.commit()

    def insert(self, micro_category_id):
        insert_micro_meta(self.session, micro_category_id, self.link_column)

    def count(self):
        return count_micro_meta(self.session)


@pytest.fixture
def micro_meta(db_session):
    return MicroMetaTable(db_session)


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def object_storage(s3_client):
    return ObjectStorage(
        bucket_name="avatars",
        public_base_url="https://cdn.example.com/avatars",
        s3_client=s3_client,
    )


@pytest.fixture
def test_client(db_session, object_storage):
    """Create FastAPI test client with test database session and storage."""
    from employee_console.api.web_app import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_object_storage] = lambda: object_storage

    # Entered without a context manager so the startup DB check is skipped
    client = TestClient(app)
    yield client

    # Clear the overrides after the test
    app.dependency_overrides.clear()


def make_employee_token(db_session, email, role):
    auth_service = AuthService(db_session)
    user = auth_service.sign_up(email, "secret123", role=role, full_name="Test Employee")
    EmployeeService(db_session).create_employee(email, full_name="Test Employee", role=role, user_id=user.id)
    token, _ = auth_service.issue_session(user.id)
    return token


@pytest.fixture
def sales_headers(db_session):
    token = make_employee_token(db_session, "sales@example.com", "SALES")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def data_entry_headers(db_session):
    token = make_employee_token(db_session, "entry@example.com", "DATA_ENTRY")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def image_bytes():
    """Build a payload of an exact size"""
    def build(size):
        return b"\x89PNG" + b"\x00" * (size - 4)
    return build
