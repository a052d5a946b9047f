import os
import tempfile
from pathlib import Path

_default_test_secret = "test-jwt-secret-for-pytest-only-0000000000000000"
if len(os.environ.get("JWT_SECRET", "")) < 32:
    os.environ["JWT_SECRET"] = _default_test_secret

_TEST_DB_PATH = Path(tempfile.gettempdir()) / f"timecards_test_{os.getpid()}.db"
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", f"sqlite:///{_TEST_DB_PATH}")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["ENV"] = "test"
os.environ.pop("TIMECARD_UPDATE_MODE", None)

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient

from timecards import database
from timecards.core.authorization import Principal
from timecards.models import Timecard, User  # noqa: F401
from timecards.repositories.timecard_store import TimecardStore


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _alembic_config() -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def _clear_tables() -> None:
    with database.engine.begin() as conn:
        for table in reversed(database.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(scope="session", autouse=True)
def _prepare_test_database():
    if TEST_DATABASE_URL.startswith("sqlite") and _TEST_DB_PATH.exists():
        _TEST_DB_PATH.unlink()

    command.upgrade(_alembic_config(), "head")

    database.configure_database()

    yield

    database.engine.dispose()
    if TEST_DATABASE_URL.startswith("sqlite") and _TEST_DB_PATH.exists():
        _TEST_DB_PATH.unlink()


@pytest.fixture(scope="function", autouse=True)
def _empty_tables_between_tests():
    _clear_tables()
    yield
    _clear_tables()


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return TimecardStore(db)


@pytest.fixture
def client():
    from timecards.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    def _auth_headers(user_id: str, is_manager: bool = False, name=None, email=None) -> dict:
        resp = client.post(
            "/auth/token",
            json={"user_id": user_id, "is_manager": is_manager, "name": name, "email": email},
        )
        assert resp.status_code == 200, f"token request failed: {resp.status_code} {resp.text}"
        data = resp.json()
        assert "access_token" in data, f"token response missing access_token: {data}"
        return {"Authorization": f"Bearer {data['access_token']}"}

    return _auth_headers


@pytest.fixture
def alice():
    return Principal(id="alice")


@pytest.fixture
def bob():
    return Principal(id="bob")


@pytest.fixture
def manager():
    return Principal(id="mgr", is_manager=True)
