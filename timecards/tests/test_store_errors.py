import os
import tempfile

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from timecards.core.authorization import Principal
from timecards.core.errors import StoreError
from timecards.deps.store import get_store
from timecards.main import app
from timecards.repositories.timecard_store import TimecardStore
from timecards.services import timecard_service as service


@pytest.fixture
def broken_store():
    # Parent directory does not exist, so every connect fails.
    missing = os.path.join(tempfile.gettempdir(), "timecards-missing-dir", "nested", "x.db")
    engine = create_engine(f"sqlite:///{missing}")
    session = sessionmaker(bind=engine)()
    try:
        yield TimecardStore(session)
    finally:
        session.close()
        engine.dispose()


def test_store_failure_raises_store_error(broken_store):
    with pytest.raises(StoreError) as exc:
        service.list_own_timecards(Principal(id="alice"), store=broken_store)

    assert exc.value.msg == "Server error"
    assert exc.value.detail.startswith("find_by_owner:")


def test_store_failure_is_500_with_detail(client, auth_headers, broken_store):
    headers = auth_headers("alice")
    app.dependency_overrides[get_store] = lambda: broken_store
    try:
        r = client.get("/timecards", headers=headers)
    finally:
        app.dependency_overrides.pop(get_store, None)

    assert r.status_code == 500
    body = r.json()
    assert body["msg"] == "Server error"
    assert "find_by_owner" in body["error"]


def test_store_failure_hides_detail_when_disabled(client, auth_headers, broken_store, monkeypatch):
    headers = auth_headers("alice")
    monkeypatch.setenv("EXPOSE_ERROR_DETAILS", "false")
    app.dependency_overrides[get_store] = lambda: broken_store
    try:
        r = client.post(
            "/timecards",
            json={"weekStartDate": "2024-06-10", "entries": [], "totalHours": 1},
            headers=headers,
        )
    finally:
        app.dependency_overrides.pop(get_store, None)

    assert r.status_code == 500
    assert r.json() == {"msg": "Server error"}
