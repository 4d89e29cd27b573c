import fnmatch
import os
import tempfile
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

# Always force tests onto an isolated SQLite file and a fixed studio timezone.
# Must happen before any studio_admin module (config.settings) is imported.
_test_db_dir = tempfile.mkdtemp(prefix="studio_admin_test_db_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_db_dir, 'test_studio.db')}"
os.environ["STUDIO_TIMEZONE"] = "Europe/Brussels"
os.environ["REDIS_URL"] = ""

from studio_admin.database import SessionLocal, engine  # noqa: E402
from studio_admin.models import (  # noqa: E402
    Base,
    Machines,
    Members,
    TrainingSessionMembers,
    TrainingSessions,
)
from studio_admin.schemas.opening_hours import WeekHours  # noqa: E402
from studio_admin.services.opening_hours.config import (  # noqa: E402
    DEFAULT_OPENING_HOURS,
    to_db_timestamp,
)

TZ = ZoneInfo("Europe/Brussels")


def make_week(**days) -> WeekHours:
    """Default studio week with selected days replaced.

    make_week(sunday=("10:00", "14:00"), monday=None)  # None = closed
    """
    data = {day: dict(hours) for day, hours in DEFAULT_OPENING_HOURS.items()}
    for day, value in days.items():
        if value is None:
            data[day] = {"is_open": False, "open_time": None, "close_time": None}
        elif isinstance(value, dict):
            data[day] = value
        else:
            data[day] = {"is_open": True, "open_time": value[0], "close_time": value[1]}
    return WeekHours.model_validate(data)


def local(*args) -> datetime:
    return datetime(*args, tzinfo=TZ)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def add_session(db):
    """Factory inserting a training session from local start/end datetimes."""
    machines: dict[int, Machines] = {}

    def _add(start, end, status="scheduled", machine_number=1, member=("Jane", "Doe")):
        machine = None
        if machine_number is not None:
            machine = machines.get(machine_number)
            if machine is None:
                machine = Machines(machine_number=machine_number, name=f"Machine {machine_number}")
                db.add(machine)
                db.flush()
                machines[machine_number] = machine

        session = TrainingSessions(
            machine_id=machine.id if machine else None,
            scheduled_start=to_db_timestamp(start),
            scheduled_end=to_db_timestamp(end),
            status=status,
        )
        db.add(session)
        db.flush()

        if member is not None:
            m = Members(first_name=member[0], last_name=member[1])
            db.add(m)
            db.flush()
            db.add(TrainingSessionMembers(session_id=session.id, member_id=m.id))

        db.commit()
        return session

    return _add


class FakeRedis:
    """In-memory stand-in for the few Redis commands the cache uses."""

    def __init__(self):
        self.data: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value.encode() if isinstance(value, str) else value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def keys(self, pattern):
        return [k for k in self.data if fnmatch.fnmatch(k, pattern)]

    def delete(self, *keys):
        deleted = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                deleted += 1
            self.ttls.pop(key, None)
        return deleted


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient

    from studio_admin.database import get_db
    from studio_admin.main import app

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
