from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import mongomock
import pytest
from bson import ObjectId

from recitations.services.store import RecitationStore
from recitations.services.window import resolve_window

TZ = ZoneInfo("Africa/Mogadishu")  # UTC+3, no DST

# 2025-02-15 13:00 local -> reporting day (1 day ago) is 2025-02-14,
# i.e. [2025-02-13 21:00Z, 2025-02-14 21:00Z)
NOW = datetime(2025, 2, 15, 10, 0, tzinfo=timezone.utc)
WINDOW_START = datetime(2025, 2, 13, 21, 0)
WINDOW_END = datetime(2025, 2, 14, 21, 0)
IN_WINDOW = WINDOW_START + timedelta(hours=10)
BEFORE_WINDOW = WINDOW_START - timedelta(days=3)

ENV_KEYS = (
    "MONGO_URL",
    "MONGO_DB",
    "DAYS_AGO_TO_REPORT",
    "REPORT_TIMEZONE",
    "REPORT_OUTPUT_DIR",
    "MONGO_SERVER_SELECTION_TIMEOUT_MS",
    "REPORT_MAX_WORKERS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell/.env settings out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def mongo_client():
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture()
def db(mongo_client):
    return mongo_client["tabsera"]


@pytest.fixture()
def store(db):
    return RecitationStore(db)


@pytest.fixture()
def window():
    return resolve_window(1, TZ, now=NOW)


@pytest.fixture()
def add_assignment(db):
    def _add(name="1", gender="male", graded=False, created=IN_WINDOW):
        doc = {"name": name, "isGraded": graded, "creationDate": created}
        if gender is not None:
            doc["courseGenderForQuran"] = gender
        return db["assignments"].insert_one(doc).inserted_id

    return _add


@pytest.fixture()
def add_submission(db):
    def _add(student, assignment, status="initial", created=IN_WINDOW, teacher=None):
        doc = {
            "student": student,
            "assignment": assignment,
            "status": status,
            "createdAt": created,
        }
        if teacher is not None:
            doc["teacher"] = teacher
        return db["assignmentpassdatas"].insert_one(doc).inserted_id

    return _add


@pytest.fixture()
def add_user(db):
    def _add(**fields):
        fields.setdefault("_id", ObjectId())
        return db["users"].insert_one(fields).inserted_id

    return _add
