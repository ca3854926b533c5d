import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so the test environment must be in
# place before anything under app/ is imported.
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="homestay-bookings-test-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'bookings.db'}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from tests.util_constant import TEST_ADMIN_KEY, TEST_FRONTEND_ORIGIN  # noqa: E402

os.environ["ADMIN_API_KEY"] = TEST_ADMIN_KEY
os.environ["FRONTEND_ORIGIN"] = TEST_FRONTEND_ORIGIN

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from app.core.db import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import booking  # noqa: E402, F401
from app.services.booking_service import BookingService  # noqa: E402


@pytest.fixture(autouse=True)
async def reset_database():
    """Every test starts from an empty bookings table."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
def session_factory():
    return SessionLocal


@pytest.fixture
async def booking_service(session_factory):
    async with session_factory() as session:
        yield BookingService(session=session)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"x-admin-key": TEST_ADMIN_KEY}
