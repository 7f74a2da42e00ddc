"""Pytest configuration and fixtures"""
import os

# Settings are read at import time; pin them before the app is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SUPER_ADMIN_USERNAME"] = "superadmin"
os.environ["SUPER_ADMIN_PASSWORD"] = "Sup3r!Secret"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["TARGET_CORP_ID"] = "98000001"
os.environ["LOGIN_RATE_LIMIT"] = "5 per 15 minutes"
os.environ["EVE_LOGIN_RATE_LIMIT"] = "10 per minute"
os.environ["SRP_SUBMIT_RATE_LIMIT"] = "1000 per minute"
os.environ["RATE_LIMIT_ENABLED"] = "true"
os.environ["METRICS_ENABLED"] = "true"

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from eve_srp.api.deps import get_eve_client, get_loss_source  # noqa: E402
from eve_srp.database import Base, get_db  # noqa: E402
from eve_srp.errors import AuthExchangeFailed, LossSourceFailed  # noqa: E402
from eve_srp.main import app  # noqa: E402
from eve_srp.middleware.rate_limit import limiter  # noqa: E402
from eve_srp.services import credentials  # noqa: E402
from eve_srp.utils.jwt_utils import create_admin_token, create_player_token  # noqa: E402

TEST_DATABASE_URL = os.environ["DATABASE_URL"]
TARGET_CORP_ID = 98000001

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeEveClient:
    """Stands in for EveSsoClient; codes map to characters"""

    def __init__(self):
        self.characters = {
            "good-code": (100, "Pilot One", TARGET_CORP_ID),
            "other-code": (200, "Pilot Two", TARGET_CORP_ID),
            "outsider-code": (300, "Outsider", 12345),
        }

    def exchange_code(self, code: str) -> str:
        if code not in self.characters:
            raise AuthExchangeFailed()
        return f"access-{code}"

    def verify(self, access_token: str):
        char_id, char_name, _ = self.characters[access_token[len("access-"):]]
        return char_id, char_name

    def get_corporation_id(self, char_id: int) -> int:
        for cid, _, corp_id in self.characters.values():
            if cid == char_id:
                return corp_id
        raise AuthExchangeFailed()


class FakeLossSource:
    def __init__(self):
        self.fail = False
        self.calls = []

    def fetch_losses(self, char_id: int):
        self.calls.append(char_id)
        if self.fail:
            raise LossSourceFailed()
        return [
            {"killmail_id": 9000 + char_id, "ship_type_id": 587, "killmail_time": "2026-10-01T12:00:00Z"},
        ]


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    """Independent sessions on the test database, for concurrent-writer cases"""
    return TestingSessionLocal


@pytest.fixture
def eve_client() -> FakeEveClient:
    return FakeEveClient()


@pytest.fixture
def loss_source() -> FakeLossSource:
    return FakeLossSource()


@pytest.fixture(scope="function")
def client(db: Session, eve_client: FakeEveClient, loss_source: FakeLossSource) -> Generator[TestClient, None, None]:
    """Create test client with database session and outbound client overrides"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_eve_client] = lambda: eve_client
    app.dependency_overrides[get_loss_source] = lambda: loss_source
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def player_headers() -> dict:
    """Pilot One (char 100)"""
    return bearer(create_player_token(100, "Pilot One", TARGET_CORP_ID))


@pytest.fixture
def other_player_headers() -> dict:
    """Pilot Two (char 200)"""
    return bearer(create_player_token(200, "Pilot Two", TARGET_CORP_ID))


@pytest.fixture
def super_admin_headers() -> dict:
    return bearer(create_admin_token(credentials.SUPER_ADMIN_ID, "superadmin", credentials.ROLE_SUPER_ADMIN))


@pytest.fixture
def reviewer(db: Session):
    """A persisted admin-role account"""
    return credentials.add_admin(db, "reviewer", "Review3r!pass")


@pytest.fixture
def admin_headers(reviewer) -> dict:
    return bearer(create_admin_token(reviewer.id, reviewer.username, reviewer.role))


@pytest.fixture
def sample_submission() -> dict:
    """Body as sent by the dashboard: the whole loss record plus a comment"""
    return {
        "lossMail": {
            "killmail_id": 12345,
            "ship_type_id": 17738,
            "zkb": {"hash": "abc123", "totalValue": 350000000.0},
        },
        "comment": "Lost on the fleet op",
    }
