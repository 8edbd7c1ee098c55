import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventapi.config import Settings
from eventapi.models.base import Base
from eventapi.models import attendance, event, referral, reward  # noqa: F401
from eventapi.models.event import EventStatus
from eventapi.models.reward import RewardType
from eventapi.repositories.event_repository import EventRepository
from eventapi.repositories.reward_repository import RewardRepository
from eventapi.schemas.identity import CallerContext
from eventapi.schemas.reward import RewardCreateRequest


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="sqlite://", TIMEZONE="Asia/Seoul", INTERNAL_API_KEY="")


@pytest.fixture
def user_caller():
    return CallerContext(user_id="user-1", role="USER", email="user1@example.com")


@pytest.fixture
def operator_caller():
    return CallerContext(user_id="operator-1", role="OPERATOR", email="op@example.com")


@pytest.fixture
def auditor_caller():
    return CallerContext(user_id="auditor-1", role="AUDITOR")


@pytest.fixture
def make_event(db):
    """기본값으로 이벤트를 직접 저장하는 팩토리 (상태 계산 없이 그대로 저장)"""

    def _make_event(**overrides):
        fields = dict(
            title="January Event",
            description="test event",
            start_date=utc(2025, 1, 1),
            end_date=utc(2025, 1, 31, 23, 59, 59),
            status=EventStatus.ONGOING.value,
            created_by="operator-1",
        )
        fields.update(overrides)
        return EventRepository(db).create_event(**fields)

    return _make_event


@pytest.fixture
def make_reward(db):
    def _make_reward(event_id: str, name: str = "100 points", **overrides):
        item = RewardCreateRequest(
            name=name,
            type=overrides.pop("type", RewardType.POINT),
            quantity=overrides.pop("quantity", 100),
            unit_value=overrides.pop("unit_value", 1.0),
            description=overrides.pop("description", None),
        )
        return RewardRepository(db).create_many(event_id, [item], "operator-1")[0]

    return _make_reward


@pytest.fixture
def app(db):
    """실제 라우터와 테스트용 SQLite 세션을 사용하는 앱"""
    from eventapi.database.session import get_db
    from eventapi.main import create_app

    application = create_app()

    def override_get_db():
        yield db

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


USER_HEADERS = {"X-User-Id": "user-1", "X-User-Role": "USER", "X-User-Email": "user1@example.com"}
OPERATOR_HEADERS = {"X-User-Id": "operator-1", "X-User-Role": "OPERATOR"}
AUDITOR_HEADERS = {"X-User-Id": "auditor-1", "X-User-Role": "AUDITOR"}


@pytest.fixture
def user_headers():
    return dict(USER_HEADERS)


@pytest.fixture
def operator_headers():
    return dict(OPERATOR_HEADERS)


@pytest.fixture
def auditor_headers():
    return dict(AUDITOR_HEADERS)
