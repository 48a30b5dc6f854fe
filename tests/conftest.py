from datetime import datetime, timezone

import pytest
import pytest_asyncio

from src.alerting.application.registry import RuleRegistry
from src.api.application.alert_rule_service import AlertRuleService
from src.api.infrastructure.database import Database

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "alerting.db"


@pytest_asyncio.fixture
async def database(db_path):
    db = Database(f"sqlite:///{db_path}", f"sqlite+aiosqlite:///{db_path}")
    db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    async with database.get_async_session() as session:
        yield session


@pytest.fixture
def registry() -> RuleRegistry:
    return RuleRegistry()


@pytest.fixture
def service(registry) -> AlertRuleService:
    return AlertRuleService(registry=registry, clock=lambda: FIXED_NOW)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW
