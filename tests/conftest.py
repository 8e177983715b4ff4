"""Test config and shared fixtures."""
import pytest
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from sqlmodel.ext.asyncio.session import AsyncSession

import apps.models  # noqa: F401  registers all tables before create_all
from main import app
from framework.config import AccountConfig
from framework.database.sql_driver import SQLDriver
from framework.dependencies import get_uow
from framework.repository.unit_of_work import UnitOfWork
from apps.accounts.api.router import get_account_service
from apps.accounts.models import Account
from apps.accounts.service import AccountService
from apps.users.models import User


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def account_config() -> AccountConfig:
    """Account rules used across tests (balance 100 may lose at most 90%, never below 80)."""
    return AccountConfig(
        max_deposit_amount=Decimal("10000"),
        min_account_amount=Decimal("80"),
        max_withdraw_percentage=90,
    )


@pytest.fixture
def mock_uow():
    """UnitOfWork double: one AsyncMock repository per model, save_changes recorded."""
    repositories = {User: AsyncMock(), Account: AsyncMock()}
    uow = MagicMock(spec=UnitOfWork)
    uow.get_repository.side_effect = lambda model: repositories[model]
    uow.save_changes = AsyncMock()
    uow.user_repo = repositories[User]
    uow.account_repo = repositories[Account]
    return uow


@pytest.fixture(scope="function")
async def driver() -> AsyncGenerator[SQLDriver, None]:
    """Fresh in-memory database per test."""
    test_driver = SQLDriver(TEST_DATABASE_URL)
    await test_driver.ensure_schema()
    yield test_driver
    await test_driver.disconnect()


@pytest.fixture(scope="function")
async def async_session(driver: SQLDriver) -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session."""
    async with driver.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def sample_user(async_session: AsyncSession) -> User:
    """Create sample user."""
    user = User(first_name="Ada", last_name="Lovelace")
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
async def sample_account(async_session: AsyncSession, sample_user: User) -> Account:
    """Create sample account with balance 100."""
    account = Account(label="savings", amount=Decimal("100"), user_id=sample_user.id)
    async_session.add(account)
    await async_session.commit()
    await async_session.refresh(account)
    return account


@pytest.fixture
async def client(
    async_session: AsyncSession,
    account_config: AccountConfig,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the test session."""
    async def _get_uow():
        yield UnitOfWork(session=async_session)

    def _get_account_service():
        return AccountService(UnitOfWork(session=async_session), account_config)

    app.dependency_overrides[get_uow] = _get_uow
    app.dependency_overrides[get_account_service] = _get_account_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
