"""Shared FastAPI dependencies."""

from typing import AsyncGenerator
from framework.database.manager import DatabaseManager
from framework.repository.unit_of_work import UnitOfWork


async def get_uow() -> AsyncGenerator[UnitOfWork, None]:
    """Dependency: one UnitOfWork per request, rolled back on error and disposed afterwards."""
    manager = DatabaseManager.get_instance()
    async with await UnitOfWork.create(manager.database) as uow:
        yield uow
