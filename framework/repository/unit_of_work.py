"""
Unit of Work: manages repositories and transaction boundaries.
"""

from typing import Optional, Dict, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.base import BaseDatabaseDriver
from framework.logging.logger import get_logger
from .base import BaseRepository, repository_class_for

T = TypeVar("T", bound=SQLModel)

logger = get_logger("unit_of_work")


class UnitOfWork:
    """Owns one session, hands out one repository per model and commits staged changes at once."""

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.create())."""
        if session is None:
            raise ValueError("Session must be provided. Use UnitOfWork.create() or pass session explicitly.")

        self.session = session
        self._repositories: Dict[type, BaseRepository] = {}
        self._disposed = False

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    @classmethod
    async def create(cls, driver: BaseDatabaseDriver) -> "UnitOfWork":
        """Make sure the schema exists, then open a fresh session owned by this unit of work."""
        await driver.ensure_schema()
        return cls(session=driver.new_session())

    def get_repository(self, model_class: Type[T]) -> BaseRepository[T]:
        """Get or create the repository for model_class (cached per unit of work)."""
        if model_class not in self._repositories:
            repo_class = repository_class_for(model_class)
            if repo_class is None:
                repository = BaseRepository(self.session, model_class)
            else:
                repository = repo_class(self.session)
            self._repositories[model_class] = repository
        return self._repositories[model_class]

    async def save_changes(self) -> None:
        """Commit every staged insert/update/delete as one transaction; rolls back and re-raises on failure."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed, rolling back: {str(e)}")
            await self.session.rollback()
            raise

    async def commit(self) -> None:
        """Commit all changes."""
        await self.save_changes()

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs)."""
        await self.session.flush()

    async def dispose(self) -> None:
        """Release the session; later calls do nothing."""
        if self._disposed:
            return
        self._disposed = True
        self._repositories.clear()
        await self.session.close()

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            await self.dispose()
