"""
Repository abstract base class and generic implementation.

All mutating methods only stage changes on the session; nothing is durable
until the owning UnitOfWork commits.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Type, Any, Dict, Iterable, Sequence
from sqlalchemy.orm import selectinload
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)

# model class -> repository class
_repository_registry: Dict[type, Type["BaseRepository"]] = {}


def register_repository(model: Type[SQLModel]):
    """Class decorator: use the decorated repository whenever a UnitOfWork asks for `model`."""
    def decorator(repo_class):
        _repository_registry[model] = repo_class
        return repo_class
    return decorator


def repository_class_for(model: Type[SQLModel]) -> Optional[Type["BaseRepository"]]:
    return _repository_registry.get(model)


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def get(
        self,
        order_by: Optional[str] = None,
        include: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
        **filters: Any,
    ) -> List[T]:
        """Query entities by equality filters, with optional ordering and eager relations."""
        pass

    @abstractmethod
    async def insert(self, entity: T) -> T:
        """Stage a new entity."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage a full overwrite of an existing entity."""
        pass

    @abstractmethod
    async def delete(self, entity: T) -> None:
        """Stage removal of an entity."""
        pass

    @abstractmethod
    async def delete_range(self, entities: Iterable[T]) -> None:
        """Stage removal of several entities."""
        pass


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    def _column(self, name: str):
        if not hasattr(self.model, name):
            raise ValueError(f"{self.model.__name__} has no attribute '{name}'")
        return getattr(self.model, name)

    async def get_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        statement = select(self.model).where(self.model.id == id)
        result = await self.session.exec(statement)
        return result.first()

    async def get(
        self,
        order_by: Optional[str] = None,
        include: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
        **filters: Any,
    ) -> List[T]:
        """
        Query entities.

        Args:
            order_by: Attribute name, prefixed with '-' for descending order
            include: Relationship names to load eagerly (e.g. ("accounts",))
            limit: Page size, None for no limit
            offset: Offset
            **filters: Equality filters (e.g. user_id=3); no filters returns all rows
        """
        statement = select(self.model)
        for key, value in filters.items():
            statement = statement.where(self._column(key) == value)

        for relation in include:
            statement = statement.options(selectinload(self._column(relation)))

        if order_by:
            column = self._column(order_by.lstrip("-"))
            statement = statement.order_by(column.desc() if order_by.startswith("-") else column.asc())

        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)

        result = await self.session.exec(statement)
        return list(result.all())

    async def insert(self, entity: T) -> T:
        """Stage a new entity; its id is assigned when the session flushes."""
        self.session.add(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Stage entity as modified; detached or reconstructed entities are merged so every field is written."""
        if entity in self.session:
            self.session.add(entity)
            return entity
        return await self.session.merge(entity)

    async def delete(self, entity: T) -> None:
        """Stage entity removal."""
        await self.session.delete(entity)

    async def delete_range(self, entities: Iterable[T]) -> None:
        """Stage removal of every entity given."""
        for entity in entities:
            await self.session.delete(entity)

    async def find_one(self, **filters) -> Optional[T]:
        """Find one entity by filters (e.g. label='savings')."""
        entities = await self.get(limit=1, **filters)
        return entities[0] if entities else None

    async def find_all(self, **filters) -> List[T]:
        """Find entities by filters."""
        return await self.get(**filters)
