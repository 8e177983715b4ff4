"""User module repository implementation."""

from typing import Optional
from framework.repository.base import BaseRepository, register_repository
from .models import User


@register_repository(User)
class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_with_accounts(self, user_id: int) -> Optional[User]:
        """Get user by ID with its accounts loaded eagerly."""
        users = await self.get(include=("accounts",), id=user_id)
        return users[0] if users else None
