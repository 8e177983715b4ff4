"""Account module repository implementation."""

from typing import List
from framework.repository.base import BaseRepository, register_repository
from .models import Account


@register_repository(Account)
class AccountRepository(BaseRepository[Account]):
    """Account repository."""

    def __init__(self, session):
        super().__init__(session, Account)

    async def get_by_user_id(self, user_id: int) -> List[Account]:
        """List accounts owned by a user, oldest first."""
        return await self.get(order_by="id", user_id=user_id)
