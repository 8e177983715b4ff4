from typing import Optional
from framework.exceptions.handler import NotFoundException
from framework.logging.logger import get_logger
from framework.repository.unit_of_work import UnitOfWork
from apps.accounts.models import Account
from apps.accounts.repository import AccountRepository  # noqa: F401  registers the Account repository
from apps.accounts.schemas import AccountView
from .models import User
from .repository import UserRepository
from .schemas import UserView, ExtendedUserView

logger = get_logger("user_service")

USER_NOT_FOUND = "The user does not exist"


class UserService:
    def __init__(self, uow: UnitOfWork):
        """Initialize UserService with UnitOfWork."""
        self.uow = uow

    async def upsert_user(self, user_id: Optional[int], first_name: str, last_name: str) -> UserView:
        """Create a user when user_id is absent or 0, otherwise overwrite the names of an existing one."""
        repo = self.uow.get_repository(User)

        if not user_id:
            user = await repo.insert(User(first_name=first_name, last_name=last_name))
        else:
            user = await repo.get_by_id(user_id)
            if user is None:
                logger.warning(f"Update rejected: user {user_id} not found")
                raise NotFoundException(USER_NOT_FOUND)
            user.first_name = first_name
            user.last_name = last_name
            await repo.update(user)

        await self.uow.save_changes()
        logger.info(f"User {user.id} saved")
        return UserView(id=user.id, first_name=user.first_name, last_name=user.last_name)

    async def get_user(self, user_id: int) -> Optional[ExtendedUserView]:
        """Get user with its accounts; None when the user does not exist."""
        repo: UserRepository = self.uow.get_repository(User)
        user = await repo.get_with_accounts(user_id)
        if user is None:
            return None

        return ExtendedUserView(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            accounts=[
                AccountView(id=account.id, label=account.label, amount=account.amount)
                for account in (user.accounts or [])
            ],
        )

    async def delete_user(self, user_id: int) -> None:
        """Delete user and every account it owns in one commit."""
        repo: UserRepository = self.uow.get_repository(User)
        user = await repo.get_with_accounts(user_id)
        if user is None:
            raise NotFoundException(USER_NOT_FOUND)

        accounts = list(user.accounts or [])
        if accounts:
            await self.uow.get_repository(Account).delete_range(accounts)
        await repo.delete(user)
        await self.uow.save_changes()
        logger.info(f"User {user_id} deleted with {len(accounts)} account(s)")
