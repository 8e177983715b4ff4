from decimal import Decimal
from framework.config import AccountConfig
from framework.exceptions.handler import NotFoundException, OutOfRangeException
from framework.logging.logger import get_logger
from framework.repository.unit_of_work import UnitOfWork
from apps.users.models import User
from apps.users.repository import UserRepository  # noqa: F401  registers the User repository
from .models import Account
from .repository import AccountRepository  # noqa: F401  registers the Account repository
from .schemas import AccountView

logger = get_logger("account_service")

ACCOUNT_NOT_FOUND = "The account does not exist"
USER_NOT_FOUND = "The user does not exist"


def _to_view(account: Account) -> AccountView:
    return AccountView(id=account.id, label=account.label, amount=account.amount)


class AccountService:
    """
    Account operations: create, deposit, withdraw, delete.

    Each operation is one lookup, the balance checks, then a single commit
    through the unit of work. There is no locking around the balance
    read-modify-write; concurrent updates on one account race.
    """

    def __init__(self, uow: UnitOfWork, options: AccountConfig):
        """Initialize AccountService with UnitOfWork and account rules."""
        self.uow = uow
        self.options = options

    async def create_account(self, label: str, user_id: int) -> AccountView:
        """Open an account for an existing user; the balance starts at the configured floor."""
        user = await self.uow.get_repository(User).get_by_id(user_id)
        if user is None:
            logger.warning(f"Account creation rejected: user {user_id} not found")
            raise NotFoundException(USER_NOT_FOUND)

        account = Account(
            label=label,
            amount=self.options.min_account_amount,
            user_id=user.id,
        )
        created = await self.uow.get_repository(Account).insert(account)
        await self.uow.save_changes()

        logger.info(f"Account {created.id} created for user {user_id} with balance {created.amount}")
        return _to_view(created)

    async def deposit(self, account_id: int, amount: Decimal) -> AccountView:
        """Add amount to the balance. Amounts above the deposit ceiling are rejected before any lookup."""
        if amount > self.options.max_deposit_amount:
            logger.warning(f"Deposit of {amount} to account {account_id} rejected: above ceiling")
            raise OutOfRangeException(f"The amount cannot exceed {self.options.max_deposit_amount}")

        repo = self.uow.get_repository(Account)
        account = await repo.get_by_id(account_id)
        if account is None:
            raise NotFoundException(ACCOUNT_NOT_FOUND)

        account.amount = account.amount + amount
        await repo.update(account)
        await self.uow.save_changes()

        logger.info(f"Deposited {amount} to account {account_id}, balance {account.amount}")
        return _to_view(account)

    async def withdraw(self, account_id: int, amount: Decimal) -> AccountView:
        """
        Remove amount from the balance.

        Both checks use the balance before the withdrawal, percentage first:
        the amount may not exceed MaxWithdrawPercentage % of the balance, and
        the remaining balance may not drop below MinAccountAmount. A balance of
        zero or less fails the percentage check for any amount.
        """
        repo = self.uow.get_repository(Account)
        account = await repo.get_by_id(account_id)
        if account is None:
            raise NotFoundException(ACCOUNT_NOT_FOUND)

        balance = account.amount
        max_percentage = self.options.max_withdraw_percentage
        if balance <= 0 or (amount / balance) * 100 > max_percentage:
            logger.warning(f"Withdrawal of {amount} from account {account_id} rejected: above {max_percentage}% of {balance}")
            raise OutOfRangeException(f"The amount cannot exceed the {max_percentage}% of the balance")

        if balance - amount < self.options.min_account_amount:
            logger.warning(f"Withdrawal of {amount} from account {account_id} rejected: balance floor")
            raise OutOfRangeException(f"The remaining balance cannot be less than {self.options.min_account_amount}")

        account.amount = balance - amount
        await repo.update(account)
        await self.uow.save_changes()

        logger.info(f"Withdrew {amount} from account {account_id}, balance {account.amount}")
        return _to_view(account)

    async def delete_account(self, account_id: int) -> None:
        """Delete an account; the owning user is untouched."""
        repo = self.uow.get_repository(Account)
        account = await repo.get_by_id(account_id)
        if account is None:
            raise NotFoundException(ACCOUNT_NOT_FOUND)

        await repo.delete(account)
        await self.uow.save_changes()
        logger.info(f"Account {account_id} deleted")
