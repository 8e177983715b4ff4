"""AccountService tests against a mocked UnitOfWork (call counts matter here)."""
import pytest
from decimal import Decimal
from framework.exceptions.handler import NotFoundException, OutOfRangeException
from apps.accounts.models import Account
from apps.accounts.service import AccountService
from apps.users.models import User


def _account(amount: str, account_id: int = 3) -> Account:
    return Account(id=account_id, label="savings", amount=Decimal(amount), user_id=1)


class TestCreateAccount:
    """Test account creation."""

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, mock_uow, account_config):
        mock_uow.user_repo.get_by_id.return_value = None
        service = AccountService(mock_uow, account_config)

        with pytest.raises(NotFoundException, match="The user does not exist"):
            await service.create_account("savings", 3)

        mock_uow.user_repo.get_by_id.assert_awaited_once_with(3)
        mock_uow.account_repo.insert.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_user_inserts_at_floor_and_commits(self, mock_uow, account_config):
        mock_uow.user_repo.get_by_id.return_value = User(id=3, first_name="Ada", last_name="Lovelace")

        def _assign_id(account):
            account.id = 6
            return account

        mock_uow.account_repo.insert.side_effect = _assign_id
        service = AccountService(mock_uow, account_config)

        view = await service.create_account("savings", 3)

        mock_uow.user_repo.get_by_id.assert_awaited_once_with(3)
        mock_uow.account_repo.insert.assert_awaited_once()
        mock_uow.save_changes.assert_awaited_once()
        inserted = mock_uow.account_repo.insert.await_args.args[0]
        assert inserted.user_id == 3
        assert inserted.amount == account_config.min_account_amount
        assert view.id == 6
        assert view.label == "savings"
        assert view.amount == Decimal("80")


class TestDeleteAccount:
    """Test account deletion."""

    @pytest.mark.asyncio
    async def test_unknown_account_raises_not_found(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = None
        service = AccountService(mock_uow, account_config)

        with pytest.raises(NotFoundException, match="The account does not exist"):
            await service.delete_account(3)

        mock_uow.account_repo.delete.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_account_is_deleted_and_committed(self, mock_uow, account_config):
        account = _account("120")
        mock_uow.account_repo.get_by_id.return_value = account
        service = AccountService(mock_uow, account_config)

        await service.delete_account(3)

        mock_uow.account_repo.get_by_id.assert_awaited_once_with(3)
        mock_uow.account_repo.delete.assert_awaited_once_with(account)
        mock_uow.save_changes.assert_awaited_once()


class TestDeposit:
    """Test deposits."""

    @pytest.mark.asyncio
    async def test_amount_above_ceiling_touches_nothing(self, mock_uow, account_config):
        service = AccountService(mock_uow, account_config)

        with pytest.raises(OutOfRangeException, match="The amount cannot exceed 10000"):
            await service.deposit(3, Decimal("10001"))

        mock_uow.get_repository.assert_not_called()
        mock_uow.account_repo.get_by_id.assert_not_awaited()
        mock_uow.account_repo.update.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_amount_equal_to_ceiling_is_accepted(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = _account("100")
        service = AccountService(mock_uow, account_config)

        view = await service.deposit(3, Decimal("10000"))

        assert view.amount == Decimal("10100")

    @pytest.mark.asyncio
    async def test_unknown_account_raises_not_found(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = None
        service = AccountService(mock_uow, account_config)

        with pytest.raises(NotFoundException, match="The account does not exist"):
            await service.deposit(3, Decimal("50"))

        mock_uow.account_repo.get_by_id.assert_awaited_once_with(3)
        mock_uow.account_repo.update.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_deposit_adds_amount_and_commits_once(self, mock_uow, account_config):
        account = _account("120")
        mock_uow.account_repo.get_by_id.return_value = account
        service = AccountService(mock_uow, account_config)

        view = await service.deposit(3, Decimal("350"))

        mock_uow.account_repo.update.assert_awaited_once_with(account)
        mock_uow.save_changes.assert_awaited_once()
        assert view.amount == Decimal("470")
        assert view.id == 3
        assert view.label == "savings"


class TestWithdraw:
    """Test withdrawals: percentage check first, then the balance floor."""

    @pytest.mark.asyncio
    async def test_unknown_account_raises_not_found(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = None
        service = AccountService(mock_uow, account_config)

        with pytest.raises(NotFoundException) as exc_info:
            await service.withdraw(3, Decimal("5"))

        assert exc_info.value.message == "The account does not exist"
        mock_uow.account_repo.update.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_amount_above_percentage_is_rejected(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = _account("100")
        service = AccountService(mock_uow, account_config)

        # 91 / 100 * 100 = 91 > 90
        with pytest.raises(OutOfRangeException, match="90% of the balance"):
            await service.withdraw(3, Decimal("91"))

        mock_uow.account_repo.update.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_amount_breaking_floor_is_rejected(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = _account("100")
        service = AccountService(mock_uow, account_config)

        # 23% passes, but 100 - 23 = 77 < 80
        with pytest.raises(OutOfRangeException, match="cannot be less than 80"):
            await service.withdraw(3, Decimal("23"))

        mock_uow.account_repo.update.assert_not_awaited()
        mock_uow.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_percentage_check_runs_before_floor_check(self, mock_uow, account_config):
        # Both bounds broken; the percentage message wins
        mock_uow.account_repo.get_by_id.return_value = _account("100")
        service = AccountService(mock_uow, account_config)

        with pytest.raises(OutOfRangeException, match="% of the balance"):
            await service.withdraw(3, Decimal("95"))

    @pytest.mark.asyncio
    async def test_valid_withdrawal_subtracts_and_commits_once(self, mock_uow, account_config):
        account = _account("100")
        mock_uow.account_repo.get_by_id.return_value = account
        service = AccountService(mock_uow, account_config)

        view = await service.withdraw(3, Decimal("5"))

        mock_uow.account_repo.update.assert_awaited_once_with(account)
        mock_uow.save_changes.assert_awaited_once()
        assert view.amount == Decimal("95")

    @pytest.mark.asyncio
    async def test_withdrawal_down_to_floor_is_allowed(self, mock_uow, account_config):
        mock_uow.account_repo.get_by_id.return_value = _account("100")
        service = AccountService(mock_uow, account_config)

        view = await service.withdraw(3, Decimal("20"))

        assert view.amount == Decimal("80")

    @pytest.mark.asyncio
    async def test_zero_balance_rejects_any_withdrawal(self, mock_uow):
        from framework.config import AccountConfig
        config = AccountConfig(
            max_deposit_amount=Decimal("10000"),
            min_account_amount=Decimal("-50"),
            max_withdraw_percentage=100,
        )
        mock_uow.account_repo.get_by_id.return_value = _account("0")
        service = AccountService(mock_uow, config)

        with pytest.raises(OutOfRangeException, match="100% of the balance"):
            await service.withdraw(3, Decimal("1"))

        mock_uow.save_changes.assert_not_awaited()
