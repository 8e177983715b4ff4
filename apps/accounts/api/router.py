from fastapi import APIRouter, Depends
from framework.config import settings
from framework.dependencies import get_uow
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from ..schemas import AccountAmountUpdateRequest, AccountCreateRequest
from ..service import AccountService

router = APIRouter()

def get_account_service(uow: UnitOfWork = Depends(get_uow)) -> AccountService:
    """Dependency: create AccountService."""
    return AccountService(uow, settings.account_config)

@router.post("/deposit")
async def deposit(
    payload: AccountAmountUpdateRequest,
    service: AccountService = Depends(get_account_service)
):
    """Deposit into an account."""
    account = await service.deposit(payload.account_id, payload.amount)
    return ResponseModel.success(data=account)

@router.post("/withdraw")
async def withdraw(
    payload: AccountAmountUpdateRequest,
    service: AccountService = Depends(get_account_service)
):
    """Withdraw from an account."""
    account = await service.withdraw(payload.account_id, payload.amount)
    return ResponseModel.success(data=account)

@router.post("")
async def create_account(
    payload: AccountCreateRequest,
    service: AccountService = Depends(get_account_service)
):
    """Open an account for an existing user."""
    account = await service.create_account(payload.label, payload.user_id)
    return ResponseModel.success(data=account)

@router.delete("/{account_id}")
async def delete_account(
    account_id: int,
    service: AccountService = Depends(get_account_service)
):
    """Delete an account."""
    await service.delete_account(account_id)
    return ResponseModel.success()
