from fastapi import APIRouter, Depends
from framework.dependencies import get_uow
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from ..schemas import UserUpsertRequest
from ..service import UserService

router = APIRouter()

def get_user_service(uow: UnitOfWork = Depends(get_uow)) -> UserService:
    """Dependency: create UserService."""
    return UserService(uow)

@router.get("/{user_id}")
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service)
):
    """Get user with accounts; data is null when the user does not exist."""
    user = await service.get_user(user_id)
    return ResponseModel.success(data=user)

@router.put("")
async def upsert_user(
    payload: UserUpsertRequest,
    service: UserService = Depends(get_user_service)
):
    """Create (no user_id) or update a user."""
    user = await service.upsert_user(payload.user_id, payload.first_name, payload.last_name)
    return ResponseModel.success(data=user)

@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service)
):
    """Delete user and all of its accounts."""
    await service.delete_user(user_id)
    return ResponseModel.success()
