from decimal import Decimal
from pydantic import BaseModel, Field


class AccountView(BaseModel):
    id: int
    label: str
    amount: Decimal


class AccountCreateRequest(BaseModel):
    label: str = Field(..., min_length=1, max_length=255)
    user_id: int = Field(..., gt=0)


class AccountAmountUpdateRequest(BaseModel):
    account_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2, description="Amount to deposit or withdraw")
