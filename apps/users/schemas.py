from typing import List, Optional
from pydantic import BaseModel, Field
from apps.accounts.schemas import AccountView


class UserView(BaseModel):
    id: int
    first_name: str
    last_name: str


class ExtendedUserView(UserView):
    """User with every owned account; accounts is empty, never null, when the user has none."""
    accounts: List[AccountView] = Field(default_factory=list)


class UserUpsertRequest(BaseModel):
    # Absent or 0 creates a new user
    user_id: Optional[int] = Field(default=None, ge=0)
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
