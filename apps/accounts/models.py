from decimal import Decimal
from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from apps.users.models import User

class Account(SQLModel, table=True):
    """Single-balance account owned by exactly one user."""
    __tablename__ = "accounts"
    id: Optional[int] = Field(default=None, primary_key=True)
    label: str = Field(max_length=255, description="Display label")
    amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2, description="Current balance")
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    user: Optional["User"] = Relationship(back_populates="accounts")
