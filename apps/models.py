"""
Model registration: import every table model here so SQLModel metadata (create_all, Alembic)
and relationship resolution between apps see all of them.
"""
from apps.users.models import User
from apps.accounts.models import Account

__all__ = ["User", "Account"]
