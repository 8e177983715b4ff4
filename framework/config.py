from decimal import Decimal
from typing import Optional
from urllib.parse import quote_plus
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountConfig(BaseModel):
    """Account balance rules; read-only once loaded."""
    model_config = ConfigDict(frozen=True)

    max_deposit_amount: Decimal
    min_account_amount: Decimal
    max_withdraw_percentage: int


class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "Banking PoC"
    APP_DESCRIPTION: str = "Banking back-office service: users, accounts, deposits and withdrawals"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Database (SQLModel) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "banking_db"
    DB_URL: Optional[str] = None  # Full async URL, overrides DB_* (e.g. sqlite+aiosqlite:///banking.db)

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        # Build async MySQL connection URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Account rules ---
    ACCOUNT_MAX_DEPOSIT_AMOUNT: Decimal = Decimal("10000")
    ACCOUNT_MIN_ACCOUNT_AMOUNT: Decimal = Decimal("100")
    ACCOUNT_MAX_WITHDRAW_PERCENTAGE: int = 90

    @property
    def account_config(self) -> AccountConfig:
        return AccountConfig(
            max_deposit_amount=self.ACCOUNT_MAX_DEPOSIT_AMOUNT,
            min_account_amount=self.ACCOUNT_MIN_ACCOUNT_AMOUNT,
            max_withdraw_percentage=self.ACCOUNT_MAX_WITHDRAW_PERCENTAGE,
        )

    # --- Logging ---
    LOG_DIR: str = "logs"

    # --- API route prefixes ---
    API_V1_ACCOUNTS_PREFIX: str = "/api/v1/account"
    API_V1_USERS_PREFIX: str = "/api/v1/user"

    # --- Gunicorn process name (optional) ---
    GUNICORN_PROC_NAME: Optional[str] = None  # Fallback to APP_NAME when empty

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
