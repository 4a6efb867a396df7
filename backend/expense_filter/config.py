"""Application settings for the ExpenseFilter backend."""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded once from the environment (or a .env file).

    Column names are matched case- and whitespace-insensitively, so they are
    stored normalized.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_FILTER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    category_column: str = "category"
    amount_column: str = "amount"
    locale: str = "en_US"
    currency: str = "USD"
    cors_origins: List[str] = ["http://localhost:5173"]
    log_level: str = "INFO"

    langfuse_public_key: Optional[str] = Field(
        default=None, validation_alias="LANGFUSE_PUBLIC_KEY"
    )
    langfuse_secret_key: Optional[str] = Field(
        default=None, validation_alias="LANGFUSE_SECRET_KEY"
    )
    langfuse_host: str = Field(
        default="http://localhost:3001", validation_alias="LANGFUSE_HOST"
    )
    langfuse_debug: bool = Field(
        default=False, validation_alias="LANGFUSE_DEBUG"
    )

    @field_validator("category_column", "amount_column")
    @classmethod
    def normalize_column(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("column name must not be blank")
        return value

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
