"""Configuration management with pydantic-settings.

Provides type-safe configuration with environment variable validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Database ===
    database_url: str = Field(
        "sqlite:///./paintstock.db",
        description="SQLAlchemy database URL",
    )
    db_auto_create: bool = Field(True, description="Create missing tables on startup")

    # === Application settings ===
    app_timezone: str = Field(
        "Africa/Addis_Ababa", description="Timezone used for report day boundaries"
    )
    currency: str = Field("ETB", description="Currency prefix for sales KPIs")
    default_supplier: str = Field("Jotun Ethiopia", description="Supplier shown when unset")

    # === Logging ===
    log_level: str = Field("INFO", description="Root log level")
    log_to_stdout: bool = Field(True, description="Emit JSON logs to stdout")

    # === Dashboard ===
    low_stock_limit: int = Field(10, ge=1, description="Max rows in the low-stock panel")
    recent_transactions_limit: int = Field(8, ge=1, description="Rows in recent transactions")
    frequent_products_limit: int = Field(4, ge=1, description="Rows in frequent products")
    dashboard_transactions_fetch_limit: int = Field(
        50, ge=1, description="Latest transactions loaded for the dashboard"
    )

    # === Export ===
    export_max_rows: int = Field(100000, description="Maximum rows per export")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        RuntimeError: If environment variables fail validation.

    """
    try:
        return Settings()
    except ValidationError as e:
        bad_fields = [str(error["loc"][0]).upper() for error in e.errors() if error["loc"]]

        error_msg = (
            f"Configuration error: invalid environment variables: "
            f"{', '.join(bad_fields)}\n"
            f"Please fix them in .env file or the process environment."
        )
        raise RuntimeError(error_msg) from e
