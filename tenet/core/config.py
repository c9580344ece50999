"""Library configuration."""
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Used when no connection string is configured (local development database)
DEFAULT_DATABASE_URL = "postgresql://postgres:@localhost/stec_tenet"


class Settings(BaseSettings):
    """Settings loaded from TENET_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TENET_",
        env_file=".env",      # Local only
        case_sensitive=True,
        extra="ignore",       # Ignore unrelated env vars
    )

    DEBUG: bool = False

    # Database
    DATABASE_URL: str = ""
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: float = 30.0

    # Schema
    RUN_MIGRATIONS: bool = True

    # Stamp updated_at on insert as well as on update
    STAMP_UPDATED_AT_ON_CREATE: bool = False

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def strip_url(cls, v):
        if v is None:
            return ""
        return v.strip()

    @property
    def database_url(self) -> str:
        """Configured connection string, or the default one when empty."""
        return self.DATABASE_URL or DEFAULT_DATABASE_URL

    @property
    def uses_default_database_url(self) -> bool:
        return not self.DATABASE_URL


@lru_cache
def get_settings() -> Settings:
    """Process settings for entry points that cannot receive them explicitly."""
    return Settings()
