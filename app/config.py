from pydantic_settings import BaseSettings
from typing import List
import json


class Settings(BaseSettings):
    """Stakeplan settings, read from the environment or a .env file."""

    # Database (postgres in production, sqlite+aiosqlite locally and in tests)
    DATABASE_URL: str = "postgresql+asyncpg://localhost/stakeplan"
    AUTO_CREATE_TABLES: bool = False  # create_all on startup instead of alembic

    # CORS: JSON list or comma-separated origins
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Alert once the balance is at or below this % of the initial budget
    BANKROLL_ALERT_THRESHOLD: float = 20.0

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def engine_url(self) -> str:
        """
        DATABASE_URL ready for the async engine.

        Hosted postgres URLs (postgres://...) get the asyncpg driver, and
        prepared statement caching is turned off for pgbouncer.
        """
        url = self.DATABASE_URL
        if self.is_sqlite:
            return url
        if url.startswith("postgres://"):
            url = "postgresql+asyncpg://" + url[len("postgres://"):]
        elif url.startswith("postgresql://"):
            url = "postgresql+asyncpg://" + url[len("postgresql://"):]
        if "prepared_statement_cache_size" not in url:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}prepared_statement_cache_size=0"
        return url

    @property
    def cors_origins_list(self) -> List[str]:
        value = self.CORS_ORIGINS.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
