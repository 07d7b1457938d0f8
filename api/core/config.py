import os
from functools import lru_cache
from typing import Optional, Union

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    POSTGRES_URI: str = os.getenv("POSTGRES_URI", "postgresql+psycopg2://localhost:5432/cosmetics")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES: int = int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "60"))
    # "all" disables pagination in browse mode
    DEFAULT_PAGE_LIMIT: Union[int, str] = os.getenv("DEFAULT_PAGE_LIMIT", "24")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    ENV: str = os.getenv("env", "dev")
    APP_NAME: Optional[str] = "cosmetics_catalog"

    def default_limit(self) -> Union[int, str]:
        """Return the configured page limit as an int, or the literal "all"."""
        value = str(self.DEFAULT_PAGE_LIMIT).strip().lower()
        if value == "all":
            return "all"
        return int(value)


@lru_cache()
def get_settings() -> Settings:
    """Build the process-wide settings once."""
    return Settings()
