from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Store
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # MySQL
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "homestay_user"
    MYSQL_PASSWORD: str = "change-me-user"
    MYSQL_DATABASE: str = "homestay_bookings"

    # Redis (rate limiting)
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60

    # HTTP
    ADMIN_API_KEY: Optional[str] = None
    FRONTEND_ORIGIN: Optional[str] = None
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def mysql_async_url(self) -> str:
        return (
            f"mysql+asyncmy://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DATABASE}"
        )

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL or self.mysql_async_url

@lru_cache
def get_settings() -> Settings:
    return Settings()
