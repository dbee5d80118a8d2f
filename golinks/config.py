from typing import List, Optional

from pydantic_settings import BaseSettings

DEFAULT_GOLINK_PATTERN = r"^go/[a-zA-Z0-9_-]+$"


class Settings(BaseSettings):
    USE_DATABASE: bool = False
    DATABASE_URL: str = "sqlite+aiosqlite:///./golinks.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: float = 5.0

    GOLINK_PATTERN: str = DEFAULT_GOLINK_PATTERN
    API_TOKEN: Optional[str] = None
    CORS_ORIGINS: List[str] = ["*"]

    HOST: str = "127.0.0.1"
    PORT: int = 3030
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "GOLINKS_"
        extra = "ignore"


settings = Settings()
