from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str  # postgresql+asyncpg://... | sqlite+aiosqlite:///catalog.db
    ENVIRONMENT: str = "development"  # development | staging | production
    VERSION: str = "1.0.0"
    PORT: int = 4000

    # Per-call deadline for every store operation, in seconds
    DB_QUERY_TIMEOUT: float = 3.0
    # Pool knobs, ignored for SQLite
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_RECYCLE: int = 900

    MAX_BODY_BYTES: int = 1_048_576

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
