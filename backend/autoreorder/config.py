from pydantic_settings import BaseSettings
from typing import List
from pydantic import model_validator


DEFAULT_SECRET_KEY = "autoreorder-secret-key-change-in-production"
PO_WRITE_MODES = {"transaction", "compensating"}


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./autoreorder.db"
    ENVIRONMENT: str = "development"
    AUTO_CREATE_TABLES: bool = True
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REORDER_SCHEDULER_TOKEN: str = ""
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"
    DEBUG: bool = True
    APP_NAME: str = "AutoReorder"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_REQUEST_ID: bool = True
    ENABLE_REQUEST_LOGGING: bool = True
    ENABLE_SECURITY_HEADERS: bool = True
    STRICT_TRANSPORT_SECURITY_SECONDS: int = 31536000
    READINESS_CHECK_DATABASE: bool = True
    PO_NUMBER_PREFIX: str = "PO"
    PO_NUMBER_WIDTH: int = 4
    PO_WRITE_MODE: str = "transaction"
    CRITICAL_STOCK_RATIO: float = 0.5
    REORDER_STALE_PENDING_MINUTES: int = 60

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    @model_validator(mode="after")
    def validate_reorder_settings(self):
        if self.PO_WRITE_MODE not in PO_WRITE_MODES:
            raise ValueError(f"PO_WRITE_MODE must be one of {sorted(PO_WRITE_MODES)}.")

        if not 0 < self.CRITICAL_STOCK_RATIO <= 1:
            raise ValueError("CRITICAL_STOCK_RATIO must be in (0, 1].")

        if not self.is_production:
            return self

        if "sqlite" in self.DATABASE_URL.lower():
            raise ValueError("SQLite is not allowed when ENVIRONMENT is production.")

        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise ValueError("Default SECRET_KEY is not allowed in production.")

        if self.AUTO_CREATE_TABLES:
            raise ValueError("AUTO_CREATE_TABLES must be false in production; use Alembic migrations.")

        return self


settings = Settings()
