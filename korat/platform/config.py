from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "KORAT SEO Audit"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    LOG_DIR: str = "logs"

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./korat.db"

    # ── JWT / Auth ──────────────────────────────
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    ALGORITHM: str = "HS256"

    # ── Page fetch ──────────────────────────────
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_USER_AGENT: str = "KORAT-SEO-Audit-Bot/1.0"

    # ── Audit history ───────────────────────────
    AUDIT_HISTORY_DEFAULT_LIMIT: int = 10
    AUDIT_HISTORY_MAX_LIMIT: int = 100

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
