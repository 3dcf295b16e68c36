"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'trade_journal.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440  # 24 hours

    # Insight narrator (Google Gemini)
    gemini_api_key: str = ""
    insight_model: str = "gemini-2.0-flash"
    insight_timeout_seconds: float = 20.0

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}


settings = Settings()
