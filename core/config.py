from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///data/tutor.db"
    UPLOAD_DIR: Path = Path("data/uploads")
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    APP_URL: str = "http://localhost:3000"
    APP_TITLE: str = "Tutor App"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 4000
    LLM_TIMEOUT_SECONDS: float = 120.0

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
