from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Lagos Weekender API", alias="APP_NAME")
    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    api_prefix: str = Field(default="/api/v1", alias="API_PREFIX")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    allowed_cors_origins: str = Field(default="http://localhost:3000", alias="ALLOWED_CORS_ORIGINS")
    rate_limit_per_minute: int = Field(default=120, alias="RATE_LIMIT_PER_MINUTE")

    search_provider_url: str = Field(default="http://localhost:8000/api/v1", alias="SEARCH_PROVIDER_URL")
    search_timeout_seconds: float = Field(default=10, alias="SEARCH_TIMEOUT_SECONDS")
    search_debounce_ms: int = Field(default=300, alias="SEARCH_DEBOUNCE_MS")
    search_page_size: int = Field(default=10, alias="SEARCH_PAGE_SIZE")
    global_search_path: str = Field(default="/search", alias="GLOBAL_SEARCH_PATH")

    @property
    def cors_origins(self) -> list[str]:
        return [x.strip() for x in self.allowed_cors_origins.split(",") if x.strip()]

    @property
    def search_debounce_seconds(self) -> float:
        return max(self.search_debounce_ms, 0) / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
