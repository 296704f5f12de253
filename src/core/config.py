from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include optional integrations.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Sales Pulse Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    sales_cache_ttl_seconds: float = Field(default=300.0, alias="SALES_CACHE_TTL_SECONDS")
    sales_http_timeout_seconds: float = Field(default=30.0, alias="SALES_HTTP_TIMEOUT_SECONDS")
    # Formatted with sheet_id and gid, e.g. "https://proxy.local/sheets/{sheet_id}?gid={gid}".
    sales_proxy_url_template: Optional[str] = Field(default=None, alias="SALES_PROXY_URL_TEMPLATE")
    sales_default_formula: str = Field(
        default="metric_sum",
        alias="SALES_DEFAULT_FORMULA",
        pattern="^(metric_sum|threshold_flag_plus_invoice|count_times_amount_plus_invoice)$",
    )
    sales_sources_file: Optional[str] = Field(default=None, alias="SALES_SOURCES_FILE")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
