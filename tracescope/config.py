from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracescope.utils.request_context import X_CLOUD_TRACE


class Settings(BaseSettings):
    """Centralised application configuration.

    All runtime options (env vars, .env file) are defined here so the rest of
    the codebase can simply do `from tracescope.config import get_settings`
    and retrieve a cached, validated instance.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------
    # Core runtime settings
    # ---------------------------------------------------------------------
    app_env: str = Field("local", description="Running environment: local / staging / prod")
    log_level: str = Field("INFO", description="Application log level (DEBUG, INFO …)")
    log_format: str = Field("console", description="pretty console vs json")

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    port: int = Field(8000, description="FastAPI / Uvicorn port to bind to")
    uvicorn_log_level: str = Field("info", description="Log level that uvicorn should emit")

    # ------------------------------------------------------------------
    # Request tracing
    # ------------------------------------------------------------------
    trace_header: str = Field(X_CLOUD_TRACE, description="Inbound header carrying the trace context")
    trace_attribute: str = Field(X_CLOUD_TRACE, description="Request attribute caching the derived trace id")
    strict_scopes: bool = Field(False, description="Raise on unbalanced scope exits instead of ignoring them")
    google_cloud_project: Optional[str] = Field(
        None,
        description="Project id used to build Cloud Logging trace references in JSON logs",
    )

    # ----------------------- Validators / hooks ------------------------
    @field_validator("app_env")
    @classmethod
    def _validate_app_env(cls, v: str) -> str:
        allowed = {"local", "staging", "prod"}
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}, got '{v}'")
        return v

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in {"console", "json"}:
            raise ValueError(f"LOG_FORMAT must be 'console' or 'json', got '{v}'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # noqa: D401
    """Return a singleton Settings instance (cached)."""

    return Settings()
