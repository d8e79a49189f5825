# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for endpoint, URL rewriting, cache and logging settings.
All variables use the EMBEDLRMI_ prefix, e.g. EMBEDLRMI_ENDPOINT.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CACHE_EXPIRY = 2_592_000  # 30 days


class ConfigurationError(Exception):
    """Raised when configuration is missing or internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDLRMI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Provider ===
    endpoint: str = ""
    http_timeout_s: float = 5.0

    # === URL rewriting ===
    url_replacements: list[tuple[str, str]] = []

    # === Cache ===
    cache_expiry: int = DEFAULT_CACHE_EXPIRY
    cache_namespace: str = "embedlrmi"
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.embedlrmi/cache")
    cache_redis_url: str = ""
    single_flight: bool = True

    # === Admin ===
    admin_secret: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("url_replacements", mode="before")
    @classmethod
    def normalize_replacements(cls, v: Any) -> Any:  # noqa: N805
        """Accept the legacy {"from": [...], "to": [...]} mapping shape.

        A `from` entry without a matching `to` entry is replaced with "".
        """
        if isinstance(v, dict):
            sources = list(v.get("from") or [])
            targets = list(v.get("to") or [])
            if isinstance(v.get("from"), str):
                sources = [v["from"]]
            if isinstance(v.get("to"), str):
                targets = [v["to"]] * len(sources)
            return [
                (src, targets[i] if i < len(targets) else "")
                for i, src in enumerate(sources)
            ]
        return v

    @field_validator("url_replacements")
    @classmethod
    def drop_empty_sources(cls, v: list[tuple[str, str]]) -> list[tuple[str, str]]:  # noqa: N805
        return [(src, dst) for src, dst in v if src]

    @field_validator("cache_expiry")
    @classmethod
    def validate_cache_expiry(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("cache_expiry must be >= 0")
        return v

    @field_validator("http_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("http_timeout_s must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Fail fast on missing required values."""
        errors: list[str] = []

        if not self.endpoint.strip():
            errors.append("EMBEDLRMI_ENDPOINT is not set")

        if not self.cache_namespace:
            errors.append("EMBEDLRMI_CACHE_NAMESPACE must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the endpoint is missing or config is inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
