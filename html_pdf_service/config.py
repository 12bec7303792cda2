"""
HTML to PDF Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ServiceSettings(BaseSettings):
    """
    HTML to PDF service configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix, use exact env var names
        case_sensitive=False,  # PORT = port
    )

    # === Server ===
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Listening port (1-65535)"
    )
    static_dir: str = Field(
        default="public",
        description="Directory served as static files at the service root"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR"
    )
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        description="Largest accepted request body in bytes (default 10 MiB)"
    )

    # === CORS ===
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins"
    )

    # === Rendering engine ===
    playwright_headless: bool = Field(
        default=True,
        description="Launch Chromium without a visible window"
    )
    playwright_timeout_ms: int = Field(
        default=30000,
        ge=1000,
        description="Default timeout for engine waits in milliseconds"
    )
    chromium_args: str = Field(
        default="--no-sandbox,--disable-setuid-sandbox",
        description="Comma-separated extra Chromium command line flags"
    )

    # === Settle heuristic ===
    settle_wait_until: str = Field(
        default="networkidle",
        description="Load state awaited after the markup is set"
    )
    wait_for_fonts: bool = Field(
        default=True,
        description="Wait for document.fonts.ready before exporting"
    )
    settle_delay_ms: int = Field(
        default=250,
        ge=0,
        le=10000,
        description="Grace delay after readiness signals, in milliseconds (0-10000)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("settle_wait_until")
    @classmethod
    def validate_wait_until(cls, v: str) -> str:
        """Validate the load state is one the engine understands."""
        allowed = {"load", "domcontentloaded", "networkidle", "commit"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"settle_wait_until must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def chromium_args_list(self) -> List[str]:
        """Parse Chromium flags into a list."""
        return [arg.strip() for arg in self.chromium_args.split(",") if arg.strip()]


@lru_cache()
def get_settings() -> ServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    Use this function to access configuration throughout the app.
    """
    return ServiceSettings()


def validate_config_on_startup() -> None:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    logger.info(f"Configuration loaded: port={settings.port}")
    logger.info(f"  static_dir={settings.static_dir}")
    logger.info(f"  playwright_headless={settings.playwright_headless}")
    logger.info(f"  playwright_timeout={settings.playwright_timeout_ms}ms")
    logger.info(
        f"  settle: wait_until={settings.settle_wait_until}, "
        f"fonts={settings.wait_for_fonts}, delay={settings.settle_delay_ms}ms"
    )
