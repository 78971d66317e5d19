"""
Client Configuration Module

Centralizes client defaults using environment variables with Pydantic Settings.
Every value can be overridden with a ``WELSTORY_`` prefixed variable or a
``.env`` file, and every value can also be passed explicitly to
``WelstoryClient`` which takes precedence over the environment.

The TRANSPORT variable controls which HTTP strategy is picked when the
caller does not inject one:
    - auto: first available of httpx, requests, urllib, socket
    - httpx / requests / urllib / socket: pin a specific strategy

Usage:
    from welstory.core.config import get_settings

    settings = get_settings()
    print(settings.base_url)

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://welplus.welstory.com/"


class TransportMode(str, Enum):
    """
    HTTP transport strategies, in fallback order.

    Attributes:
        AUTO: Probe the strategies below in order, first available wins
        HTTPX: Native async client (httpx.AsyncClient)
        REQUESTS: Blocking requests session run on a worker thread
        URLLIB: Callback-driven urllib request on a worker thread
        SOCKET: Raw http.client connection, body read chunk by chunk
    """
    AUTO = "auto"
    HTTPX = "httpx"
    REQUESTS = "requests"
    URLLIB = "urllib"
    SOCKET = "socket"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Credentials are optional and never read implicitly by the client;
    they exist so callers can keep them in the same ``.env`` file.

    Attributes:
        base_url: Root URL of the Welstory Plus service
        user_agent: Product identifier sent as User-Agent
        transport: Transport strategy selection
        request_timeout: Per-request timeout in seconds (None disables it)
        debug: Enable verbose logging in setup_logging()
        username: Optional login name for caller convenience
        password: Optional password for caller convenience
    """

    model_config = SettingsConfigDict(
        env_prefix="WELSTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # SERVICE
    # ==========================================================================

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Welstory Plus service root URL"
    )
    user_agent: str = Field(
        default="Welplus",
        description="User-Agent header expected by the service"
    )

    # ==========================================================================
    # TRANSPORT
    # ==========================================================================

    transport: TransportMode = Field(
        default=TransportMode.AUTO,
        description="HTTP transport strategy"
    )
    request_timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds, None for no timeout"
    )

    # ==========================================================================
    # LOGGING
    # ==========================================================================

    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    # ==========================================================================
    # CREDENTIALS (caller convenience)
    # ==========================================================================

    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("transport", mode="before")
    @classmethod
    def validate_transport(cls, v: str) -> TransportMode:
        """Convert string to TransportMode enum."""
        if isinstance(v, TransportMode):
            return v
        try:
            return TransportMode(v.lower())
        except ValueError:
            valid = [e.value for e in TransportMode]
            raise ValueError(f"Invalid transport. Must be one of: {valid}")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @property
    def has_credentials(self) -> bool:
        """Check if both username and password are configured."""
        return bool(self.username and self.password)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached client settings.

    Settings are loaded once per process so every client created
    without explicit options sees the same defaults.

    Returns:
        Settings: Configured client settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure logging for scripts that use the client.

    The library itself never calls this; it only emits records on
    ``welstory.*`` loggers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The ``welstory`` package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logging.getLogger("welstory")
