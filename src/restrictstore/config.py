"""Configuration contract for restrictstore.

Pydantic-validated settings shared by every store in the process:
fallback policy for newly promoted stores, sentinel key of tagged JSON
fragments, path separator, registry resolution mode, provider export and
logging.

Settings come either from an explicit ``StoreConfig`` passed to a store,
or from the process-wide active config (see ``get_store_config``), which
is loaded from the environment on first use.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .permissions.constants import Permission, ResolutionMode


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Settings for stores and the permission engine.

    Environment variables:
        LOG_LEVEL               — logging level
        LOG_JSON                — JSON log format (true/false)
        STORE_DEFAULT_POLICY    — fallback permission of base stores
        STORE_SENTINEL_KEY      — key that promotes a JSON object to a store
        STORE_PATH_SEPARATOR    — single path separator character
        STORE_RESOLUTION        — inherit | nearest
        STORE_EXPORT_PROVIDERS  — realize lazy providers in entries()
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Store behaviour
    default_policy: Permission = Field(
        default=Permission.READ_WRITE,
        description="Fallback permission for stores that do not set their own",
    )
    sentinel_key: str = Field(
        default="store",
        description="Key marking a JSON object as the initial entries of a child store",
    )
    path_separator: str = Field(
        default=":",
        description="Separator between path segments",
    )
    resolution: ResolutionMode = Field(
        default=ResolutionMode.INHERIT,
        description="Registry lineage walk: inherit (per field) or nearest (per type entry)",
    )
    export_providers: bool = Field(
        default=False,
        description="Realize lazy providers when exporting entries() instead of omitting them",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("default_policy", mode="before")
    @classmethod
    def validate_default_policy(cls, v: str | Permission) -> Permission:
        return Permission.parse(v)

    @field_validator("sentinel_key")
    @classmethod
    def validate_sentinel_key(cls, v: str) -> str:
        if not v:
            raise ValueError("Sentinel key must not be empty")
        return v

    @field_validator("path_separator")
    @classmethod
    def validate_path_separator(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("Path separator must be a single character")
        return v

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }


def load_store_config_from_env() -> StoreConfig:
    """Load store configuration from environment variables.

    Raises:
        ConfigurationError: If a variable holds an invalid value.
    """
    import os

    try:
        return StoreConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
            default_policy=os.getenv("STORE_DEFAULT_POLICY", "rw"),
            sentinel_key=os.getenv("STORE_SENTINEL_KEY", "store"),
            path_separator=os.getenv("STORE_PATH_SEPARATOR", ":"),
            resolution=os.getenv("STORE_RESOLUTION", "inherit").lower(),
            export_providers=os.getenv("STORE_EXPORT_PROVIDERS", "false").lower() in ("true", "1", "yes", "on"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid store configuration: {e}", errors=e.errors()) from e


_active_config: Optional[StoreConfig] = None


def get_store_config() -> StoreConfig:
    """Return the active config, loading it from the environment once."""
    global _active_config
    if _active_config is None:
        _active_config = load_store_config_from_env()
    return _active_config


def set_store_config(config: Optional[StoreConfig]) -> None:
    """Replace the active config. ``None`` reloads from the environment on next use."""
    global _active_config
    _active_config = config


__all__ = [
    "LogLevel",
    "StoreConfig",
    "get_store_config",
    "load_store_config_from_env",
    "set_store_config",
]
