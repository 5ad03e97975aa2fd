"""Configuration management for the OpenStack MCP server."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)

DEFAULT_REGION = "RegionOne"


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class ServerSettings(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1024, le=65535)
    instructions: str = Field(
        default=(
            "Use these tools to inspect OpenStack virtual machines, networks and volumes. "
            "List operations return summaries; use the detail operations with an ID "
            "from a listing to see the full record. All operations are read-only."
        )
    )
    transport_mode: Literal["stdio", "http"] = Field(default="stdio")
    invocation_timeout_seconds: float = Field(default=120.0, gt=0, le=3600)


class OpenStackSettings(BaseModel):
    """Control-plane connection settings.

    Credentials themselves are not modelled here; openstacksdk reads them
    from ``OS_*`` variables or from ``clouds.yaml`` when ``cloud`` is set.
    """

    cloud: str | None = Field(default=None, description="Named cloud in clouds.yaml")
    region: str | None = Field(default=None, description="Region selector (OS_REGION_NAME)")
    page_size: int = Field(default=100, ge=1, le=1000)
    api_timeout_seconds: int = Field(default=30, ge=1, le=300)

    @field_validator("cloud", "region")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class Settings(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    openstack: OpenStackSettings = Field(default_factory=OpenStackSettings)


ENV_KEYS = {
    "host": "MCP_HOST",
    "port": "MCP_PORT",
    "instructions": "MCP_INSTRUCTIONS",
    "transport_mode": "TRANSPORT_MODE",
    "invocation_timeout": "MCP_INVOCATION_TIMEOUT_SECONDS",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "os_cloud": "OS_CLOUD",
    "os_region": "OS_REGION_NAME",
    "page_size": "OPENSTACK_PAGE_SIZE",
    "api_timeout": "OPENSTACK_API_TIMEOUT_SECONDS",
}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(path: str) -> str:
    candidate = Path(path)
    root = _project_root().resolve()
    if candidate.is_absolute():
        resolved = candidate.resolve()
    else:
        resolved = (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"Path traversal detected: '{path}' resolves outside project root")
    return str(resolved)


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "server": {
            "host": os.getenv(ENV_KEYS["host"], ServerSettings().host),
            "port": _env_int(ENV_KEYS["port"], ServerSettings().port),
            "instructions": os.getenv(ENV_KEYS["instructions"], ServerSettings().instructions),
            "transport_mode": os.getenv(
                ENV_KEYS["transport_mode"], ServerSettings().transport_mode
            ),
            "invocation_timeout_seconds": _env_float(
                ENV_KEYS["invocation_timeout"],
                ServerSettings().invocation_timeout_seconds,
            ),
        },
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
        },
        "openstack": {
            "cloud": os.getenv(ENV_KEYS["os_cloud"]),
            "region": os.getenv(ENV_KEYS["os_region"]),
            "page_size": _env_int(ENV_KEYS["page_size"], OpenStackSettings().page_size),
            "api_timeout_seconds": _env_int(
                ENV_KEYS["api_timeout"],
                OpenStackSettings().api_timeout_seconds,
            ),
        },
    }

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
