"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to the CPI path, director identity and telemetry settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- CPIWIRE_* variables configure this process only; they are never forwarded
  to CPI subprocesses
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CpiConfig:
    """CPI executable and director identity."""
    path: str = ""
    director_uuid: str = ""


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    service_name: str = "cpiwire"
    insecure: bool = False


@dataclass(frozen=True)
class CpiwireConfig:
    """Root configuration for cpiwire."""
    cpi: CpiConfig = field(default_factory=CpiConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "CPIWIRE") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern CPIWIRE_SECTION_KEY.
    For example: CPIWIRE_CPI_PATH=/var/vcap/jobs/cpi/bin/cpi
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in ("cpi", "telemetry"):
            section, field_name = parts
            data.setdefault(section, {})
            data[section][field_name] = value
        else:
            data[key[len(prefix) + 1:].lower()] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Invalid config file %s: expected a JSON object", path)
        return {}
    return data


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type == "bool":
                filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "CPIWIRE",
) -> CpiwireConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (CPIWIRE_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to cpiwire.json in CWD.
        env_prefix: Environment variable prefix. Defaults to CPIWIRE.
    """
    config_path = Path(path) if path else Path("cpiwire.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return CpiwireConfig(
        cpi=_build_sub_config(CpiConfig, data.get("cpi", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=data.get("log_level", "WARNING"),
    )
