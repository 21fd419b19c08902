"""
Composition Root

Architectural Intent:
- Dependency injection composition root for cpiwire
- Single place where the CPI client and its collaborators are wired together

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- The telemetry exporter is created uninitialized; callers that configured an
  endpoint await exporter.initialize()
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cpiwire.infrastructure.adapters.external_cpi import ExternalCpi
from cpiwire.infrastructure.config import CpiwireConfig, load_config
from cpiwire.infrastructure.identity import StaticDirectorIdentity
from cpiwire.infrastructure.logging import TRAFFIC_LOGGER
from cpiwire.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter


@dataclass
class CpiwireContainer:
    """DI container holding all wired dependencies."""

    config: CpiwireConfig
    identity: StaticDirectorIdentity
    exporter: OTELExporter
    cpi: ExternalCpi


def create_container(
    config: Optional[CpiwireConfig] = None,
    cpi_path: Optional[str] = None,
    director_uuid: Optional[str] = None,
) -> CpiwireContainer:
    """Create and wire all dependencies; explicit arguments beat config values."""
    config = config or load_config()

    identity = StaticDirectorIdentity(director_uuid or config.cpi.director_uuid)
    exporter = OTELExporter(
        OTELConfig(
            endpoint=config.telemetry.endpoint,
            service_name=config.telemetry.service_name,
            insecure=config.telemetry.insecure,
        )
    )
    cpi = ExternalCpi(
        cpi_path or config.cpi.path,
        identity,
        log_sink=logging.getLogger(TRAFFIC_LOGGER),
        exporter=exporter,
    )

    return CpiwireContainer(
        config=config,
        identity=identity,
        exporter=exporter,
        cpi=cpi,
    )
