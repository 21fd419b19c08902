"""
cpiwire Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for CPI call observability
- Call duration metrics and per-call spans
"""

from cpiwire.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
]
