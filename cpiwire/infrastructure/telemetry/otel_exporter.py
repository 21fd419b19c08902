"""
OpenTelemetry Exporter for CPI calls

Architectural Intent:
- Exports CPI call durations and outcomes to OTLP-compatible backends
- Wraps each CPI call in a span when the SDK is initialized
- Telemetry never changes the outcome of a CPI call

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
- Validation in __post_init__ prevents accidental plaintext export
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

logger = logging.getLogger(__name__)

CALL_DURATION_METRIC = "cpiwire.cpi.call.duration_ms"
METRICS_BUFFER_LIMIT = 1000


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "cpiwire"
    environment: str = "development"
    enable_traces: bool = True
    enable_metrics: bool = True
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for CPI invocations.

    Until initialize() has wired the SDK, the most recent metrics are kept in
    a bounded local buffer. Afterwards they go to an OTLP gauge only.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: deque[dict[str, Any]] = deque(
            maxlen=METRICS_BUFFER_LIMIT
        )
        self._meter: Any = None
        self._gauges: dict[str, Any] = {}

    async def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            from opentelemetry import trace
            from opentelemetry.sdk.trace import TracerProvider
            from opentelemetry.sdk.trace.export import BatchSpanProcessor
            from opentelemetry.sdk.resources import Resource, SERVICE_NAME
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
            from opentelemetry import metrics
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )
        except ImportError:
            logger.warning("OpenTelemetry SDK not installed, telemetry disabled")
            return

        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.config.service_name,
                    "environment": self.config.environment,
                }
            )

            if self.config.enable_traces:
                trace.set_tracer_provider(TracerProvider(resource=resource))
                span_processor = BatchSpanProcessor(
                    OTLPSpanExporter(endpoint=self.config.endpoint)
                )
                trace.get_tracer_provider().add_span_processor(span_processor)

            if self.config.enable_metrics:
                metric_reader = PeriodicExportingMetricReader(
                    OTLPMetricExporter(endpoint=self.config.endpoint)
                )
                provider = MeterProvider(
                    resource=resource, metric_readers=[metric_reader]
                )
                metrics.set_meter_provider(provider)
                self._meter = metrics.get_meter(__name__)
        except Exception as e:
            logger.error("Failed to initialize OTEL: %s", e)
            return

        self._initialized = True

    def _get_gauge(self, name: str, unit: str = "") -> Any:
        if name not in self._gauges and self._meter:
            self._gauges[name] = self._meter.create_gauge(name, unit=unit)
        return self._gauges.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        unit: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Record a metric value."""
        if not self._initialized:
            self._metrics_buffer.append(
                {
                    "name": name,
                    "value": value,
                    "unit": unit,
                    "attributes": attributes or {},
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            )
            return

        gauge = self._get_gauge(name, unit)
        if gauge:
            gauge.set(value, attributes=attributes or {})

    def record_cpi_call(self, method: str, duration_ms: float, outcome: str) -> None:
        """Record one CPI invocation; outcome is "ok" or the raised error class."""
        self.record_metric(
            CALL_DURATION_METRIC,
            duration_ms,
            unit="ms",
            attributes={"method": method, "outcome": outcome},
        )

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span."""
        if not self._initialized:
            return None

        from opentelemetry import trace

        tracer = trace.get_tracer(__name__)
        return tracer.start_span(name, attributes=attributes or {})

    def end_span(self, span: Any) -> None:
        if span:
            span.end()
