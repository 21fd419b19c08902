"""
External CPI Adapter

Architectural Intent:
- Implements CloudPort by forwarding each call to a CPI executable
- One synchronous subprocess per call: request JSON on stdin, response JSON on stdout
- Translates CPI error payloads into the typed error taxonomy

Design Decisions:
- Collaborators (identity, log sink, invoker, registry, telemetry) are injected
- Executable check runs before the request is built; nothing is spawned on failure
- Exit status is logged but never decides success: only a non-null "error"
  in the response does
- Stderr and the CPI "log" field go to the log sink at debug level only
"""

import logging
import os
import time
from typing import Any, Mapping, Optional

from cpiwire.domain.ports.identity_port import DirectorIdentityPort
from cpiwire.domain.ports.log_sink_port import LogSinkPort
from cpiwire.domain.services.error_registry import DEFAULT_REGISTRY, ErrorRegistry
from cpiwire.domain.services.error_translator import ErrorTranslator
from cpiwire.domain.value_objects.cpi_method import lookup_method
from cpiwire.domain.value_objects.cpi_request import CpiRequest
from cpiwire.domain.value_objects.cpi_response import CpiResponse
from cpiwire.infrastructure.adapters.environment import sanitized_environment
from cpiwire.infrastructure.adapters.process_invoker import ProcessInvoker
from cpiwire.infrastructure.telemetry.otel_exporter import OTELExporter

logger = logging.getLogger(__name__)


class ExternalCpi:
    """
    Client for one CPI executable.

    Configuration parameters
    ------------------------
    cpi_path : str
        Path of the CPI executable, made absolute against the working
        directory. Invoked without arguments.
    identity : DirectorIdentityPort
        Supplies the director UUID for the request context.
    log_sink : LogSinkPort | None
        Receives request/response diagnostics. Defaults to this module's logger.
    registry : ErrorRegistry
        Wire error types this director recognizes.
    environ : Mapping[str, str] | None
        Environment TMPDIR is forwarded from. Defaults to os.environ.
    extra_context : Mapping[str, Any] | None
        Additional entries for the request context block.
    """

    def __init__(
        self,
        cpi_path: str,
        identity: DirectorIdentityPort,
        log_sink: Optional[LogSinkPort] = None,
        registry: ErrorRegistry = DEFAULT_REGISTRY,
        invoker: Optional[ProcessInvoker] = None,
        environ: Optional[Mapping[str, str]] = None,
        extra_context: Optional[Mapping[str, Any]] = None,
        exporter: Optional[OTELExporter] = None,
    ) -> None:
        # Resolved once so the validated file is the one that runs.
        self.cpi_path = os.path.abspath(cpi_path) if cpi_path else cpi_path
        self.identity = identity
        self.log_sink = log_sink if log_sink is not None else logger
        self.translator = ErrorTranslator(registry)
        self.invoker = invoker or ProcessInvoker()
        self.environ = environ
        self.extra_context = dict(extra_context or {})
        self.exporter = exporter

    # ------------------------------------------------------------------
    # CloudPort implementation
    # ------------------------------------------------------------------

    def current_vm_id(self) -> Any:
        return self.call("current_vm_id")

    def create_stemcell(self, image_path, cloud_properties) -> Any:
        return self.call("create_stemcell", image_path, cloud_properties)

    def delete_stemcell(self, stemcell_cid) -> Any:
        return self.call("delete_stemcell", stemcell_cid)

    def create_vm(
        self,
        agent_id,
        stemcell_cid,
        cloud_properties,
        network_settings,
        disk_cids,
        environment,
    ) -> Any:
        return self.call(
            "create_vm",
            agent_id,
            stemcell_cid,
            cloud_properties,
            network_settings,
            disk_cids,
            environment,
        )

    def delete_vm(self, vm_cid) -> Any:
        return self.call("delete_vm", vm_cid)

    def has_vm(self, vm_cid) -> Any:
        return self.call("has_vm", vm_cid)

    def reboot_vm(self, vm_cid) -> Any:
        return self.call("reboot_vm", vm_cid)

    def set_vm_metadata(self, vm_cid, metadata) -> Any:
        return self.call("set_vm_metadata", vm_cid, metadata)

    def configure_networks(self, vm_cid, networks) -> Any:
        return self.call("configure_networks", vm_cid, networks)

    def create_disk(self, size, vm_cid) -> Any:
        return self.call("create_disk", size, vm_cid)

    def delete_disk(self, disk_cid) -> Any:
        return self.call("delete_disk", disk_cid)

    def attach_disk(self, vm_cid, disk_cid) -> Any:
        return self.call("attach_disk", vm_cid, disk_cid)

    def detach_disk(self, vm_cid, disk_cid) -> Any:
        return self.call("detach_disk", vm_cid, disk_cid)

    def snapshot_disk(self, disk_cid) -> Any:
        return self.call("snapshot_disk", disk_cid)

    def delete_snapshot(self, snapshot_cid) -> Any:
        return self.call("delete_snapshot", snapshot_cid)

    def get_disks(self, vm_cid) -> Any:
        return self.call("get_disks", vm_cid)

    def ping(self) -> Any:
        return self.call("ping")

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def call(self, method_name: str, *arguments: Any) -> Any:
        """Invoke a CPI method by wire name and return its opaque result."""
        method = lookup_method(method_name)

        span = self._observe(
            "start_span", f"cpi.{method.name}", attributes={"cpi.path": self.cpi_path}
        )
        started = time.monotonic()
        outcome = "ok"
        try:
            self.invoker.ensure_executable(self.cpi_path)
            request = CpiRequest(
                method=method.name,
                arguments=method.bind(arguments),
                director_uuid=self.identity.director_uuid(),
                extra_context=self.extra_context,
            )
            return self._invoke(request)
        except Exception as e:
            outcome = type(e).__name__
            raise
        finally:
            duration_ms = (time.monotonic() - started) * 1000
            self._observe("record_cpi_call", method.name, duration_ms, outcome)
            self._observe("end_span", span)

    def _observe(self, action: str, *args: Any, **kwargs: Any) -> Any:
        """Run one exporter call; a telemetry failure is logged and dropped."""
        if not self.exporter:
            return None
        try:
            return getattr(self.exporter, action)(*args, **kwargs)
        except Exception as e:
            logger.warning("CPI telemetry %s failed: %s", action, e)
            return None

    def _invoke(self, request: CpiRequest) -> Any:
        request_json = request.encode()
        env = sanitized_environment(self.environ)

        self.log_sink.debug(
            "External CPI sending request: %s with command: %s",
            request_json,
            self.cpi_path,
        )
        process = self.invoker.run(self.cpi_path, request_json, env)
        self.log_sink.debug(
            "External CPI got response: %s, err: %s, exit_status: %s",
            process.stdout,
            process.stderr,
            process.exit_status,
        )

        response = CpiResponse.parse(process.stdout)
        if response.log:
            self.log_sink.debug("External CPI log: %s", response.log)

        if response.failed:
            raise self.translator.translate(response.error)
        return response.result
