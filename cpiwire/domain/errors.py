"""
CPI Error Taxonomy

Architectural Intent:
- Typed errors raised to callers of the external CPI boundary
- Mirrors the CPI error families (CloudError, CpiError) that CPI authors name
  on the wire, plus protocol-level failures owned by this layer
- Retry orchestration lives above this layer; it reads ok_to_retry where exposed

Design Decisions:
- Only RetriableCloudError and its subclasses expose ok_to_retry
- Messages are kept verbatim; str(error) is the CPI-supplied message
"""

from typing import Any, Optional


class ExternalCpiError(Exception):
    """Root of every error raised across the CPI boundary."""

    def __init__(self, message: str = "", error_type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type


class CloudError(ExternalCpiError):
    """Cloud-provider-reported failure."""


class VMNotFound(CloudError):
    pass


class RetriableCloudError(CloudError):
    """Cloud failure whose CPI asserts whether the call may be re-issued."""

    def __init__(
        self,
        message: str = "",
        ok_to_retry: Any = False,
        error_type: Optional[str] = None,
    ):
        super().__init__(message, error_type=error_type)
        self.ok_to_retry = ok_to_retry


class NoDiskSpace(RetriableCloudError):
    pass


class DiskNotAttached(RetriableCloudError):
    pass


class DiskNotFound(RetriableCloudError):
    pass


class VMCreationFailed(RetriableCloudError):
    pass


class CpiError(ExternalCpiError):
    """CPI-internal failure."""


class NotImplementedByCpi(CpiError):
    pass


class NotSupported(CpiError):
    pass


class UnknownError(ExternalCpiError):
    """CPI reported an error type this director does not recognize."""


class InvalidResponse(ExternalCpiError):
    """CPI output is not valid JSON or lacks required keys."""


class NonExecutable(ExternalCpiError):
    """CPI path cannot be executed."""


class InvalidArguments(ExternalCpiError, TypeError):
    """Caller passed arguments that do not fit the CPI method table."""


def is_retryable(error: BaseException) -> bool:
    """Return the CPI-asserted retry flag, False for kinds that carry none."""
    return bool(getattr(error, "ok_to_retry", False))
