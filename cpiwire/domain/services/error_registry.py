"""
Error Registry

Architectural Intent:
- Closed mapping from wire error identifiers to local error kinds
- Single source of truth for which CPI error types this director understands
- Static: built once at import, read-only afterwards

Design Decisions:
- Wire identifiers keep the fully-qualified names CPI authors already emit
- Each kind records whether it carries the CPI-asserted ok_to_retry flag;
  the flag value itself always comes from the payload
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from cpiwire.domain.errors import (
    CloudError,
    CpiError,
    DiskNotAttached,
    DiskNotFound,
    ExternalCpiError,
    NoDiskSpace,
    NotImplementedByCpi,
    NotSupported,
    RetriableCloudError,
    VMCreationFailed,
    VMNotFound,
)

WIRE_NAMESPACE = "Bosh::Clouds"


@dataclass(frozen=True)
class ErrorKind:
    wire_type: str
    error_class: type[ExternalCpiError]
    carries_retry_flag: bool = False

    def __post_init__(self) -> None:
        if not self.wire_type:
            raise ValueError("Error kind wire type cannot be empty")
        if self.carries_retry_flag and not issubclass(
            self.error_class, RetriableCloudError
        ):
            raise ValueError(
                f"{self.error_class.__name__} cannot carry ok_to_retry"
            )

    def build(self, message: str, ok_to_retry: Any = False) -> ExternalCpiError:
        if self.carries_retry_flag:
            return self.error_class(
                message, ok_to_retry=ok_to_retry, error_type=self.wire_type
            )
        return self.error_class(message, error_type=self.wire_type)


class ErrorRegistry:
    """Read-only lookup of error kinds by wire type."""

    def __init__(self, kinds: Iterable[ErrorKind]) -> None:
        entries: dict[str, ErrorKind] = {}
        for kind in kinds:
            if kind.wire_type in entries:
                raise ValueError(f"Duplicate error kind: {kind.wire_type}")
            entries[kind.wire_type] = kind
        self._entries: Mapping[str, ErrorKind] = MappingProxyType(entries)

    @property
    def entries(self) -> Mapping[str, ErrorKind]:
        return self._entries

    def lookup(self, wire_type: Any) -> Optional[ErrorKind]:
        # Wire payloads are untrusted: anything non-string is simply unknown.
        if not isinstance(wire_type, str):
            return None
        return self._entries.get(wire_type)

    def __contains__(self, wire_type: object) -> bool:
        return self.lookup(wire_type) is not None

    def __len__(self) -> int:
        return len(self._entries)


def _wire(name: str) -> str:
    return f"{WIRE_NAMESPACE}::{name}"


DEFAULT_REGISTRY = ErrorRegistry(
    [
        ErrorKind(_wire("NoDiskSpace"), NoDiskSpace, carries_retry_flag=True),
        ErrorKind(_wire("DiskNotAttached"), DiskNotAttached, carries_retry_flag=True),
        ErrorKind(_wire("DiskNotFound"), DiskNotFound, carries_retry_flag=True),
        ErrorKind(_wire("VMCreationFailed"), VMCreationFailed, carries_retry_flag=True),
        ErrorKind(_wire("CloudError"), CloudError),
        ErrorKind(_wire("VMNotFound"), VMNotFound),
        ErrorKind(_wire("CpiError"), CpiError),
        ErrorKind(_wire("NotImplemented"), NotImplementedByCpi),
        ErrorKind(_wire("NotSupported"), NotSupported),
    ]
)
