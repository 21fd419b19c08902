"""
Error Translator

Architectural Intent:
- Turns a decoded CPI error payload into exactly one typed error
- Unrecognized wire types fall back to UnknownError unconditionally
"""

from typing import Any, Mapping

from cpiwire.domain.errors import ExternalCpiError, UnknownError
from cpiwire.domain.services.error_registry import DEFAULT_REGISTRY, ErrorRegistry

UNKNOWN_ERROR_MESSAGE = "Received unknown error from cpi: {type} with message {message}"


class ErrorTranslator:
    def __init__(self, registry: ErrorRegistry = DEFAULT_REGISTRY) -> None:
        self.registry = registry

    def translate(self, payload: Mapping[str, Any]) -> ExternalCpiError:
        wire_type = payload.get("type")
        message = payload.get("message")

        kind = self.registry.lookup(wire_type)
        if kind is None:
            return UnknownError(
                UNKNOWN_ERROR_MESSAGE.format(
                    type=_render(wire_type), message=_render(message)
                ),
                error_type=wire_type if isinstance(wire_type, str) else None,
            )

        return kind.build(_render(message), ok_to_retry=payload.get("ok_to_retry", False))


def _render(value: Any) -> str:
    """Missing payload fields read as empty text."""
    return "" if value is None else str(value)
