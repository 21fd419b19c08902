"""
CPI Request Value Object

Architectural Intent:
- Immutable request envelope sent to a CPI executable on stdin
- Encoding is the wire contract: compact JSON, keys method/arguments/context
  in that order, context always led by director_uuid
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from cpiwire.domain.errors import InvalidArguments
from cpiwire.domain.value_objects.director_uuid import DirectorUuid


@dataclass(frozen=True)
class CpiRequest:
    method: str
    arguments: tuple[Any, ...]
    director_uuid: DirectorUuid
    extra_context: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not self.method:
            raise ValueError("CPI method cannot be empty")
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(
            self, "extra_context", MappingProxyType(dict(self.extra_context))
        )

    @property
    def context(self) -> dict[str, Any]:
        context: dict[str, Any] = {"director_uuid": str(self.director_uuid)}
        for key, value in self.extra_context.items():
            if key != "director_uuid":
                context[key] = value
        return context

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "arguments": list(self.arguments),
            "context": self.context,
        }

    def encode(self) -> str:
        try:
            return json.dumps(
                self.to_dict(), separators=(",", ":"), ensure_ascii=False
            )
        except (TypeError, ValueError) as e:
            raise InvalidArguments(
                f"{self.method}: arguments cannot be encoded as JSON: {e}"
            ) from e
