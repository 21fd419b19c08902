"""
CPI Response Value Object

Architectural Intent:
- Validates and decodes the single JSON document a CPI writes to stdout
- Any shape violation is a protocol error (InvalidResponse), never a domain error

Design Decisions:
- result/error/log must all be present; presence matters, not non-nullness
- result is opaque and passed through untouched
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from cpiwire.domain.errors import InvalidResponse

REQUIRED_KEYS = ("result", "error", "log")


@dataclass(frozen=True)
class CpiResponse:
    result: Any
    error: Optional[dict[str, Any]]
    log: Any

    @property
    def failed(self) -> bool:
        return self.error is not None

    @staticmethod
    def parse(raw: str) -> "CpiResponse":
        try:
            document = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise InvalidResponse(
                f"Received invalid response from cpi with error: {e}, output: {raw!r}"
            ) from e

        if not isinstance(document, dict):
            raise InvalidResponse(
                f"Received invalid response from cpi: expected a JSON object, output: {raw!r}"
            )

        missing = [key for key in REQUIRED_KEYS if key not in document]
        if missing:
            raise InvalidResponse(
                f"Received incorrect response from cpi, missing keys "
                f"{', '.join(missing)}: {raw!r}"
            )

        error = document["error"]
        if error is not None and not isinstance(error, dict):
            raise InvalidResponse(
                f"Received incorrect response from cpi, error must be an object: {raw!r}"
            )

        return CpiResponse(
            result=document["result"],
            error=error,
            log=document["log"],
        )
