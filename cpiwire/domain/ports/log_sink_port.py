"""
Log Sink Port

Architectural Intent:
- Diagnostic sink for CPI request/response traffic
- A stdlib logging.Logger satisfies it as-is
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LogSinkPort(Protocol):
    def debug(self, msg: str, *args: Any) -> None:
        ...
