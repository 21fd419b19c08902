"""
Director Identity Port

Architectural Intent:
- Supplies the director UUID placed in every CPI request context
- The identity is fixed for the lifetime of the director process
"""

from typing import Protocol, runtime_checkable

from cpiwire.domain.value_objects.director_uuid import DirectorUuid


@runtime_checkable
class DirectorIdentityPort(Protocol):
    def director_uuid(self) -> DirectorUuid:
        ...
