"""
Director Identity Provider

Architectural Intent:
- Implements DirectorIdentityPort with a UUID fixed at construction
- When no UUID is configured one is generated once per process
"""

import logging
import uuid
from typing import Optional

from cpiwire.domain.value_objects.director_uuid import DirectorUuid

logger = logging.getLogger(__name__)


class StaticDirectorIdentity:
    def __init__(self, value: Optional[str] = None) -> None:
        if not value:
            value = str(uuid.uuid4())
            logger.warning("No director UUID configured, generated %s", value)
        self._uuid = DirectorUuid(value)

    def director_uuid(self) -> DirectorUuid:
        return self._uuid
