"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from cpiwire.domain.ports.cloud_port import CloudPort
from cpiwire.domain.ports.log_sink_port import LogSinkPort
from cpiwire.domain.ports.identity_port import DirectorIdentityPort

__all__ = [
    "CloudPort",
    "LogSinkPort",
    "DirectorIdentityPort",
]
