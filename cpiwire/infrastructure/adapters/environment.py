"""
CPI Environment Sanitizer

Security:
- CPI executables manipulate real infrastructure; they get a fixed PATH and,
  when set, the caller's TMPDIR. Nothing else is inherited.
"""

import os
from typing import Mapping, Optional

CPI_PATH = "/usr/sbin:/usr/bin:/sbin:/bin"
FORWARDED_VARIABLES = ("TMPDIR",)


def sanitized_environment(source: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Build the environment handed to a CPI subprocess.

    Args:
        source: Environment to forward TMPDIR from. Defaults to os.environ,
            read at call time.
    """
    if source is None:
        source = os.environ

    env = {"PATH": CPI_PATH}
    for name in FORWARDED_VARIABLES:
        value = source.get(name)
        if value is not None:
            env[name] = value
    return env
