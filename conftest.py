"""Global test configuration.

Provides fake CPI executables: /bin/sh scripts that record their stdin and
environment under TMPDIR and print a canned response.
"""

import json
import logging
import os
import stat

import pytest


@pytest.fixture(autouse=True)
def reset_cpiwire_logging():
    """configure_logging() binds a handler to the current sys.stderr; drop it."""
    yield
    logger = logging.getLogger("cpiwire")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logging.getLogger("cpiwire.cpi").setLevel(logging.NOTSET)


def _write_script(path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def cpi_tmpdir(tmp_path, monkeypatch):
    """TMPDIR forwarded to fake CPIs, where they drop their captures."""
    workdir = tmp_path / "cpi-tmp"
    workdir.mkdir()
    monkeypatch.setenv("TMPDIR", str(workdir))
    return workdir


@pytest.fixture
def fake_cpi(tmp_path):
    """Factory building a fake CPI that prints `response` and exits `exit_status`."""

    def _make(response, exit_status: int = 0, stderr: str = "") -> str:
        output = response if isinstance(response, str) else json.dumps(response)
        out_file = tmp_path / f"response-{len(os.listdir(tmp_path))}.out"
        out_file.write_text(output)
        body = (
            'cat > "${TMPDIR:-/tmp}/cpi-stdin"\n'
            'env > "${TMPDIR:-/tmp}/cpi-env"\n'
            f"cat '{out_file}'\n"
        )
        if stderr:
            body += f"echo '{stderr}' >&2\n"
        body += f"exit {exit_status}\n"
        return _write_script(tmp_path / f"cpi-{len(os.listdir(tmp_path))}", body)

    return _make
