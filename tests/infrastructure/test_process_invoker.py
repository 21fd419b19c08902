"""Tests for ProcessInvoker."""

import stat
from unittest.mock import MagicMock, patch

import pytest

from cpiwire.domain.errors import NonExecutable
from cpiwire.infrastructure.adapters.process_invoker import ProcessInvoker, ProcessResult


@pytest.fixture
def executable(tmp_path):
    path = tmp_path / "cpi"
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


class TestEnsureExecutable:
    def test_executable_file(self, executable):
        ProcessInvoker().ensure_executable(executable)

    def test_missing_file(self, tmp_path):
        path = str(tmp_path / "missing")
        with pytest.raises(NonExecutable, match="is not executable"):
            ProcessInvoker().ensure_executable(path)

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(NonExecutable):
            ProcessInvoker().ensure_executable(str(tmp_path))

    def test_no_execute_permission(self, executable):
        with patch("os.access", return_value=False):
            with pytest.raises(NonExecutable) as exc_info:
                ProcessInvoker().ensure_executable(executable)
        assert str(exc_info.value) == f"Failed to run cpi: `{executable}' is not executable"


class TestRun:
    def test_captures_output(self, executable):
        completed = MagicMock(stdout=b'{"ok": 1}', stderr=b"diag", returncode=7)
        with patch("subprocess.run", return_value=completed) as run:
            result = ProcessInvoker().run(executable, '{"method":"ping"}', {"PATH": "/bin"})

        assert result == ProcessResult(stdout='{"ok": 1}', stderr="diag", exit_status=7)
        args, kwargs = run.call_args
        assert args[0] == [executable]
        assert kwargs["input"] == b'{"method":"ping"}'
        assert kwargs["env"] == {"PATH": "/bin"}
        assert kwargs["check"] is False
        assert kwargs["capture_output"] is True
        assert "shell" not in kwargs
        assert "timeout" not in kwargs

    def test_undecodable_output_replaced(self, executable):
        completed = MagicMock(stdout=b"\xff\xfe", stderr=None, returncode=0)
        with patch("subprocess.run", return_value=completed):
            result = ProcessInvoker().run(executable, "{}", {})
        assert result.stdout == "��"
        assert result.stderr == ""

    def test_os_error_reported_as_non_executable(self, executable):
        with patch("subprocess.run", side_effect=OSError(8, "Exec format error")):
            with pytest.raises(NonExecutable, match="could not be started"):
                ProcessInvoker().run(executable, "{}", {})

    def test_real_process(self, executable, tmp_path):
        script = tmp_path / "echo-cpi"
        script.write_text("#!/bin/sh\ncat\necho oops >&2\nexit 3\n")
        script.chmod(0o755)
        result = ProcessInvoker().run(str(script), '{"a":1}', {"PATH": "/usr/bin:/bin"})
        assert result.stdout == '{"a":1}'
        assert result.stderr == "oops\n"
        assert result.exit_status == 3
