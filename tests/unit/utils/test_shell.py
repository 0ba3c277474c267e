"""Unit tests for subprocess helpers."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from appscrub.utils.shell import CommandResult, run_command, run_interactive


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="x", returncode=1).success

    @pytest.mark.parametrize(
        ("stdout", "expected"),
        [
            ("/T/a\n", "/T/a"),
            ("noise\n/T/a 1\n\n", "/T/a 1"),
            ("", ""),
        ],
    )
    def test_last_line(self, stdout: str, expected: str) -> None:
        assert CommandResult(stdout=stdout, stderr="", returncode=0).last_line == expected


class TestRunCommand:
    """Tests for run_command."""

    @patch("appscrub.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=2)

        result = run_command(["sudo", "-k"], timeout=10.0)

        assert result == CommandResult(stdout="out", stderr="err", returncode=2)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["capture_output"] is True
        assert kwargs["timeout"] == 10.0
        assert "shell" not in kwargs

    @patch("appscrub.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="sh", timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["sh"], timeout=1)

    def test_arguments_reach_program_verbatim(self) -> None:
        result = run_command(["/bin/sh", "-c", 'printf "%s" "$1"', "sh", "$(id)"])

        assert result.success
        assert result.stdout == "$(id)"


class TestRunInteractive:
    """Tests for run_interactive."""

    @patch("appscrub.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(returncode=1)

        assert run_interactive(["sudo", "-v"]) == 1

    @patch("appscrub.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """The password prompt needs the terminal, so nothing is captured."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["sudo", "-v"])

        kwargs = mock_run.call_args.kwargs
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    def test_missing_program(self) -> None:
        with pytest.raises(FileNotFoundError):
            run_interactive(["/nonexistent/appscrub-test-binary"])
