"""Unit tests for shell utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from winprov.utils.shell import CommandResult, command_exists, resolve_command, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="", returncode=1).success

    def test_error_text_prefers_stderr(self) -> None:
        """stderr wins over stdout."""
        result = CommandResult(stdout="out\n", stderr="  err \n", returncode=1)
        assert result.error_text == "err"

    def test_error_text_falls_back_to_stdout(self) -> None:
        """winget reports errors on stdout."""
        result = CommandResult(stdout="No package found\n", stderr="", returncode=1)
        assert result.error_text == "No package found"


class TestRunCommand:
    """Tests for run_command."""

    def test_captures_output(self) -> None:
        """Output and exit code are copied from the completed process."""
        completed = MagicMock(stdout="hello", stderr="", returncode=0)
        with patch("winprov.utils.shell.subprocess.run", return_value=completed) as run:
            result = run_command(["git", "--version"], timeout=5.0, cwd="C:\\")

        assert result == CommandResult(stdout="hello", stderr="", returncode=0)
        run.assert_called_once_with(
            ["git", "--version"],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=5.0,
            cwd="C:\\",
        )

    def test_timeout_propagates(self) -> None:
        """TimeoutExpired is raised to the caller."""
        with (
            patch(
                "winprov.utils.shell.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="x", timeout=1),
            ),
            pytest.raises(subprocess.TimeoutExpired),
        ):
            run_command(["x"])


class TestCommandLookup:
    """Tests for command_exists and resolve_command."""

    def test_command_exists(self) -> None:
        """command_exists reflects shutil.which."""
        with patch("winprov.utils.shell.shutil.which", return_value="C:\\bin\\git.exe"):
            assert command_exists("git")
        with patch("winprov.utils.shell.shutil.which", return_value=None):
            assert not command_exists("git")

    def test_resolve_command(self) -> None:
        """The resolved path is used when found, the name otherwise."""
        with patch("winprov.utils.shell.shutil.which", return_value="C:\\scoop\\shims\\scoop.cmd"):
            assert resolve_command("scoop") == "C:\\scoop\\shims\\scoop.cmd"
        with patch("winprov.utils.shell.shutil.which", return_value=None):
            assert resolve_command("scoop") == "scoop"
