"""Tests for external command helpers and keychain lookups."""

from __future__ import annotations

import sys
from pathlib import Path

from build_test_helpers import FakeRunner

from mac_release.credentials import KeychainCredentials
from mac_release.errors import ExternalToolError
from mac_release.tools import COMMAND_NOT_FOUND, PlumbumRunner, ToolResult, format_command


def test_format_command_masks_password() -> None:
    argv = ["xcrun", "notarytool", "submit", "A.dmg", "--password", "s3cret", "--wait"]
    rendered = format_command(argv)
    assert "s3cret" not in rendered
    assert rendered == "xcrun notarytool submit A.dmg --password ******** --wait"


def test_tool_result_ok() -> None:
    assert ToolResult(("true",), 0).ok
    assert not ToolResult(("false",), 1).ok


def test_external_tool_error_reports_exit_status() -> None:
    error = ExternalToolError(["create-dmg", "--volname", "A"], 2)
    assert error.returncode == 2
    assert error.argv == ("create-dmg", "--volname", "A")
    assert str(error) == "create-dmg exited with status 2"


def test_plumbum_runner_reports_missing_program() -> None:
    """An unknown program maps to the conventional 127 exit status."""
    result = PlumbumRunner()(["definitely-not-a-real-tool-9f3c", "--help"])
    assert result.returncode == COMMAND_NOT_FOUND
    assert not result.ok


def test_plumbum_runner_captures_output(tmp_path: Path) -> None:
    result = PlumbumRunner()(
        [sys.executable, "-c", "import os; print(os.getcwd())"],
        cwd=tmp_path,
        capture=True,
    )
    assert result.ok
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_plumbum_runner_returns_exit_status() -> None:
    result = PlumbumRunner()([sys.executable, "-c", "raise SystemExit(3)"])
    assert result.returncode == 3


def test_keychain_lookup_returns_secret() -> None:
    runner = FakeRunner(stdout={"security find-generic-password": "secret-value\n"})
    credentials = KeychainCredentials(runner)

    assert credentials.lookup("my-service") == "secret-value"
    call = runner.calls[0]
    assert call.argv == ("security", "find-generic-password", "-s", "my-service", "-w")
    assert call.capture is True


def test_keychain_lookup_without_service_skips_tool() -> None:
    runner = FakeRunner()
    assert KeychainCredentials(runner).lookup("") == ""
    assert runner.calls == []


def test_keychain_lookup_failure_is_empty() -> None:
    """An absent keychain item is not an error at lookup time."""
    runner = FakeRunner(
        returncodes={"security find-generic-password": 44},
        stdout={"security find-generic-password": "ignored"},
    )
    assert KeychainCredentials(runner).lookup("missing") == ""


def test_external_tool_error_carries_last_stderr_line() -> None:
    error = ExternalToolError(
        ["xcrun", "notarytool"],
        69,
        stderr="Conducting pre-submission checks\nError: HTTP status code: 401\n\n",
    )
    assert str(error) == "xcrun exited with status 69: Error: HTTP status code: 401"
    assert error.stderr.startswith("Conducting")


def test_plumbum_runner_captures_error_output() -> None:
    script = "import sys; sys.stderr.write('Error: invalid credentials'); sys.exit(69)"
    result = PlumbumRunner()([sys.executable, "-c", script], capture=True)

    assert result.returncode == 69
    assert result.stdout == ""
    assert "Error: invalid credentials" in result.stderr


def test_plumbum_runner_missing_path_program(tmp_path: Path) -> None:
    """A program given by path is only found missing when it is launched."""
    program = tmp_path / "bin" / "generate_appcast"

    result = PlumbumRunner()([str(program), str(tmp_path)], cwd=tmp_path)

    assert result.returncode == COMMAND_NOT_FOUND
    assert "generate_appcast" in result.stderr


def test_plumbum_runner_non_executable_program(tmp_path: Path) -> None:
    program = tmp_path / "generate_appcast"
    program.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    program.chmod(0o644)

    result = PlumbumRunner()([str(program)], capture=True)

    assert result.returncode == COMMAND_NOT_FOUND
    assert not result.ok
