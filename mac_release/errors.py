"""Exception types raised by the release pipeline."""

from __future__ import annotations

import typing as typ

__all__ = [
    "BuildError",
    "ConfigError",
    "ConfigInvalidError",
    "ConfigMissingError",
    "ConfirmationDeclinedError",
    "CredentialMissingError",
    "ExternalToolError",
    "FilesystemError",
    "ToolMissingError",
    "UnknownStepError",
]


class BuildError(RuntimeError):
    """Base class for every failure that aborts a pipeline run."""


class ConfigError(BuildError):
    """Raised when the configuration cannot be loaded or is incomplete."""


class ConfigMissingError(ConfigError):
    """Raised when the configuration file does not exist or cannot be read."""


class ConfigInvalidError(ConfigError):
    """Raised when required configuration values are absent or malformed.

    Parameters
    ----------
    message : str
        Human readable description of the problem.
    missing : Sequence[str], optional
        Required keys that were absent or empty, in declaration order.
    """

    def __init__(self, message: str, missing: typ.Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


class UnknownStepError(BuildError):
    """Raised when a configured step name matches no known action."""

    def __init__(self, step_name: str) -> None:
        super().__init__(f"Unknown build step: {step_name}")
        self.step_name = step_name


class ConfirmationDeclinedError(BuildError):
    """Raised when the operator declines a destructive step."""


class CredentialMissingError(BuildError):
    """Raised when notarization credentials could not be resolved."""


class ToolMissingError(BuildError):
    """Raised when an external tool installation cannot be located."""


class FilesystemError(BuildError):
    """Raised when the output directory or its contents cannot be changed."""


class ExternalToolError(BuildError):
    """Raised when an external command exits unsuccessfully.

    Attributes
    ----------
    argv : tuple[str, ...]
        Command line that was executed.
    returncode : int
        Exit status reported by the command.
    stderr : str
        Captured error output, empty when the command streamed it.
    """

    def __init__(
        self,
        argv: typ.Sequence[str],
        returncode: int,
        detail: str | None = None,
        *,
        stderr: str = "",
    ) -> None:
        program = argv[0] if argv else "<command>"
        if detail:
            message = f"{program} reported {detail} (exit status {returncode})"
        else:
            message = f"{program} exited with status {returncode}"
        if reason := _last_line(stderr):
            message = f"{message}: {reason}"
        super().__init__(message)
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stderr = stderr


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""
