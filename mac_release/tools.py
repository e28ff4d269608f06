"""Invocation of external command-line tools.

Actions never spawn processes directly; they call a :class:`ToolRunner`. The
production runner is backed by :mod:`plumbum`, and tests substitute a fake
that records each command line.
"""

from __future__ import annotations

import contextlib
import dataclasses
import typing as typ
from pathlib import Path

from plumbum import RETCODE, local
from plumbum.commands import CommandNotFound

__all__ = [
    "COMMAND_NOT_FOUND",
    "PlumbumRunner",
    "ToolResult",
    "ToolRunner",
    "format_command",
]

COMMAND_NOT_FOUND = 127

_SECRET_FLAGS = frozenset({"--password"})


@dataclasses.dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of a single external command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ToolRunner(typ.Protocol):
    """Capability for running one external command to completion."""

    def __call__(
        self,
        argv: typ.Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ToolResult:
        """Run ``argv`` and return its exit status.

        When ``capture`` is ``True`` the command's standard output and error
        are collected into :attr:`ToolResult.stdout` and
        :attr:`ToolResult.stderr`; otherwise both are streamed to the
        terminal. A program that cannot be started is reported with
        :data:`COMMAND_NOT_FOUND` and the reason in ``stderr``.
        """


class PlumbumRunner:
    """Run commands through :data:`plumbum.local`."""

    def __call__(
        self,
        argv: typ.Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ToolResult:
        program, *args = argv
        try:
            command = local[program]
        except CommandNotFound:
            return ToolResult(
                tuple(argv), COMMAND_NOT_FOUND, stderr=f"{program}: command not found"
            )

        bound = command[tuple(args)]
        workdir = local.cwd(str(cwd)) if cwd is not None else contextlib.nullcontext()
        try:
            with workdir:
                if capture:
                    returncode, stdout, stderr = bound.run(retcode=None)
                    return ToolResult(tuple(argv), returncode, stdout, stderr)
                returncode = bound & RETCODE(FG=True)
        except OSError as exc:
            # Path-form programs are only checked when the process is spawned.
            return ToolResult(tuple(argv), COMMAND_NOT_FOUND, stderr=str(exc))
        return ToolResult(tuple(argv), returncode)


def format_command(argv: typ.Sequence[str]) -> str:
    """Render ``argv`` for display, masking secret flag values.

    Examples
    --------
    >>> format_command(["xcrun", "notarytool", "--password", "hunter2"])
    'xcrun notarytool --password ********'
    """
    rendered: list[str] = []
    mask_next = False
    for token in argv:
        rendered.append("********" if mask_next else token)
        mask_next = token in _SECRET_FLAGS
    return " ".join(rendered)
