"""Shared helpers for the release pipeline test suites."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from mac_release.tools import ToolResult

__all__ = [
    "FakeRunner",
    "ScriptedConfirmer",
    "StaticCredentials",
    "write_config",
]


@dataclasses.dataclass
class Invocation:
    """A command recorded by :class:`FakeRunner`."""

    argv: tuple[str, ...]
    cwd: Path | None
    capture: bool


class FakeRunner:
    """Record commands and answer with scripted exit codes.

    Parameters
    ----------
    returncodes : Mapping[str, int], optional
        Exit status keyed by program name, or by ``"program subcommand"`` for
        tools such as ``xcrun``. Unlisted commands succeed.
    stdout, stderr : Mapping[str, str], optional
        Captured output keyed the same way; only returned for captured runs.
    effects : Mapping[str, Callable[[tuple[str, ...], Path | None], None]], optional
        Side effects run before returning, for example writing the image that
        ``create-dmg`` would produce.
    """

    def __init__(
        self,
        returncodes: typ.Mapping[str, int] | None = None,
        stdout: typ.Mapping[str, str] | None = None,
        stderr: typ.Mapping[str, str] | None = None,
        effects: typ.Mapping[str, typ.Callable[[tuple[str, ...], Path | None], None]]
        | None = None,
    ) -> None:
        self.returncodes = dict(returncodes or {})
        self.stdout = dict(stdout or {})
        self.stderr = dict(stderr or {})
        self.effects = dict(effects or {})
        self.calls: list[Invocation] = []

    def _lookup(self, table: typ.Mapping[str, typ.Any], argv: tuple[str, ...]) -> typ.Any:
        for key in (" ".join(argv[:2]), Path(argv[0]).name):
            if key in table:
                return table[key]
        return None

    def __call__(
        self,
        argv: typ.Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ToolResult:
        command = tuple(argv)
        self.calls.append(Invocation(command, cwd, capture))
        if (effect := self._lookup(self.effects, command)) is not None:
            effect(command, cwd)
        returncode = self._lookup(self.returncodes, command) or 0
        if not capture:
            return ToolResult(command, returncode)
        return ToolResult(
            command,
            returncode,
            self._lookup(self.stdout, command) or "",
            self._lookup(self.stderr, command) or "",
        )

    @property
    def programs(self) -> list[str]:
        """Return ``program subcommand`` labels for each recorded call."""
        return [" ".join(call.argv[:2]) for call in self.calls]


class ScriptedConfirmer:
    """Answer confirmation prompts from a fixed list of replies."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            message = f"Unexpected confirmation prompt: {prompt}"
            raise AssertionError(message)
        return self.answers.pop(0)


class StaticCredentials:
    """Credential store backed by a dictionary."""

    def __init__(self, secrets: typ.Mapping[str, str] | None = None) -> None:
        self.secrets = dict(secrets or {})
        self.lookups: list[str] = []

    def lookup(self, service: str) -> str:
        self.lookups.append(service)
        return self.secrets.get(service, "")


def write_config(path: Path, **values: str) -> Path:
    """Write ``values`` as ``key = value`` lines to ``path``."""
    lines = [f"{key} = {value}" for key, value in values.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
