"""Per-run state shared by the pipeline and its actions."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from .errors import ExternalToolError
from .tools import ToolResult, format_command

if typ.TYPE_CHECKING:
    from .config import BuildConfig
    from .console import Confirmer, Console
    from .credentials import CredentialStore
    from .tools import ToolRunner

__all__ = ["BuildContext", "RunState"]


@dataclasses.dataclass(slots=True)
class RunState:
    """Transient progress for a single invocation."""

    steps: tuple[str, ...] = ()
    index: int = 0
    confirmations: list[tuple[str, bool]] = dataclasses.field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.steps)


@dataclasses.dataclass(slots=True)
class BuildContext:
    """Collaborators handed to every action.

    Parameters
    ----------
    config : BuildConfig
        Loaded configuration; never mutated during the run.
    runner : ToolRunner
        Executes external commands.
    console : Console
        Reports progress and status.
    confirm : Confirmer
        Asks the operator before destructive work.
    credentials : CredentialStore
        Resolves keychain secrets.
    assume_yes : bool
        Skip confirmation prompts (``--yes`` on the command line).
    """

    config: BuildConfig
    runner: ToolRunner
    console: Console
    confirm: Confirmer
    credentials: CredentialStore
    assume_yes: bool = False
    state: RunState = dataclasses.field(default_factory=RunState)

    @property
    def interactive(self) -> bool:
        return not (self.assume_yes or self.config.skip_confirmation)

    def confirm_action(self, prompt: str) -> bool:
        """Return ``True`` when the operator agrees or prompts are disabled."""
        if not self.interactive:
            return True
        answer = self.confirm(prompt)
        self.state.confirmations.append((prompt, answer))
        return answer

    def run_tool(
        self,
        argv: typ.Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ToolResult:
        """Echo and run ``argv``; raise when it exits non-zero.

        Raises
        ------
        ExternalToolError
            If the command reports a non-zero exit status. The last line of
            any captured error output is carried in the message.
        """
        self.console.command(format_command(argv))
        result = self.runner(argv, cwd=cwd, capture=capture)
        if not result.ok:
            raise ExternalToolError(argv, result.returncode, stderr=result.stderr)
        return result
