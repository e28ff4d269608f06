"""Terminal output for pipeline runs."""

from __future__ import annotations

import sys
import typing as typ

if typ.TYPE_CHECKING:
    from .config import BuildConfig

__all__ = ["Confirmer", "Console", "prompt_confirm"]

RESET = "\033[0m"
DIM = "\033[2m"
BOLD = "\033[1m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
BLUE = "\033[34m"

RULE = "=" * 39


class Confirmer(typ.Protocol):
    """Ask the operator a yes/no question."""

    def __call__(self, prompt: str) -> bool: ...


def prompt_confirm(prompt: str) -> bool:
    """Read a ``[y/N]`` answer from standard input.

    Only ``y`` or ``Y`` counts as agreement. End of input is a refusal.
    """
    try:
        reply = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return reply in {"y", "Y"}


def _isatty(stream: typ.TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """Render headers, progress, and status lines.

    Parameters
    ----------
    out : TextIO, optional
        Stream for regular output. Defaults to ``sys.stdout``.
    err : TextIO, optional
        Stream for error output. Defaults to ``sys.stderr``.
    color : bool | None, optional
        Force ANSI colours on or off. ``None`` enables them when ``out`` is a
        terminal.
    """

    def __init__(
        self,
        out: typ.TextIO | None = None,
        err: typ.TextIO | None = None,
        *,
        color: bool | None = None,
    ) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.color = _isatty(self.out) if color is None else color

    def _paint(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return f"{''.join(codes)}{text}{RESET}"

    def line(self, text: str = "") -> None:
        print(text, file=self.out)

    def info(self, message: str) -> None:
        print(f"{self._paint('[INFO]', BLUE)} {message}", file=self.out)

    def success(self, message: str) -> None:
        print(f"{self._paint('[SUCCESS]', GREEN)} {message}", file=self.out)

    def warning(self, message: str) -> None:
        print(f"{self._paint('[WARNING]', YELLOW)} {message}", file=self.out)

    def error(self, message: str) -> None:
        print(f"{self._paint('[ERROR]', RED)} {message}", file=self.err)

    def command(self, rendered: str) -> None:
        print(f"  $ {rendered}", file=self.out)

    def header(self, config: BuildConfig) -> None:
        self.line()
        self.line(RULE)
        self.line(f"{config.project_name} Build Script")
        self.line(RULE)
        self.line(f"Project: {config.project_name}")
        self.line(f"Project Dir: {config.project_dir}")
        self.line(f"Output Dir: {config.output_dir}")
        self.line(f"Config File: {config.source or '-'}")
        self.line(RULE)
        self.line()

    def progress(self, title: str, steps: typ.Sequence[str], current: int) -> None:
        """Print the step list with ``current`` (1-based) marked active.

        Steps before ``current`` are marked done and the rest pending. Passing
        ``len(steps) + 1`` shows every step as done.
        """
        self.line()
        self.line(RULE)
        self.line(f"{title} Build Progress")
        self.line(RULE)
        for number, step in enumerate(steps, start=1):
            if number < current:
                self.line(self._paint(f"✅ {step}", DIM))
            elif number == current:
                self.line(self._paint(f"➡ {step}", YELLOW))
            else:
                self.line(f"   {step}")
        self.line(RULE)
        self.line()

    def celebrate(self, message: str) -> None:
        self.line(self._paint(f"🎉 {message}", BOLD, GREEN))
