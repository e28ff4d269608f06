"""Generate the Sparkle update feed for the output directory."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ..errors import ToolMissingError

if typ.TYPE_CHECKING:
    from ..context import BuildContext

__all__ = ["SPARKLE_SEARCH_PATTERNS", "generate_appcast", "locate_sparkle"]

# (root, glob) pairs; ``None`` as root means the user's home directory.
SPARKLE_SEARCH_PATTERNS: tuple[tuple[Path | None, str], ...] = (
    (None, "Library/Developer/Xcode/DerivedData/*/SourcePackages/artifacts/sparkle/Sparkle"),
    (Path("/opt/homebrew/Caskroom/sparkle"), "*"),
    (Path("/usr/local/Caskroom/sparkle"), "*"),
)


def locate_sparkle(configured: Path | None, home: Path | None = None) -> Path | None:
    """Return the Sparkle installation directory, or ``None`` if absent.

    Parameters
    ----------
    configured : Path | None
        Directory named by ``sparkle_dir``. Used as-is when it exists and no
        search happens when it is set.
    home : Path | None, optional
        Home directory used for the Xcode DerivedData search. Defaults to
        :meth:`Path.home`.
    """
    if configured is not None:
        return configured if configured.is_dir() else None

    home_dir = home if home is not None else Path.home()
    for root, pattern in SPARKLE_SEARCH_PATTERNS:
        base = home_dir if root is None else root
        if not base.is_dir():
            continue
        for candidate in sorted(base.glob(pattern)):
            if candidate.is_dir():
                return candidate
    return None


def generate_appcast(context: BuildContext) -> None:
    """Run Sparkle's ``generate_appcast`` against the output directory.

    Raises
    ------
    ToolMissingError
        If no Sparkle installation can be found.
    ExternalToolError
        If ``generate_appcast`` exits non-zero.
    """
    config = context.config
    context.console.info("Generating Sparkle appcast...")

    sparkle_dir = locate_sparkle(config.sparkle_dir)
    if sparkle_dir is None:
        message = (
            "Sparkle directory not found. Please specify sparkle_dir in config "
            "or ensure Sparkle is available in Xcode DerivedData."
        )
        raise ToolMissingError(message)

    context.run_tool(
        [str(sparkle_dir / "bin" / "generate_appcast"), str(config.output_dir)],
        cwd=sparkle_dir,
    )
    context.console.success("Sparkle appcast generated successfully.")
