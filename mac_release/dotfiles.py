"""Back up shell and editor dotfiles into a directory with ``rsync``.

Examples
--------
Copy the default dotfiles from ``$HOME`` into ``./osx``::

    dotfiles-backup osx
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App

from .console import Console
from .errors import BuildError, ExternalToolError, FilesystemError
from .tools import PlumbumRunner, ToolRunner, format_command

__all__ = ["DEFAULT_DOTFILES", "app", "backup_dotfiles", "cli", "run"]

# Source paths relative to $HOME mapped to destinations relative to the backup
# directory. A trailing slash copies a directory's contents.
DEFAULT_DOTFILES: dict[str, str] = {
    ".zshrc": ".zshrc",
    ".vimrc": ".vimrc",
    ".bashrc": ".bashrc",
    ".zprofile": ".zprofile",
    ".profile": ".profile",
    ".bash_profile": ".bash_profile",
    ".aliases": ".aliases",
    ".inputrc": ".inputrc",
    ".dircolors": ".dircolors",
    ".config/aerospace-swipe/": ".config/aerospace-swipe/",
    ".config/aerospace/": ".config/aerospace/",
    ".config/amethyst/": ".config/amethyst/",
    ".config/fastfetch/": ".config/fastfetch/",
    ".config/karabiner": ".config/karabiner",
    ".config/nvim/": ".config/nvim/",
    ".config/sketchybar": ".config/sketchybar",
}

app = App(name="dotfiles-backup", help="Back up dotfiles with rsync.")


def _join(root: Path, relative: str) -> str:
    # Keep the trailing slash; rsync treats it as "contents of".
    suffix = "/" if relative.endswith("/") else ""
    return f"{(root / relative).as_posix().rstrip('/')}{suffix}"


def backup_dotfiles(
    backup_dir: Path,
    *,
    home: Path,
    runner: ToolRunner,
    console: Console,
    entries: typ.Mapping[str, str] = DEFAULT_DOTFILES,
) -> list[str]:
    """Mirror each existing entry of ``entries`` from ``home`` to ``backup_dir``.

    Missing sources are reported and skipped.

    Returns
    -------
    list[str]
        Source entries that were copied, in mapping order.

    Raises
    ------
    ExternalToolError
        If ``rsync`` exits non-zero.
    FilesystemError
        If a destination directory cannot be created.
    """
    console.line(f"Backing up dotfiles to {backup_dir}")
    copied: list[str] = []
    for source, destination in entries.items():
        source_path = home / source
        if not source_path.exists():
            console.line(f"Skipping {source_path} (not found)")
            continue

        dest_path = backup_dir / destination
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            message = f"Cannot create backup directory {dest_path.parent}: {exc}"
            raise FilesystemError(message) from exc
        argv = ["rsync", "-a", "--delete", _join(home, source), _join(backup_dir, destination)]
        console.line(f"→ Copying {source_path} → {dest_path}")
        console.command(format_command(argv))
        result = runner(argv)
        if not result.ok:
            raise ExternalToolError(argv, result.returncode, stderr=result.stderr)
        copied.append(source)

    console.line("Backup complete!")
    return copied


@app.default
def cli(backup_dir: Path = Path("osx")) -> int:
    """Copy dotfiles from the home directory into BACKUP_DIR.

    Parameters
    ----------
    backup_dir : Path
        Destination directory for the copies.
    """
    console = Console()
    try:
        backup_dotfiles(
            backup_dir.resolve(),
            home=Path.home(),
            runner=PlumbumRunner(),
            console=console,
        )
    except BuildError as exc:
        print(f"error: {exc}", file=console.err)
        return 1
    return 0


def run() -> int:
    """Console-script entry point."""
    result = app(sys.argv[1:])
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    raise SystemExit(run())
