"""Clear the output directory while keeping built application bundles."""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path

from ..errors import ConfirmationDeclinedError, FilesystemError

if typ.TYPE_CHECKING:
    from ..context import BuildContext

__all__ = ["APP_SUFFIX", "cleanup_candidates", "cleanup_output_dir"]

APP_SUFFIX = ".app"


def cleanup_candidates(output_dir: Path) -> list[Path]:
    """Return the immediate children of ``output_dir`` that are not bundles."""
    return sorted(
        entry for entry in output_dir.iterdir() if not entry.name.endswith(APP_SUFFIX)
    )


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        message = f"Cannot delete {path}: {exc}"
        raise FilesystemError(message) from exc


def cleanup_output_dir(context: BuildContext) -> None:
    """Delete everything in the output directory except ``*.app`` entries.

    A missing directory is created and nothing else happens. When there is
    something to delete the candidates are listed and, in interactive runs,
    the operator must agree before anything is removed.

    Raises
    ------
    ConfirmationDeclinedError
        If the operator declines the deletion.
    FilesystemError
        If the directory cannot be created or an entry cannot be deleted.
    """
    console = context.console
    output_dir = context.config.output_dir
    console.info(f"Cleaning up updates directory: {output_dir}")

    if not output_dir.is_dir():
        console.info("Output directory doesn't exist, creating it...")
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            message = f"Cannot create output directory {output_dir}: {exc}"
            raise FilesystemError(message) from exc
        return

    candidates = cleanup_candidates(output_dir)
    if not candidates:
        console.info("Nothing to delete.")
        return

    console.line("Files to be deleted:")
    for candidate in candidates:
        console.line(f"./{candidate.name}")
    console.line()

    if not context.confirm_action("Proceed with deletion of non-.app files?"):
        message = "Cleanup aborted."
        raise ConfirmationDeclinedError(message)

    for candidate in candidates:
        _remove(candidate)
    console.success("Cleanup complete.")
