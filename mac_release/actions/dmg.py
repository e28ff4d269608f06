"""Build the distributable disk image with ``create-dmg``."""

from __future__ import annotations

import typing as typ

from ..errors import FilesystemError

if typ.TYPE_CHECKING:
    from ..config import BuildConfig
    from ..context import BuildContext

__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "SOURCE_DIR",
    "build_dmg",
    "create_dmg_command",
    "parse_window_size",
]

DEFAULT_WINDOW_SIZE = (600, 400)
WINDOW_POSITION = ("200", "120")
APP_ICON_POSITION = ("100", "100")
APP_DROP_LINK_POSITION = ("380", "100")
SOURCE_DIR = "dmg_src/"


def _dimension(parts: list[str], index: int, default: int) -> int:
    try:
        value = int(parts[index].strip())
    except (IndexError, ValueError):
        return default
    return value if value > 0 else default


def parse_window_size(value: str) -> tuple[int, int]:
    """Return ``(width, height)`` parsed from a ``"width,height"`` string.

    Each component falls back to its default on its own when it is missing
    or not a positive integer.

    Examples
    --------
    >>> parse_window_size("800,500")
    (800, 500)
    >>> parse_window_size("800")
    (800, 400)
    >>> parse_window_size("")
    (600, 400)
    """
    parts = value.split(",")
    default_width, default_height = DEFAULT_WINDOW_SIZE
    return _dimension(parts, 0, default_width), _dimension(parts, 1, default_height)


def create_dmg_command(config: BuildConfig) -> list[str]:
    """Assemble the ``create-dmg`` argument vector for ``config``."""
    width, height = parse_window_size(config.dmg_window_size)
    bundle = config.app_bundle_name
    argv = [
        "create-dmg",
        "--volname",
        config.project_name,
        "--window-pos",
        *WINDOW_POSITION,
        "--window-size",
        str(width),
        str(height),
        "--text-size",
        str(config.dmg_text_size),
        "--icon-size",
        str(config.dmg_icon_size),
        "--icon",
        bundle,
        *APP_ICON_POSITION,
        "--hide-extension",
        bundle,
        "--app-drop-link",
        *APP_DROP_LINK_POSITION,
    ]
    if (background := config.background_image) is not None and background.is_file():
        argv.extend(["--background", str(background)])
    argv.extend([config.image_name, SOURCE_DIR])
    return argv


def build_dmg(context: BuildContext) -> None:
    """Create the disk image inside the output directory.

    Raises
    ------
    ExternalToolError
        If ``create-dmg`` exits non-zero.
    FilesystemError
        If the output directory cannot be created or the previous image
        cannot be removed.
    """
    config = context.config
    context.console.info("Building DMG package...")

    image = config.image_path
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
        if image.is_file():
            image.unlink()
    except OSError as exc:
        message = f"Cannot prepare {image} in the output directory: {exc}"
        raise FilesystemError(message) from exc

    context.run_tool(create_dmg_command(config), cwd=config.output_dir)
    context.console.success("DMG created successfully.")
