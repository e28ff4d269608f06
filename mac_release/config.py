"""Configuration model and loader for the release pipeline.

The configuration file is a flat list of ``key = value`` lines. Comments and
anything else that does not look like an assignment are ignored, and the
first assignment of a key wins.

Usage
-----
Load a configuration and inspect the configured steps::

    from pathlib import Path
    from mac_release.config import load_config

    config = load_config(Path("template.build.config"))
    print(config.steps)
"""

from __future__ import annotations

import dataclasses
import re
import typing as typ
from pathlib import Path

from .errors import ConfigInvalidError, ConfigMissingError

__all__ = [
    "DEFAULTS",
    "REQUIRED_KEYS",
    "BuildConfig",
    "load_config",
    "parse_config_text",
    "parse_steps",
]

REQUIRED_KEYS: tuple[str, ...] = ("project_name", "project_dir", "output_dir", "steps")

DEFAULTS: dict[str, str] = {
    "skip_confirmation": "false",
    "dmg_name": "",
    "background_image": "",
    "developer_id": "",
    "team_id": "",
    "apple_id_keychain_service": "",
    "app_password_keychain_service": "",
    "sparkle_dir": "",
    "dmg_window_size": "600,400",
    "dmg_icon_size": "128",
    "dmg_text_size": "16",
}

_ASSIGNMENT = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$")
_TRUTHY = {"true", "yes", "1", "on"}


@dataclasses.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable configuration shared by every pipeline step.

    Parameters
    ----------
    project_name : str
        Application name; ``<project_name>.app`` is the bundle being shipped.
    project_dir : Path
        Source checkout of the project. Must exist before steps run.
    output_dir : Path
        Directory receiving the disk image and update feed.
    steps : tuple[str, ...]
        Step names in execution order, exactly as configured.
    source : Path | None
        Configuration file the values were read from.
    """

    project_name: str
    project_dir: Path
    output_dir: Path
    steps: tuple[str, ...]
    source: Path | None = None
    skip_confirmation: bool = False
    dmg_name: str = ""
    background_image: Path | None = None
    developer_id: str = ""
    team_id: str = ""
    apple_id_keychain_service: str = ""
    app_password_keychain_service: str = ""
    sparkle_dir: Path | None = None
    dmg_window_size: str = DEFAULTS["dmg_window_size"]
    dmg_icon_size: int = 128
    dmg_text_size: int = 16

    @property
    def image_name(self) -> str:
        """Return the disk image filename, derived from the project if unset."""
        return self.dmg_name or f"{self.project_name}.dmg"

    @property
    def image_path(self) -> Path:
        """Return the absolute location of the disk image."""
        return self.output_dir / self.image_name

    @property
    def app_bundle_name(self) -> str:
        return f"{self.project_name}.app"


def parse_steps(value: str) -> tuple[str, ...]:
    """Split a comma separated step list, trimming each entry.

    Examples
    --------
    >>> parse_steps("cleanup, dmg , notarize")
    ('cleanup', 'dmg', 'notarize')
    """
    return tuple(token.strip() for token in value.split(","))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def parse_config_text(text: str) -> dict[str, str]:
    """Return the ``key = value`` pairs found in ``text``.

    Whitespace around keys and values is discarded and matching surrounding
    quotes are removed from values. Later assignments of an existing key are
    ignored.

    Examples
    --------
    >>> parse_config_text("name = 'demo'\\nname = other\\n# note = x")
    {'name': 'demo'}
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        match = _ASSIGNMENT.match(line)
        if match is None:
            continue
        key = match.group(1)
        if key in values:
            continue
        values[key] = _unquote(match.group(2).strip())
    return values


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        message = f"Configuration file '{path}' not found."
        raise ConfigMissingError(message) from exc
    except (IsADirectoryError, PermissionError, UnicodeDecodeError) as exc:
        message = f"Configuration file '{path}' could not be read: {exc}"
        raise ConfigMissingError(message) from exc


def _require_keys(values: typ.Mapping[str, str], config_path: Path) -> None:
    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if missing:
        lines = [
            f"Required configuration '{key}' is missing from {config_path}"
            for key in missing
        ]
        raise ConfigInvalidError("\n".join(lines), missing)


def _resolve_path(value: str, base: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def _optional_path(value: str, base: Path) -> Path | None:
    return _resolve_path(value, base) if value else None


def _parse_int(values: typ.Mapping[str, str], key: str, config_path: Path) -> int:
    raw = values[key]
    try:
        return int(raw)
    except ValueError as exc:
        message = f"Configuration '{key}' must be an integer in {config_path}, got {raw!r}"
        raise ConfigInvalidError(message) from exc


def load_config(path: Path) -> BuildConfig:
    """Load and validate the configuration stored at ``path``.

    Parameters
    ----------
    path : Path
        Configuration file to read.

    Returns
    -------
    BuildConfig
        Configuration with defaults applied and relative paths resolved
        against the configuration file's directory.

    Raises
    ------
    ConfigMissingError
        If ``path`` does not exist or cannot be read.
    ConfigInvalidError
        If a required key is missing or empty, or a numeric value is not an
        integer.
    """
    raw = parse_config_text(_read_text(path))
    _require_keys(raw, path)

    # Empty optional values fall back to their defaults.
    values = {key: raw.get(key) or default for key, default in DEFAULTS.items()}
    values.update({key: raw[key] for key in REQUIRED_KEYS})
    base = path.parent.resolve()

    return BuildConfig(
        project_name=values["project_name"],
        project_dir=_resolve_path(values["project_dir"], base),
        output_dir=_resolve_path(values["output_dir"], base),
        steps=parse_steps(values["steps"]),
        source=path,
        skip_confirmation=values["skip_confirmation"].strip().lower() in _TRUTHY,
        dmg_name=values["dmg_name"],
        background_image=_optional_path(values["background_image"], base),
        developer_id=values["developer_id"],
        team_id=values["team_id"],
        apple_id_keychain_service=values["apple_id_keychain_service"],
        app_password_keychain_service=values["app_password_keychain_service"],
        sparkle_dir=_optional_path(values["sparkle_dir"], base),
        dmg_window_size=values["dmg_window_size"],
        dmg_icon_size=_parse_int(values, "dmg_icon_size", path),
        dmg_text_size=_parse_int(values, "dmg_text_size", path),
    )
