"""Pipeline actions, one per :class:`~mac_release.steps.Action` member."""

from __future__ import annotations

import typing as typ

from ..steps import Action
from .appcast import generate_appcast, locate_sparkle
from .cleanup import cleanup_output_dir
from .dmg import build_dmg, create_dmg_command, parse_window_size
from .notarize import notarize_dmg
from .staple import staple_and_validate

if typ.TYPE_CHECKING:
    from ..context import BuildContext

__all__ = [
    "HANDLERS",
    "build_dmg",
    "cleanup_output_dir",
    "create_dmg_command",
    "generate_appcast",
    "locate_sparkle",
    "notarize_dmg",
    "parse_window_size",
    "staple_and_validate",
]

HANDLERS: dict[Action, typ.Callable[["BuildContext"], None]] = {
    Action.CLEANUP: cleanup_output_dir,
    Action.PACKAGE: build_dmg,
    Action.NOTARIZE: notarize_dmg,
    Action.STAPLE: staple_and_validate,
    Action.APPCAST: generate_appcast,
}
