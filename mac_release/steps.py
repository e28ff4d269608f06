"""Step registry mapping configured step names to pipeline actions."""

from __future__ import annotations

import enum
import typing as typ

from .errors import UnknownStepError

__all__ = ["ALIASES", "Action", "resolve_step", "validate_steps"]


class Action(enum.Enum):
    """Closed set of build actions a step can run."""

    CLEANUP = "cleanup"
    PACKAGE = "package"
    NOTARIZE = "notarize"
    STAPLE = "staple"
    APPCAST = "appcast"


ALIASES: dict[str, Action] = {
    "Cleanup updates directory": Action.CLEANUP,
    "cleanup": Action.CLEANUP,
    "Build DMG": Action.PACKAGE,
    "build_dmg": Action.PACKAGE,
    "dmg": Action.PACKAGE,
    "Notarize DMG": Action.NOTARIZE,
    "notarize": Action.NOTARIZE,
    "notarize_dmg": Action.NOTARIZE,
    "Staple & Validate DMG": Action.STAPLE,
    "staple": Action.STAPLE,
    "validate": Action.STAPLE,
    "staple_validate": Action.STAPLE,
    "Generate Sparkle Appcast": Action.APPCAST,
    "appcast": Action.APPCAST,
    "sparkle": Action.APPCAST,
}


def resolve_step(step_name: str) -> Action:
    """Return the :class:`Action` registered for ``step_name``.

    Matching is exact and case-sensitive.

    Raises
    ------
    UnknownStepError
        If ``step_name`` is not a registered alias.

    Examples
    --------
    >>> resolve_step("dmg")
    <Action.PACKAGE: 'package'>
    """
    try:
        return ALIASES[step_name]
    except KeyError as exc:
        raise UnknownStepError(step_name) from exc


def validate_steps(steps: typ.Iterable[str]) -> list[Action]:
    """Resolve every entry of ``steps`` before anything runs."""
    return [resolve_step(step) for step in steps]
