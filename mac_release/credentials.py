"""Secret lookup through the macOS keychain."""

from __future__ import annotations

import typing as typ

from .tools import ToolRunner

__all__ = ["CredentialStore", "KeychainCredentials"]


class CredentialStore(typ.Protocol):
    """Resolve a secret by keychain service name."""

    def lookup(self, service: str) -> str:
        """Return the secret for ``service`` or ``""`` when unavailable."""


class KeychainCredentials:
    """Read generic passwords with ``security find-generic-password``.

    A missing service name, an absent keychain item, or a missing ``security``
    binary all resolve to an empty string. Callers decide whether an empty
    secret is fatal.
    """

    def __init__(self, runner: ToolRunner) -> None:
        self._runner = runner

    def lookup(self, service: str) -> str:
        if not service:
            return ""
        result = self._runner(
            ["security", "find-generic-password", "-s", service, "-w"],
            capture=True,
        )
        if not result.ok:
            return ""
        return result.stdout.strip()
