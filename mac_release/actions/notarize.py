"""Sign the disk image and submit it to Apple's notary service."""

from __future__ import annotations

import re
import typing as typ

from ..errors import ConfigInvalidError, CredentialMissingError, ExternalToolError

if typ.TYPE_CHECKING:
    from ..context import BuildContext

__all__ = ["notarization_status", "notarize_dmg"]

_STATUS_LINE = re.compile(r"^\s*status:\s*(.+?)\s*$", re.MULTILINE)
ACCEPTED = "Accepted"


def notarization_status(output: str) -> str | None:
    """Return the last ``status:`` reported by ``notarytool``, if any.

    Examples
    --------
    >>> notarization_status("  status: In Progress\\n  status: Accepted\\n")
    'Accepted'
    """
    matches = _STATUS_LINE.findall(output)
    return matches[-1] if matches else None


def notarize_dmg(context: BuildContext) -> None:
    """Code-sign the image and wait for notarization to finish.

    Raises
    ------
    ConfigInvalidError
        If no signing identity is configured.
    CredentialMissingError
        If the Apple ID, app-specific password or team ID is unavailable.
    ExternalToolError
        If signing or submission fails, or the service rejects the image.
    """
    config = context.config
    console = context.console
    console.info("Notarizing DMG...")
    image = config.image_name

    if not config.developer_id:
        message = "developer_id not specified in configuration"
        raise ConfigInvalidError(message)
    context.run_tool(
        ["codesign", "--sign", config.developer_id, "--timestamp", image],
        cwd=config.output_dir,
    )

    apple_id = context.credentials.lookup(config.apple_id_keychain_service)
    app_password = context.credentials.lookup(config.app_password_keychain_service)
    if not (apple_id and app_password and config.team_id):
        message = (
            "Missing notarization credentials. "
            "Check keychain services and team_id in config."
        )
        raise CredentialMissingError(message)

    argv = [
        "xcrun",
        "notarytool",
        "submit",
        image,
        "--apple-id",
        apple_id,
        "--team-id",
        config.team_id,
        "--password",
        app_password,
        "--wait",
    ]
    result = context.run_tool(argv, cwd=config.output_dir, capture=True)
    if result.stdout:
        console.line(result.stdout.rstrip())

    status = notarization_status(result.stdout)
    if status is not None and status != ACCEPTED:
        raise ExternalToolError(argv, result.returncode, f"notarization status {status}")

    console.success("DMG notarized successfully.")
