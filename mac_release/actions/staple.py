"""Staple the notarization ticket and validate the result."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from ..context import BuildContext

__all__ = ["staple_and_validate"]


def staple_and_validate(context: BuildContext) -> None:
    """Attach the notarization ticket to the image, then check it.

    Validation only runs once stapling has succeeded.

    Raises
    ------
    ExternalToolError
        If ``xcrun stapler staple`` or ``xcrun stapler validate`` exits
        non-zero.
    """
    config = context.config
    context.console.info("Stapling and validating DMG...")
    for operation in ("staple", "validate"):
        context.run_tool(
            ["xcrun", "stapler", operation, config.image_name], cwd=config.output_dir
        )
    context.console.success("DMG stapled and validated successfully.")
