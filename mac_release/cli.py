"""Command-line entry point for the macOS release pipeline.

Examples
--------
Run the steps listed in ``release.build.config`` without prompting::

    mac-release release.build.config --yes

Reject misspelt step names before anything runs::

    mac-release release.build.config --strict-steps
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .config import load_config
from .console import Confirmer, Console, prompt_confirm
from .context import BuildContext
from .credentials import CredentialStore, KeychainCredentials
from .errors import BuildError
from .pipeline import run_pipeline
from .tools import PlumbumRunner, ToolRunner

__all__ = ["DEFAULT_CONFIG", "app", "cli", "main", "resolve_config_path", "run"]

DEFAULT_CONFIG = "template.build.config"
PACKAGE_DIR = Path(__file__).resolve().parent

app = App(
    name="mac-release",
    help="Package, notarize, and publish a macOS application.",
)


def resolve_config_path(config_file: Path | None) -> Path:
    """Return the configuration path, defaulting to the bundled template."""
    if config_file is None:
        return PACKAGE_DIR / DEFAULT_CONFIG
    return Path(config_file)


def main(
    config_file: Path | None = None,
    *,
    assume_yes: bool = False,
    strict_steps: bool = False,
    runner: ToolRunner | None = None,
    confirm: Confirmer | None = None,
    credentials: CredentialStore | None = None,
    console: Console | None = None,
) -> int:
    """Load the configuration and run the pipeline.

    Parameters
    ----------
    config_file : Path | None
        Configuration file. ``None`` selects the bundled template.
    assume_yes : bool
        Skip every confirmation prompt.
    strict_steps : bool
        Validate all step names before running the first step.
    runner, confirm, credentials, console : optional
        Collaborator overrides; production implementations are used when
        omitted.

    Returns
    -------
    int
        ``0`` when every step succeeds, ``1`` on any failure.
    """
    console = console or Console()
    runner = runner or PlumbumRunner()
    try:
        config = load_config(resolve_config_path(config_file))
        context = BuildContext(
            config=config,
            runner=runner,
            console=console,
            confirm=confirm or prompt_confirm,
            credentials=credentials or KeychainCredentials(runner),
            assume_yes=assume_yes,
        )
        run_pipeline(context, validate_first=strict_steps)
    except BuildError as exc:
        print(f"error: {exc}", file=console.err)
        return 1
    return 0


@app.default
def cli(
    config_file: Path | None = None,
    *,
    yes: typ.Annotated[
        bool,
        Parameter(name=["--yes", "-y"], negative="", help="Skip confirmation prompts."),
    ] = False,
    strict_steps: typ.Annotated[
        bool,
        Parameter(negative="", help="Reject unknown step names before running any step."),
    ] = False,
) -> int:
    """Run the build steps listed in CONFIG_FILE.

    Parameters
    ----------
    config_file : Path | None
        Path to the configuration file (default: the bundled
        ``template.build.config``).
    """
    return main(config_file, assume_yes=yes, strict_steps=strict_steps)


def run() -> int:
    """Console-script entry point."""
    result = app(sys.argv[1:])
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    raise SystemExit(run())
