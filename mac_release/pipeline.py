"""Sequential execution of the configured build steps."""

from __future__ import annotations

import typing as typ

from .actions import HANDLERS
from .errors import BuildError, ConfigInvalidError
from .steps import resolve_step, validate_steps

if typ.TYPE_CHECKING:
    from .context import BuildContext

__all__ = ["run_pipeline"]


def _check_project_dir(context: BuildContext) -> None:
    project_dir = context.config.project_dir
    if not project_dir.is_dir():
        message = f"Project directory not found: {project_dir}"
        raise ConfigInvalidError(message)


def run_pipeline(context: BuildContext, *, validate_first: bool = False) -> None:
    """Run every configured step in order, stopping at the first failure.

    Step names are resolved as each step is reached, so an unknown name
    only fails once the steps before it have run. ``validate_first`` resolves
    the whole list before starting instead.

    Parameters
    ----------
    context : BuildContext
        Configuration and collaborators for this run.
    validate_first : bool, default=False
        Reject unknown step names before any step executes.

    Raises
    ------
    BuildError
        The first failure raised by a step, pre-flight check, or step lookup.
        Completed steps are not rolled back.
    """
    config = context.config
    console = context.console
    state = context.state
    state.steps = config.steps

    console.header(config)
    _check_project_dir(context)
    if validate_first:
        validate_steps(config.steps)

    for number, step_name in enumerate(config.steps, start=1):
        state.index = number
        console.progress(config.project_name, config.steps, number)
        console.info(f"Executing step {number}: {step_name}")
        try:
            HANDLERS[resolve_step(step_name)](context)
        except BuildError as exc:
            console.error(f"Step {number} ({step_name}) failed: {exc}")
            raise
        console.success(f"Step {number} completed successfully!")

    state.index = state.total + 1
    console.progress(config.project_name, config.steps, state.index)
    console.celebrate("All steps completed successfully!")
    console.line()
    console.info(f"Build artifacts are available in: {config.output_dir}")
