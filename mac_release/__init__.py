"""Public interface for the macOS release pipeline."""

from .config import BuildConfig, load_config, parse_config_text, parse_steps
from .console import Console
from .context import BuildContext, RunState
from .credentials import KeychainCredentials
from .errors import (
    BuildError,
    ConfigError,
    ConfigInvalidError,
    ConfigMissingError,
    ConfirmationDeclinedError,
    CredentialMissingError,
    ExternalToolError,
    FilesystemError,
    ToolMissingError,
    UnknownStepError,
)
from .pipeline import run_pipeline
from .steps import Action, resolve_step, validate_steps
from .tools import PlumbumRunner, ToolResult

__all__ = [
    "Action",
    "BuildConfig",
    "BuildContext",
    "BuildError",
    "ConfigError",
    "ConfigInvalidError",
    "ConfigMissingError",
    "ConfirmationDeclinedError",
    "Console",
    "CredentialMissingError",
    "ExternalToolError",
    "FilesystemError",
    "KeychainCredentials",
    "load_config",
    "parse_config_text",
    "parse_steps",
    "PlumbumRunner",
    "resolve_step",
    "run_pipeline",
    "RunState",
    "ToolMissingError",
    "ToolResult",
    "UnknownStepError",
    "validate_steps",
]
