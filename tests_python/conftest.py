"""Shared fixtures for the release pipeline test suite."""

from __future__ import annotations

import dataclasses
import io
import typing as typ
from pathlib import Path

import pytest
from build_test_helpers import FakeRunner, ScriptedConfirmer, StaticCredentials

from mac_release.config import BuildConfig
from mac_release.console import Console
from mac_release.context import BuildContext


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an isolated project checkout with an output directory path."""
    root = tmp_path / "workspace"
    (root / "MyApp").mkdir(parents=True)
    return root


@pytest.fixture
def build_config(workspace: Path) -> BuildConfig:
    """Return a configuration rooted in ``workspace``."""
    return BuildConfig(
        project_name="MyApp",
        project_dir=workspace / "MyApp",
        output_dir=workspace / "updates",
        steps=("cleanup", "dmg"),
        source=workspace / "app.build.config",
        developer_id="Developer ID Application: Example (TEAM123)",
        team_id="TEAM123",
        apple_id_keychain_service="apple-id",
        app_password_keychain_service="app-password",
    )


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def streams() -> tuple[io.StringIO, io.StringIO]:
    return io.StringIO(), io.StringIO()


@pytest.fixture
def console(streams: tuple[io.StringIO, io.StringIO]) -> Console:
    out, err = streams
    return Console(out, err, color=False)


@pytest.fixture
def make_context(
    build_config: BuildConfig, runner: FakeRunner, console: Console
) -> typ.Callable[..., BuildContext]:
    """Return a factory building contexts with fake collaborators.

    Keyword arguments matching :class:`BuildConfig` fields override the
    configuration; ``confirm``, ``credentials`` and ``assume_yes`` override
    the collaborators.
    """

    def factory(
        *,
        confirm: ScriptedConfirmer | None = None,
        credentials: StaticCredentials | None = None,
        assume_yes: bool = False,
        **overrides: typ.Any,
    ) -> BuildContext:
        config = dataclasses.replace(build_config, **overrides)
        return BuildContext(
            config=config,
            runner=runner,
            console=console,
            confirm=confirm or ScriptedConfirmer(),
            credentials=credentials
            or StaticCredentials({"apple-id": "dev@example.com", "app-password": "secret"}),
            assume_yes=assume_yes,
        )

    return factory
