"""Tests for Sparkle discovery and appcast generation."""

from __future__ import annotations

from pathlib import Path

import pytest
from build_test_helpers import FakeRunner

from mac_release.actions import appcast
from mac_release.actions.appcast import generate_appcast, locate_sparkle
from mac_release.errors import ExternalToolError, ToolMissingError

DERIVED = "Library/Developer/Xcode/DerivedData"
ARTIFACT = "SourcePackages/artifacts/sparkle/Sparkle"


@pytest.fixture
def no_system_locations(monkeypatch: pytest.MonkeyPatch) -> None:
    """Restrict discovery to the home directory search."""
    monkeypatch.setattr(
        appcast, "SPARKLE_SEARCH_PATTERNS", appcast.SPARKLE_SEARCH_PATTERNS[:1]
    )


def test_locate_sparkle_prefers_configured_directory(tmp_path: Path) -> None:
    configured = tmp_path / "Sparkle"
    configured.mkdir()
    assert locate_sparkle(configured, home=tmp_path / "home") == configured


def test_locate_sparkle_configured_but_missing(tmp_path: Path) -> None:
    """A configured directory that does not exist is not replaced by a search."""
    home = tmp_path / "home"
    (home / DERIVED / "App-abc" / ARTIFACT).mkdir(parents=True)
    assert locate_sparkle(tmp_path / "absent", home=home) is None


@pytest.mark.usefixtures("no_system_locations")
def test_locate_sparkle_searches_derived_data(tmp_path: Path) -> None:
    home = tmp_path / "home"
    first = home / DERIVED / "App-aaa" / ARTIFACT
    second = home / DERIVED / "App-bbb" / ARTIFACT
    second.mkdir(parents=True)
    first.mkdir(parents=True)

    assert locate_sparkle(None, home=home) == first


@pytest.mark.usefixtures("no_system_locations")
def test_locate_sparkle_nothing_found(tmp_path: Path) -> None:
    assert locate_sparkle(None, home=tmp_path / "empty-home") is None


def test_generate_appcast_runs_generator(
    make_context, runner: FakeRunner, tmp_path: Path, build_config
) -> None:
    sparkle = tmp_path / "Sparkle"
    (sparkle / "bin").mkdir(parents=True)

    generate_appcast(make_context(sparkle_dir=sparkle))

    assert len(runner.calls) == 1
    call = runner.calls[0]
    assert call.argv == (
        str(sparkle / "bin" / "generate_appcast"),
        str(build_config.output_dir),
    )
    assert call.cwd == sparkle


def test_generate_appcast_missing_installation(
    make_context, runner: FakeRunner, tmp_path: Path
) -> None:
    with pytest.raises(ToolMissingError, match="Sparkle directory not found"):
        generate_appcast(make_context(sparkle_dir=tmp_path / "absent"))
    assert runner.calls == []


def test_generate_appcast_failure_is_fatal(
    make_context, runner: FakeRunner, tmp_path: Path
) -> None:
    sparkle = tmp_path / "Sparkle"
    sparkle.mkdir()
    runner.returncodes["generate_appcast"] = 1

    with pytest.raises(ExternalToolError):
        generate_appcast(make_context(sparkle_dir=sparkle))
