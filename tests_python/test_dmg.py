"""Tests for disk image packaging."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from build_test_helpers import FakeRunner

from mac_release.actions.dmg import (
    SOURCE_DIR,
    build_dmg,
    create_dmg_command,
    parse_window_size,
)
from mac_release.config import BuildConfig
from mac_release.errors import ExternalToolError, FilesystemError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("800,500", (800, 500)),
        (" 800 , 500 ", (800, 500)),
        ("800", (800, 400)),
        ("", (600, 400)),
        ("wide,tall", (600, 400)),
        ("wide,300", (600, 300)),
        (",300", (600, 300)),
        ("0,-5", (600, 400)),
        ("700,500,1", (700, 500)),
    ],
)
def test_parse_window_size_defaults_each_component(
    value: str, expected: tuple[int, int]
) -> None:
    assert parse_window_size(value) == expected


def test_create_dmg_command_layout(build_config: BuildConfig) -> None:
    """The argument vector follows the create-dmg contract."""
    argv = create_dmg_command(build_config)

    assert argv == [
        "create-dmg",
        "--volname",
        "MyApp",
        "--window-pos",
        "200",
        "120",
        "--window-size",
        "600",
        "400",
        "--text-size",
        "16",
        "--icon-size",
        "128",
        "--icon",
        "MyApp.app",
        "100",
        "100",
        "--hide-extension",
        "MyApp.app",
        "--app-drop-link",
        "380",
        "100",
        "MyApp.dmg",
        SOURCE_DIR,
    ]


def test_create_dmg_command_includes_existing_background(
    build_config: BuildConfig, tmp_path: Path
) -> None:
    background = tmp_path / "bg.png"
    background.write_bytes(b"png")
    config = dataclasses.replace(
        build_config, background_image=background, dmg_name="Release.dmg"
    )

    argv = create_dmg_command(config)

    index = argv.index("--background")
    assert argv[index + 1] == str(background)
    assert argv[-2:] == ["Release.dmg", SOURCE_DIR]


def test_create_dmg_command_skips_missing_background(
    build_config: BuildConfig, tmp_path: Path
) -> None:
    config = dataclasses.replace(build_config, background_image=tmp_path / "nope.png")
    assert "--background" not in create_dmg_command(config)


def test_build_dmg_replaces_previous_image(
    make_context, runner: FakeRunner, build_config: BuildConfig
) -> None:
    output_dir = build_config.output_dir
    output_dir.mkdir()
    stale = output_dir / "MyApp.dmg"
    stale.write_bytes(b"old image")

    build_dmg(make_context())

    assert not stale.exists()
    assert len(runner.calls) == 1
    call = runner.calls[0]
    assert call.argv[0] == "create-dmg"
    assert call.cwd == output_dir


def test_build_dmg_creates_missing_output_dir(
    make_context, build_config: BuildConfig
) -> None:
    build_dmg(make_context())
    assert build_config.output_dir.is_dir()


def test_build_dmg_failure_is_fatal(make_context, runner: FakeRunner) -> None:
    runner.returncodes["create-dmg"] = 2

    with pytest.raises(ExternalToolError) as exc:
        build_dmg(make_context())

    assert exc.value.returncode == 2


def test_build_dmg_uncreatable_output_dir(
    make_context, runner: FakeRunner, workspace: Path
) -> None:
    (workspace / "blocker").write_text("", encoding="utf-8")

    with pytest.raises(FilesystemError, match="Cannot prepare"):
        build_dmg(make_context(output_dir=workspace / "blocker" / "updates"))

    assert runner.calls == []
