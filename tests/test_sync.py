"""Tests for importing an Oryx download into the keymap folder.

External commands are never executed: ``subprocess.run`` is replaced with a
recorder via ``pytest-mock``.
"""

from __future__ import annotations

import os
import subprocess
import zipfile
from pathlib import Path

import pytest

from oryx_keymap import sync
from oryx_keymap.config import CommandsConfig, KeymapSettings
from oryx_keymap.errors import MalformedSectionOrderError

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def _make_download(import_dir: Path, name: str, keymap_text: str) -> Path:
    import_dir.mkdir(parents=True, exist_ok=True)
    archive = import_dir / name
    with zipfile.ZipFile(archive, "w") as bundle:
        bundle.writestr("moonlander_layout_source/keymap.c", keymap_text)
        bundle.writestr("moonlander_layout_source/config.h", "#define ORYX_CONFIGURATOR\n")
        bundle.writestr("moonlander_layout_source/rules.mk", "ORYX_ENABLE = yes\n")
        bundle.writestr("moonlander_layout.bin", b"\x00\x01")
    return archive


@pytest.fixture
def sync_settings(tmp_path: Path) -> KeymapSettings:
    return KeymapSettings(
        prefix="petkau",
        import_dir=tmp_path / "downloads",
        export_dir=tmp_path / "export",
        commands=CommandsConfig(
            compile=["qmk", "compile", "-km", "petkau"],
            flash=["qmk", "flash", "-km", "petkau"],
        ),
    )


def test_find_latest_download_uses_mtime(tmp_path: Path) -> None:
    older = tmp_path / "moonlander_a.zip"
    newer = tmp_path / "moonlander_b.zip"
    other = tmp_path / "ergodox_c.zip"
    for index, path in enumerate((newer, older, other)):
        path.write_bytes(b"")
        os.utime(path, (1_000 + index, 1_000 + index))
    os.utime(newer, (5_000, 5_000))
    assert sync.find_latest_download(tmp_path, "moonlander_") == newer


def test_find_latest_download_requires_a_match(tmp_path: Path) -> None:
    (tmp_path / "moonlander_notes.txt").write_text("", encoding="utf-8")
    with pytest.raises(sync.DownloadNotFoundError):
        sync.find_latest_download(tmp_path, "moonlander_")


def test_extract_sources_flattens_prefixed_members(tmp_path: Path) -> None:
    archive = _make_download(tmp_path / "downloads", "moonlander_x.zip", "int x;\n")
    destination = tmp_path / "temp"
    destination.mkdir()
    extracted = sync.extract_sources(archive, destination, "moonlander_")
    assert sorted(path.name for path in extracted) == [
        "config.h",
        "keymap.c",
        "moonlander_layout.bin",
        "rules.mk",
    ]
    assert (destination / "keymap.c").read_text(encoding="utf-8") == "int x;\n"


def test_render_config_h_appends_include() -> None:
    assert sync.render_config_h("#define A 1\n", "petkau_config.inl") == (
        '#define A 1\n#include "petkau_config.inl"\n'
    )


def test_run_command_wraps_failures(mocker) -> None:
    mocker.patch(
        "oryx_keymap.sync.subprocess.run",
        side_effect=subprocess.CalledProcessError(2, ["qmk"], output="out", stderr="err"),
    )
    with pytest.raises(sync.CommandError) as excinfo:
        sync.run_command("Compiling firmware", ["qmk", "compile"])
    assert excinfo.value.output == "out\nerr"
    assert "Compiling firmware failed: qmk compile" in str(excinfo.value)


def test_run_command_reports_missing_program(mocker) -> None:
    mocker.patch("oryx_keymap.sync.subprocess.run", side_effect=FileNotFoundError("qmk"))
    with pytest.raises(sync.CommandError, match="Flashing"):
        sync.run_command("Flashing", ["qmk"])


def test_sync_keymap_runs_every_step(mocker, sync_settings: KeymapSettings) -> None:
    keymap_text = (FIXTURES_DIR / "keymap.c").read_text(encoding="utf-8")
    download = _make_download(sync_settings.import_dir, "moonlander_1.zip", keymap_text)
    run = mocker.patch("oryx_keymap.sync.subprocess.run")

    report = sync.sync_keymap(sync_settings)

    export_dir = sync_settings.export_dir
    assert report.download == download
    assert sorted(path.name for path in report.written) == [
        "config.h",
        "keymap.c",
        "petkau_macros.inl",
        "petkau_tap_dance.inl",
        "rules.mk",
    ]
    assert (export_dir / "config.h").read_text(encoding="utf-8").endswith(
        '#include "petkau_config.inl"\n'
    )
    assert (export_dir / "rules.mk").read_text(encoding="utf-8") == "ORYX_ENABLE = yes\n"
    assert report.compiled and report.committed and report.flashed
    commands = [call.args[0] for call in run.call_args_list]
    assert commands == [
        ["qmk", "compile", "-km", "petkau"],
        ["git", "add", "--all"],
        ["git", "commit", "-m", "Import Oryx layout."],
        ["qmk", "flash", "-km", "petkau"],
    ]
    assert run.call_args_list[1].kwargs["cwd"] == export_dir


def test_sync_keymap_skips_disabled_steps(mocker, sync_settings: KeymapSettings) -> None:
    keymap_text = (FIXTURES_DIR / "keymap.c").read_text(encoding="utf-8")
    _make_download(sync_settings.import_dir, "moonlander_1.zip", keymap_text)
    run = mocker.patch("oryx_keymap.sync.subprocess.run")

    report = sync.sync_keymap(
        sync_settings, compile_firmware=False, commit=False, flash=False
    )

    run.assert_not_called()
    assert not (report.compiled or report.committed or report.flashed)


def test_malformed_download_leaves_export_untouched(
    mocker, sync_settings: KeymapSettings
) -> None:
    _make_download(sync_settings.import_dir, "moonlander_1.zip", "#include QMK_KEYBOARD_H\n")
    run = mocker.patch("oryx_keymap.sync.subprocess.run")

    with pytest.raises(MalformedSectionOrderError):
        sync.sync_keymap(sync_settings)

    assert not sync_settings.export_dir.exists()
    run.assert_not_called()
