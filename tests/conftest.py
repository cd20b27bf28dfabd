"""Shared fixtures for the oryx-keymap test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from oryx_keymap.config import KeymapSettings

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def keymap_text() -> str:
    """Return a Moonlander export with four macros and one tap dance."""
    return (FIXTURES_DIR / "keymap.c").read_text(encoding="utf-8")


@pytest.fixture
def settings(tmp_path: Path) -> KeymapSettings:
    """Settings using the ``petkau`` prefix and a temporary export folder."""
    return KeymapSettings(prefix="petkau", export_dir=tmp_path / "export")
