"""Load and validate the keymap configuration YAML.

This subpackage parses ``config/keymap.yaml``, fills missing keys with
defaults, and produces a :class:`KeymapSettings` dataclass that names the
generated include files and identifiers and locates the Oryx download and the
QMK keymap folder.

Examples
--------
>>> from pathlib import Path
>>> from oryx_keymap.config import load_settings
>>> settings = load_settings(Path("config/keymap.yaml"))  # doctest: +SKIP
>>> settings.process_record_hook  # doctest: +SKIP
'process_record_petkau'
"""

from .loader import build_settings, load_settings
from .models import DEFAULT_PREFIX, CommandsConfig, KeymapSettings, SettingsError

__all__ = [
    "DEFAULT_PREFIX",
    "CommandsConfig",
    "KeymapSettings",
    "SettingsError",
    "build_settings",
    "load_settings",
]
