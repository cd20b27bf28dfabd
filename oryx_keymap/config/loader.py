"""Load keymap configuration YAML into typed dataclasses."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import CommandsConfig, KeymapSettings, SettingsError

PREFIX_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


def load_settings(path: Path | None = None) -> KeymapSettings:
    """Load the YAML configuration describing names, folders, and commands.

    Parameters
    ----------
    path : Path or None, optional
        Filesystem path to the YAML file (for example ``config/keymap.yaml``).
        When ``None`` the built-in defaults are returned.

    Returns
    -------
    KeymapSettings
        Settings with every missing key filled from the defaults.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    SettingsError
        If the document is not a mapping or holds invalid values.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from oryx_keymap.config import load_settings
    >>> settings = load_settings(Path("config/keymap.yaml"))  # doctest: +SKIP
    >>> settings.macros_include  # doctest: +SKIP
    'petkau_macros.inl'
    """
    if path is None:
        return KeymapSettings()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SettingsError(msg)
    return build_settings(loaded)


def build_settings(raw: typ.Mapping[str, typ.Any]) -> KeymapSettings:
    """Build :class:`KeymapSettings` from a parsed mapping."""
    defaults = KeymapSettings()

    prefix = str(raw.get("prefix", defaults.prefix)).strip()
    if not PREFIX_PATTERN.match(prefix):
        msg = f"Prefix {prefix!r} must be a lowercase C identifier."
        raise SettingsError(msg)

    return KeymapSettings(
        prefix=prefix,
        strict_matching=_flag(raw, "strict_matching", default=defaults.strict_matching),
        import_dir=_expand(raw.get("import_dir"), defaults.import_dir),
        download_prefix=str(raw.get("download_prefix", defaults.download_prefix)),
        source_member_prefix=str(
            raw.get("source_member_prefix", defaults.source_member_prefix)
        ),
        export_dir=_expand(raw.get("export_dir"), defaults.export_dir),
        commit_message=str(raw.get("commit_message", defaults.commit_message)),
        commands=_build_commands(raw.get("commands") or {}),
    )


def _flag(raw: typ.Mapping[str, typ.Any], key: str, *, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise SettingsError(msg)
    return value


def _expand(value: object, fallback: Path) -> Path:
    if value is None:
        return fallback
    return Path(str(value)).expanduser()


def _build_commands(payload: object) -> CommandsConfig:
    if not isinstance(payload, dict):
        msg = "'commands' must be a mapping of step name to argument list."
        raise SettingsError(msg)
    commands = CommandsConfig()
    for key in ("compile", "flash"):
        match payload.get(key):
            case None:
                continue
            case list() as args:
                setattr(commands, key, [str(arg) for arg in args])
            case str() as single:
                setattr(commands, key, single.split())
            case other:
                msg = f"Command '{key}' must be a list of arguments, got {other!r}."
                raise SettingsError(msg)
    return commands


__all__ = ["build_settings", "load_settings"]
