"""Typed dataclasses describing oryx-keymap configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_PREFIX = "custom"


class SettingsError(ValueError):
    """Raised when the keymap configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class CommandsConfig:
    """External commands run after the keymap files are exported.

    An empty argument list skips the step.
    """

    compile: list[str] = dc.field(default_factory=list)
    flash: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class KeymapSettings:
    """Names and paths shared by the transform, catalog, and sync steps.

    Attributes
    ----------
    prefix : str
        Lowercase C identifier fragment naming the generated include files
        (``<prefix>_macros.inl``) and identifiers (``<PREFIX>_MACRO_Void``).
    strict_matching : bool
        Fail when a macro matches no catalog entry instead of keeping it.
    import_dir : Path
        Folder scanned for the newest Oryx download.
    download_prefix : str
        File name prefix of the Oryx ``.zip`` download.
    source_member_prefix : str
        Archive path prefix of the firmware sources inside the download.
    export_dir : Path
        QMK keymap folder receiving the generated files.
    commit_message : str
        Message used when committing the exported files.
    commands : CommandsConfig
        Optional compile and flash commands.
    """

    prefix: str = DEFAULT_PREFIX
    strict_matching: bool = False
    import_dir: Path = dc.field(default_factory=lambda: Path.home() / "Downloads")
    download_prefix: str = "moonlander_"
    source_member_prefix: str = "moonlander_"
    export_dir: Path = dc.field(default_factory=lambda: Path("keymap"))
    commit_message: str = "Import Oryx layout."
    commands: CommandsConfig = dc.field(default_factory=CommandsConfig)

    @property
    def macros_include(self) -> str:
        return f"{self.prefix}_macros.inl"

    @property
    def tap_dance_include(self) -> str:
        return f"{self.prefix}_tap_dance.inl"

    @property
    def tapping_term_include(self) -> str:
        return f"{self.prefix}_tapping_term.inl"

    @property
    def config_include(self) -> str:
        return f"{self.prefix}_config.inl"

    @property
    def process_record_hook(self) -> str:
        return f"process_record_{self.prefix}"

    @property
    def process_record_include(self) -> str:
        return f"{self.process_record_hook}.inl"

    @property
    def delay_macro(self) -> str:
        return f"{self.prefix.upper()}_DELAY"


__all__ = ["DEFAULT_PREFIX", "CommandsConfig", "KeymapSettings", "SettingsError"]
