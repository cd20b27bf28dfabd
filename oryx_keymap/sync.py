"""Import the newest Oryx download into a QMK keymap folder.

This module powers the ``keymap sync`` sub-command by:

* Locating the most recent Oryx ``.zip`` download in the import folder.
* Extracting the firmware sources into a temporary folder that is removed on
  every exit path.
* Updating ``config.h`` (vendor lines plus an include of the user's
  ``<prefix>_config.inl``) and overwriting ``rules.mk``.
* Rewriting ``keymap.c`` and regenerating the snippet catalog.
* Optionally compiling, committing the result with git, and flashing.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import subprocess
import tempfile
import typing as typ
import zipfile
from pathlib import Path, PurePosixPath

from .emitter import CatalogEmitter
from .fileio import write_all
from .keymap import KEYMAP_FILENAME, KeymapTransformer
from .keymap.sections import include_directive

if typ.TYPE_CHECKING:
    from .config import KeymapSettings

logger = logging.getLogger(__name__)

CONFIG_H = "config.h"
RULES_MK = "rules.mk"


class DownloadNotFoundError(FileNotFoundError):
    """Raised when no Oryx download matches the configured prefix."""


class CommandError(RuntimeError):
    """Raised when an external command exits unsuccessfully."""

    def __init__(self, title: str, args: list[str], output: str) -> None:
        self.title = title
        self.command = args
        self.output = output
        super().__init__(f"{title} failed: {' '.join(args)}\n{output}".rstrip())


@dc.dataclass(slots=True)
class SyncReport:
    """Summary of a ``sync`` run."""

    download: Path
    written: list[Path] = dc.field(default_factory=list)
    compiled: bool = False
    committed: bool = False
    flashed: bool = False


def find_latest_download(import_dir: Path, prefix: str) -> Path:
    """Return the most recently modified ``<prefix>*.zip`` in ``import_dir``.

    Raises
    ------
    DownloadNotFoundError
        If no regular file matches.
    """
    candidates = [
        entry
        for entry in import_dir.iterdir()
        if entry.is_file() and entry.name.startswith(prefix) and entry.name.endswith(".zip")
    ]
    if not candidates:
        msg = f"No '{prefix}*.zip' file found in {import_dir}."
        raise DownloadNotFoundError(msg)
    return max(candidates, key=lambda entry: entry.stat().st_mtime)


def extract_sources(archive: Path, destination: Path, member_prefix: str) -> list[Path]:
    """Extract files under ``member_prefix`` from ``archive`` into ``destination``.

    Directory structure is flattened: each file lands in ``destination``
    under its base name. Directory entries and members outside the prefix
    are skipped.
    """
    extracted: list[Path] = []
    with zipfile.ZipFile(archive) as bundle:
        for info in bundle.infolist():
            if info.is_dir() or not info.filename.startswith(member_prefix):
                continue
            name = PurePosixPath(info.filename).name
            if not name or name in (".", ".."):
                continue
            target = destination / name
            logger.info("Extracting %s (%d bytes)", target, info.file_size)
            target.write_bytes(bundle.read(info))
            extracted.append(target)
    return extracted


def render_config_h(vendor_text: str, include: str) -> str:
    """Return the vendor ``config.h`` followed by an include of ``include``."""
    lines = vendor_text.splitlines()
    lines.append(include_directive(include))
    return "\n".join(lines) + "\n"


def run_command(
    title: str, args: list[str], *, cwd: Path | None = None
) -> subprocess.CompletedProcess[str]:
    """Run ``args`` capturing output; raise :class:`CommandError` on failure."""
    logger.info("%s...", title)
    try:
        result = subprocess.run(  # noqa: S603
            args,
            cwd=cwd,
            check=True,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise CommandError(title, args, str(exc)) from exc
    except subprocess.CalledProcessError as exc:
        output = "\n".join(part for part in (exc.stdout, exc.stderr) if part)
        raise CommandError(title, args, output) from exc
    logger.info("%s done.", title)
    return result


def commit_changes(repo_dir: Path, message: str) -> None:
    """Stage every change in ``repo_dir`` and commit it with ``message``."""
    run_command("Staging changes", ["git", "add", "--all"], cwd=repo_dir)
    run_command("Committing changes", ["git", "commit", "-m", message], cwd=repo_dir)


def export_keymap(settings: KeymapSettings, source_dir: Path) -> list[Path]:
    """Write every generated keymap file from extracted sources.

    Every output is rendered before the first one is written, so a missing
    source file or a transform error leaves ``export_dir`` unchanged.
    ``rules.mk`` carries no customisations and is copied verbatim.
    """
    export_dir = settings.export_dir
    transformer = KeymapTransformer(settings)
    result = transformer.transform(
        (source_dir / KEYMAP_FILENAME).read_text(encoding="utf-8")
    )
    outputs = {
        export_dir / CONFIG_H: render_config_h(
            (source_dir / CONFIG_H).read_text(encoding="utf-8"),
            settings.config_include,
        ),
        export_dir / RULES_MK: (source_dir / RULES_MK).read_text(encoding="utf-8"),
    }
    outputs.update(transformer.outputs(result, export_dir))
    outputs[export_dir / settings.macros_include] = CatalogEmitter(settings).render()
    return write_all(outputs)


def sync_keymap(
    settings: KeymapSettings,
    *,
    compile_firmware: bool = True,
    commit: bool = True,
    flash: bool = True,
) -> SyncReport:
    """Import the newest Oryx download and optionally build and commit it.

    Parameters
    ----------
    settings : KeymapSettings
        Folders, prefix, and external commands.
    compile_firmware : bool, optional
        Run ``settings.commands.compile`` when configured.
    commit : bool, optional
        Commit the export folder with ``settings.commit_message``.
    flash : bool, optional
        Run ``settings.commands.flash`` when configured.

    Returns
    -------
    SyncReport
        The download used and the steps performed.
    """
    download = find_latest_download(settings.import_dir, settings.download_prefix)
    logger.info("Using %s", download)
    report = SyncReport(download=download)

    with tempfile.TemporaryDirectory(prefix="oryx-keymap-") as temp_name:
        temp_dir = Path(temp_name)
        extract_sources(download, temp_dir, settings.source_member_prefix)
        report.written = export_keymap(settings, temp_dir)

    if compile_firmware and settings.commands.compile:
        run_command("Compiling firmware", settings.commands.compile)
        report.compiled = True
    if commit:
        commit_changes(settings.export_dir, settings.commit_message)
        report.committed = True
    if flash and settings.commands.flash:
        run_command("Flashing firmware", settings.commands.flash)
        report.flashed = True
    return report


__all__ = [
    "CONFIG_H",
    "RULES_MK",
    "CommandError",
    "DownloadNotFoundError",
    "SyncReport",
    "commit_changes",
    "export_keymap",
    "extract_sources",
    "find_latest_download",
    "render_config_h",
    "run_command",
    "sync_keymap",
]
