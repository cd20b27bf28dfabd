"""Cyclopts CLI entrypoint for turning Oryx exports into QMK keymap files.

The ``keymap`` console script defined here can rewrite a single ``keymap.c``,
regenerate the snippet catalog include, or run the whole import: find the
newest Oryx download, extract it, export every keymap file, then compile,
commit, and flash. Options fall back to ``KEYMAP_*`` environment variables.

Examples
--------
Rewrite an extracted ``keymap.c`` into the QMK keymap folder:

>>> from oryx_keymap.cli import app
>>> app(["transform", "--input", "temp/keymap.c", "--output-dir", "out"])  # doctest: +SKIP

Import the latest download without flashing:

>>> app(["sync", "--no-flash"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_settings
from .emitter import CatalogEmitter
from .keymap import KeymapTransformer
from .sync import sync_keymap

if typ.TYPE_CHECKING:
    from .config import KeymapSettings

DEFAULT_CONFIG = Path("config/keymap.yaml")

app = App(name="keymap", config=cyclopts.config.Env("KEYMAP_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load(config: Path | None) -> KeymapSettings:
    """Load settings, treating a missing default config as "use defaults"."""
    if config is None or (config == DEFAULT_CONFIG and not config.exists()):
        return load_settings(None)
    return load_settings(config)


@app.command(help="Rewrite an Oryx keymap.c to use the snippet catalog.")
def transform(
    *,
    input: typ.Annotated[  # noqa: A002
        Path, Parameter(help="Vendor keymap.c to rewrite", env_var="KEYMAP_INPUT")
    ],
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Folder for keymap.c and the tap-dance include"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to keymap config", env_var="KEYMAP_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Rewrite a vendor ``keymap.c`` and write the tap-dance side file.

    Parameters
    ----------
    input : Path
        The ``keymap.c`` extracted from an Oryx download.
    output_dir : Path or None, optional
        Destination folder; defaults to ``export_dir`` from the config.
    config : Path, optional
        Path to the ``keymap.yaml`` configuration (``KEYMAP_CONFIG``).

    Returns
    -------
    None
        Writes the artifacts and prints their paths.

    Raises
    ------
    KeymapError
        If the export cannot be split, decoded, or classified; no file is
        written in that case.
    """
    settings = _load(config)
    transformer = KeymapTransformer(settings)
    for path in transformer.run(input, output_dir or settings.export_dir):
        print(f"wrote {_format_path(path)}")


@app.command(help="Generate the snippet catalog include file.")
def catalog(
    *,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Folder for the catalog include")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to keymap config", env_var="KEYMAP_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Write ``<prefix>_macros.inl`` from the fixed snippet catalog."""
    settings = _load(config)
    path = CatalogEmitter(settings).run(output_dir or settings.export_dir)
    print(f"wrote {_format_path(path)}")


@app.command(help="Import the newest Oryx download into the QMK keymap folder.")
def sync(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to keymap config", env_var="KEYMAP_CONFIG")
    ] = DEFAULT_CONFIG,
    compile: typ.Annotated[  # noqa: A002
        bool, Parameter(help="Run the configured compile command")
    ] = True,
    commit: typ.Annotated[bool, Parameter(help="Commit the export folder")] = True,
    flash: typ.Annotated[
        bool, Parameter(help="Run the configured flash command")
    ] = True,
) -> None:
    """Run the full import workflow described by the configuration."""
    settings = _load(config)
    report = sync_keymap(
        settings, compile_firmware=compile, commit=commit, flash=flash
    )
    print(f"imported {_format_path(report.download)}")
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    if report.compiled:
        print("compiled firmware")
    if report.committed:
        print("committed changes")
    if report.flashed:
        print("flashed firmware")


def main() -> None:
    """Configure logging and invoke the Cyclopts application.

    ``KEYMAP_LOG_LEVEL`` selects the log level (default ``INFO``).

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    logging.basicConfig(
        level=os.getenv("KEYMAP_LOG_LEVEL", "INFO").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
