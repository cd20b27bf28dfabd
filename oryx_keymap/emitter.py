"""Render the snippet catalog as a C include file for the firmware build.

The generated ``<prefix>_macros.inl`` declares one keycode per
:class:`~oryx_keymap.catalog.Snippet` and a ``process_record_macros``
dispatcher that types each snippet with ``SEND_STRING``. The output depends
only on the catalog and the configured prefix, never on an Oryx export.

Example
-------
>>> from oryx_keymap.config import KeymapSettings
>>> from oryx_keymap.emitter import CatalogEmitter
>>> text = CatalogEmitter(KeymapSettings(prefix="petkau")).render()
>>> text.splitlines()[0]
'enum petkau_keycodes'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from . import codemap
from .catalog import Snippet, snippet_identifier
from .fileio import write_atomic

if typ.TYPE_CHECKING:
    from .config import KeymapSettings

TEMPLATE_NAME = "macros.inl.jinja"


@dc.dataclass(frozen=True, slots=True)
class CatalogLine:
    """Template context for one snippet."""

    identifier: str
    send_string: str


def send_string(text: str, delay_macro: str) -> str:
    """Return a ``SEND_STRING`` call typing ``text`` with delays between taps.

    Raises
    ------
    UnencodableCharError
        If ``text`` holds a character without a QMK tap expression.
    """
    taps = f" {delay_macro} ".join(codemap.encode(char) for char in text)
    return f"SEND_STRING({taps});"


class CatalogEmitter:
    """Render and write ``<prefix>_macros.inl``."""

    def __init__(
        self, settings: KeymapSettings, *, templates_dir: Path | None = None
    ) -> None:
        self.settings = settings
        self.templates_dir = templates_dir or Path(__file__).resolve().parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(TEMPLATE_NAME)

    def entries(self) -> list[CatalogLine]:
        """Return the identifier and ``SEND_STRING`` call for every snippet."""
        prefix = self.settings.prefix
        delay = self.settings.delay_macro
        return [
            CatalogLine(
                identifier=snippet_identifier(prefix, snippet),
                send_string=send_string(snippet.text, delay),
            )
            for snippet in Snippet
        ]

    def render(self) -> str:
        """Return the full text of the catalog include file."""
        return self.template.render(
            prefix=self.settings.prefix,
            delay_macro=self.settings.delay_macro,
            entries=self.entries(),
        )

    def run(self, output_dir: Path) -> Path:
        """Write the catalog into ``output_dir`` and return its path."""
        output_path = output_dir / self.settings.macros_include
        write_atomic(output_path, self.render())
        return output_path


__all__ = ["CatalogEmitter", "CatalogLine", "send_string"]
