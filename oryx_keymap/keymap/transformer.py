"""High-level orchestration for rewriting an Oryx ``keymap.c``.

:class:`KeymapTransformer` runs the section splitter, decodes and classifies
the ``SEND_STRING`` macros, and renders the rewritten ``keymap.c`` plus the
tap-dance side file. Every artifact is rendered in memory before the first
file is written, so a malformed export never leaves half-written output.

Example
-------
>>> from pathlib import Path
>>> from oryx_keymap.config import KeymapSettings
>>> from oryx_keymap.keymap import KeymapTransformer
>>> transformer = KeymapTransformer(KeymapSettings(prefix="petkau"))
>>> transformer.run(Path("temp/keymap.c"), Path("export"))  # doctest: +SKIP
[PosixPath('export/keymap.c'), PosixPath('export/petkau_tap_dance.inl')]
"""

from __future__ import annotations

import logging
import typing as typ

from oryx_keymap.fileio import write_all

from .classifier import MacroClassifier
from .macros import extract_macros
from .models import TransformResult
from .rewriter import KeymapRewriter
from .sections import SectionSplitter

if typ.TYPE_CHECKING:
    from pathlib import Path

    from oryx_keymap.config import KeymapSettings

logger = logging.getLogger(__name__)

KEYMAP_FILENAME = "keymap.c"


class KeymapTransformer:
    """Turn a vendor ``keymap.c`` into the catalog-aware keymap files."""

    def __init__(
        self,
        settings: KeymapSettings,
        *,
        classifier: MacroClassifier | None = None,
    ) -> None:
        """Initialise the transformer.

        Parameters
        ----------
        settings : KeymapSettings
            Prefix and matching options shared with the catalog emitter.
        classifier : MacroClassifier, optional
            Override the classifier; defaults to one honouring
            ``settings.strict_matching``.
        """
        self.settings = settings
        self.splitter = SectionSplitter(macros_include=settings.macros_include)
        self.classifier = classifier or MacroClassifier(strict=settings.strict_matching)
        self.rewriter = KeymapRewriter(settings)

    def transform(self, text: str) -> TransformResult:
        """Rewrite the vendor file ``text`` without touching the filesystem.

        Raises
        ------
        KeymapError
            Any splitting, decoding, or classification failure.
        """
        split = self.splitter.split(text)
        macro_defs = "".join(f"{line}\n" for line in split.macro_defs)
        slots = extract_macros(macro_defs)
        logger.debug("Extracted %d macro slot(s).", len(slots))
        classification = self.classifier.classify(slots)
        keymap_c = self.rewriter.render(split, classification)
        tap_dance_inl = "".join(f"{line}\n" for line in split.side)
        return TransformResult(
            keymap_c=keymap_c,
            tap_dance_inl=tap_dance_inl,
            classification=classification,
        )

    def outputs(self, result: TransformResult, output_dir: Path) -> dict[Path, str]:
        """Map destination paths to the rendered artifacts of ``result``."""
        return {
            output_dir / KEYMAP_FILENAME: result.keymap_c,
            output_dir / self.settings.tap_dance_include: result.tap_dance_inl,
        }

    def run(self, input_path: Path, output_dir: Path) -> list[Path]:
        """Transform ``input_path`` and write the artifacts into ``output_dir``.

        Returns
        -------
        list[Path]
            Written paths: ``keymap.c`` then the tap-dance include.
        """
        logger.info("Updating %s...", KEYMAP_FILENAME)
        text = input_path.read_text(encoding="utf-8")
        result = self.transform(text)
        return write_all(self.outputs(result, output_dir))


__all__ = ["KEYMAP_FILENAME", "KeymapTransformer"]
