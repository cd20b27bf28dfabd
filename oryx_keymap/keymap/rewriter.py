r"""Apply a macro classification to the sections kept from the vendor file.

The rewritten ``keymap.c`` keeps the vendor's structure but hands matched
macros to the generated catalog:

* ``case ST_MACRO_<n>:`` blocks for matched slots are removed from
  ``process_record_user``;
* the trailing ``case RGB_SLD:`` block becomes a ``default:`` that forwards to
  ``process_record_<prefix>``;
* ``ST_MACRO_<n>`` keys in the layout are replaced by catalog identifiers,
  and the slots left literal are re-declared in ``enum custom_keycodes``.
"""

from __future__ import annotations

import re
import typing as typ

from oryx_keymap.errors import MissingSlotReferenceError

from .sections import include_directive

if typ.TYPE_CHECKING:
    from oryx_keymap.catalog import CatalogRef
    from oryx_keymap.config import KeymapSettings

    from .models import Classification, SplitKeymap

MACRO_CASE_PATTERN = re.compile(
    r"^[ \t]*case ST_MACRO_(\d+):\s+if \(record->event\.pressed\) \{\s+"
    r"SEND_STRING\(.+\);\s+\}\s+break;[ \t]*\n",
    re.MULTILINE,
)
RGB_SLD_CASE_PATTERN = re.compile(r"case RGB_SLD:.+return false;\n", re.DOTALL)
MACRO_REFERENCE_PATTERN = re.compile(r"ST_MACRO_(\d+)")


def _lookup(
    classification: Classification, ordinal: int, context: str
) -> CatalogRef | None:
    if ordinal not in classification:
        raise MissingSlotReferenceError(ordinal, context=context)
    return classification.get(ordinal)


class KeymapRewriter:
    """Render the final ``keymap.c`` from split sections and a classification."""

    def __init__(self, settings: KeymapSettings) -> None:
        self.settings = settings

    def strip_matched_cases(self, macro_defs: str, classification: Classification) -> str:
        """Drop the ``case`` blocks of slots that matched a catalog entry.

        Whole lines are removed so the remaining cases keep their indentation.
        """

        def _replace(match: re.Match[str]) -> str:
            ref = _lookup(classification, int(match.group(1)), "macro definitions")
            return match.group(0) if ref is None else ""

        return MACRO_CASE_PATTERN.sub(_replace, macro_defs)

    def forward_default_case(self, macro_defs: str) -> str:
        """Replace the ``RGB_SLD`` case with a forward to the user hook."""
        forward = f"default: return {self.settings.process_record_hook}(keycode, record);\n"
        return RGB_SLD_CASE_PATTERN.sub(lambda _match: forward, macro_defs, count=1)

    def substitute_references(self, keymap: str, classification: Classification) -> str:
        """Replace ``ST_MACRO_<n>`` keys with their catalog identifiers."""
        prefix = self.settings.prefix

        def _replace(match: re.Match[str]) -> str:
            ref = _lookup(classification, int(match.group(1)), "keymap")
            return match.group(0) if ref is None else ref.identifier(prefix)

        return MACRO_REFERENCE_PATTERN.sub(_replace, keymap)

    @staticmethod
    def custom_keycodes_enum(classification: Classification) -> list[str]:
        """Return the ``enum custom_keycodes`` lines for literal slots.

        The list is empty when every slot matched a catalog entry.
        """
        entries = [f"\tST_MACRO_{ordinal}" for ordinal in classification.unmatched()]
        if not entries:
            return []
        return ["", "enum custom_keycodes", "{", ",\n".join(entries), "};"]

    def render(self, split: SplitKeymap, classification: Classification) -> str:
        """Assemble the rewritten ``keymap.c``.

        Parameters
        ----------
        split : SplitKeymap
            Output of :class:`~oryx_keymap.keymap.sections.SectionSplitter`.
        classification : Classification
            Catalog match for every macro slot.

        Returns
        -------
        str
            Full file text ending with a newline.

        Raises
        ------
        MissingSlotReferenceError
            If the keymap or macro definitions reference an unknown slot.
        """
        settings = self.settings
        lines = list(split.retained)
        lines.extend(
            include_directive(name)
            for name in (
                settings.tapping_term_include,
                settings.tap_dance_include,
                settings.process_record_include,
            )
        )
        lines.extend(self.custom_keycodes_enum(classification))
        head = "\n".join(lines) + "\n"

        macro_defs = _join(split.macro_defs)
        macro_defs = self.strip_matched_cases(macro_defs, classification)
        macro_defs = self.forward_default_case(macro_defs)
        keymap = self.substitute_references(_join(split.keymap), classification)
        return f"{head}\n{macro_defs}{keymap}"


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


__all__ = [
    "MACRO_CASE_PATTERN",
    "MACRO_REFERENCE_PATTERN",
    "RGB_SLD_CASE_PATTERN",
    "KeymapRewriter",
]
