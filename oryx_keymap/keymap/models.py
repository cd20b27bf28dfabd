"""Shared dataclasses used by the keymap transform pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from oryx_keymap.catalog import CatalogEntry, CatalogRef


class KeymapSection(enum.IntEnum):
    """Structural regions of an Oryx ``keymap.c``, in file order."""

    PREPROCESSING = 0
    MACRO_ENUM = 1
    TAP_DANCE_ENUM = 2
    KEYMAP = 3
    RGB_SETUP = 4
    MACRO_DEFS = 5
    TAP_DANCE_SETUP = 6
    TAP_DANCE_DEFS = 7


class Sink(enum.Enum):
    """Destination of a line emitted by the section splitter."""

    RETAINED = "retained"
    SIDE = "side"
    KEYMAP = "keymap"
    MACRO_DEFS = "macro_defs"
    DISCARD = "discard"


@dc.dataclass(frozen=True, slots=True)
class OutputAction:
    """Append ``text`` (one line, no newline) to ``sink``."""

    sink: Sink
    text: str


@dc.dataclass(slots=True)
class SplitKeymap:
    """Lines routed by the splitter, grouped by destination.

    Attributes
    ----------
    retained : list[str]
        Lines kept in the rewritten ``keymap.c`` ahead of the macro
        definitions.
    side : list[str]
        Tap-dance lines written verbatim to the side file.
    keymap : list[str]
        The ``keymaps[]`` array through the RGB ``extern`` declaration.
    macro_defs : list[str]
        ``process_record_user`` up to (excluding) the tap-dance typedef.
    regions : dict[KeymapSection, list[str]]
        Raw input lines per section, trigger line included in the section it
        opens.
    """

    retained: list[str] = dc.field(default_factory=list)
    side: list[str] = dc.field(default_factory=list)
    keymap: list[str] = dc.field(default_factory=list)
    macro_defs: list[str] = dc.field(default_factory=list)
    regions: dict[KeymapSection, list[str]] = dc.field(default_factory=dict)

    def lines(self, sink: Sink) -> list[str] | None:
        """Return the line buffer backing ``sink`` (``None`` for discard)."""
        match sink:
            case Sink.RETAINED:
                return self.retained
            case Sink.SIDE:
                return self.side
            case Sink.KEYMAP:
                return self.keymap
            case Sink.MACRO_DEFS:
                return self.macro_defs
            case _:
                return None


@dc.dataclass(frozen=True, slots=True)
class RawMacroSlot:
    """One ``SEND_STRING`` call from the macro definitions.

    ``text`` is the decoded, lowercased string, or ``None`` when the macro
    cannot take part in catalog matching.
    """

    ordinal: int
    text: str | None


@dc.dataclass(frozen=True, slots=True)
class AmbiguousCatalogMatch:
    """Diagnostic recorded when several catalog entries share a prefix."""

    ordinal: int
    text: str
    chosen: CatalogEntry
    candidates: tuple[CatalogEntry, ...]

    def describe(self) -> str:
        """Return a human-readable summary of the tie-break."""
        names = ", ".join(entry.label for entry in self.candidates)
        return (
            f"Multiple matches for macro code {self.text!r} (ST_MACRO_{self.ordinal}): "
            f"{names}. Using the first match {self.chosen.label!r}."
        )


@dc.dataclass(slots=True)
class Classification:
    """Catalog match (or ``None``) for every extracted macro slot."""

    slots: dict[int, CatalogRef | None] = dc.field(default_factory=dict)
    ambiguities: list[AmbiguousCatalogMatch] = dc.field(default_factory=list)

    def __contains__(self, ordinal: object) -> bool:
        return ordinal in self.slots

    def __len__(self) -> int:
        return len(self.slots)

    def get(self, ordinal: int) -> CatalogRef | None:
        """Return the match for ``ordinal``; raises ``KeyError`` when unknown."""
        return self.slots[ordinal]

    def unmatched(self) -> list[int]:
        """Return ordinals that stay literal, in ascending order."""
        return sorted(ordinal for ordinal, ref in self.slots.items() if ref is None)

    def matched(self) -> cabc.Iterator[tuple[int, CatalogRef]]:
        """Yield ``(ordinal, ref)`` for every slot with a catalog match."""
        for ordinal, ref in sorted(self.slots.items()):
            if ref is not None:
                yield ordinal, ref


@dc.dataclass(frozen=True, slots=True)
class TransformResult:
    """Rendered artifacts of a transform run, held in memory until written."""

    keymap_c: str
    tap_dance_inl: str
    classification: Classification


__all__ = [
    "AmbiguousCatalogMatch",
    "Classification",
    "KeymapSection",
    "OutputAction",
    "RawMacroSlot",
    "Sink",
    "SplitKeymap",
    "TransformResult",
]
