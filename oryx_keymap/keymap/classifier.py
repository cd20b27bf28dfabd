"""Match decoded macro text against the snippet and custom keycode catalogs.

A macro recorded in Oryx may spell only the beginning of a snippet (``ret``
for ``return``), so matching is by prefix: an entry matches when its
canonical text starts with the decoded macro string. Catalogs are tried in
the order given by :data:`oryx_keymap.catalog.CATALOGS`; within a catalog a
single candidate wins outright and several candidates resolve to the first in
enumeration order, recording an
:class:`~oryx_keymap.keymap.models.AmbiguousCatalogMatch`.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging

from oryx_keymap.catalog import CATALOGS, Catalog, CatalogEntry, CatalogRef
from oryx_keymap.errors import NoCatalogMatchError

from .models import AmbiguousCatalogMatch, Classification, RawMacroSlot

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class CatalogMatch:
    """Outcome of searching one catalog."""

    ref: CatalogRef
    candidates: tuple[CatalogEntry, ...]

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1


def match_catalog(catalog: Catalog, text: str) -> CatalogMatch | None:
    """Return the first entry of ``catalog`` whose text starts with ``text``."""
    candidates = tuple(catalog.search(text))
    if not candidates:
        return None
    return CatalogMatch(ref=catalog.ref(candidates[0]), candidates=candidates)


class MacroClassifier:
    """Classify macro slots against an ordered sequence of catalogs."""

    def __init__(
        self, catalogs: cabc.Sequence[Catalog] = CATALOGS, *, strict: bool = False
    ) -> None:
        """Initialise the classifier.

        Parameters
        ----------
        catalogs : Sequence[Catalog], optional
            Catalogs searched in priority order; defaults to snippets first,
            then custom keycodes.
        strict : bool, optional
            Raise :class:`~oryx_keymap.errors.NoCatalogMatchError` instead of
            keeping unmatched macros literal.
        """
        self.catalogs = tuple(catalogs)
        self.strict = strict

    def match(self, text: str) -> CatalogMatch | None:
        """Return the winning match for ``text`` or ``None``.

        Empty text never matches: it would be a prefix of every entry.
        """
        if not text:
            return None
        for catalog in self.catalogs:
            found = match_catalog(catalog, text)
            if found is not None:
                return found
            logger.debug("No %s matches macro code %r.", catalog.kind.value, text)
        return None

    def classify(self, slots: cabc.Iterable[RawMacroSlot]) -> Classification:
        """Build the :class:`Classification` for every extracted slot.

        Raises
        ------
        NoCatalogMatchError
            In strict mode, for the first slot without a match.
        """
        classification = Classification()
        for slot in slots:
            found = self.match(slot.text) if slot.text is not None else None
            if found is None:
                classification.slots[slot.ordinal] = None
                self._report_unmatched(slot)
                continue

            classification.slots[slot.ordinal] = found.ref
            if found.ambiguous:
                diagnostic = AmbiguousCatalogMatch(
                    ordinal=slot.ordinal,
                    text=slot.text or "",
                    chosen=found.ref.entry,
                    candidates=found.candidates,
                )
                classification.ambiguities.append(diagnostic)
                logger.warning(diagnostic.describe())
            else:
                logger.info(
                    "Matched macro code %r to %s %r.",
                    slot.text,
                    found.ref.kind.value,
                    found.ref.entry.label,
                )
        return classification

    def _report_unmatched(self, slot: RawMacroSlot) -> None:
        if slot.text is None:
            return
        if self.strict:
            msg = f"No catalog entry matches macro code {slot.text!r} (ST_MACRO_{slot.ordinal})."
            raise NoCatalogMatchError(msg)
        logger.info("No catalog entry matches macro code %r. Using it literally.", slot.text)


__all__ = ["CatalogMatch", "MacroClassifier", "match_catalog"]
