"""Error types raised while transforming an Oryx ``keymap.c`` export.

Every failure in the transform pipeline derives from :class:`KeymapError`, so
callers can abort on a single exception type while still reporting the
offending slot or input line. Ambiguous catalog matches are not errors; see
:class:`oryx_keymap.keymap.models.AmbiguousCatalogMatch`.
"""

from __future__ import annotations


class KeymapError(ValueError):
    """Base class for failures raised while transforming a keymap."""


class UnknownEncodingNameError(KeymapError):
    """Raised when a QMK key name has no character mapping."""

    def __init__(self, name: str, *, shifted: bool = False) -> None:
        self.name = name
        self.shifted = shifted
        modifier = "shifted " if shifted else ""
        super().__init__(f"No known character for {modifier}QMK key name {name!r}.")


class UnencodableCharError(KeymapError):
    """Raised when a character cannot be typed with a QMK tap expression."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No known QMK key name for {char!r}.")


class UnsupportedModifierError(KeymapError):
    """Raised when a tap is wrapped in a modifier other than shift."""


class ControlModifierError(UnsupportedModifierError):
    """Raised when a macro body holds a control-modified tap."""


class NoCatalogMatchError(KeymapError):
    """Raised in strict mode when a macro matches no catalog entry."""


class MalformedSectionOrderError(KeymapError):
    """Raised when the input ends before every section marker was seen."""


class MissingSlotReferenceError(KeymapError):
    """Raised when ``ST_MACRO_<n>`` refers to a slot that was never extracted."""

    def __init__(self, ordinal: int, *, context: str) -> None:
        self.ordinal = ordinal
        super().__init__(
            f"ST_MACRO_{ordinal} is referenced in the {context} but no "
            "SEND_STRING call defines it; the export may be malformed or from an "
            "unsupported Oryx version."
        )


__all__ = [
    "ControlModifierError",
    "KeymapError",
    "MalformedSectionOrderError",
    "MissingSlotReferenceError",
    "NoCatalogMatchError",
    "UnencodableCharError",
    "UnknownEncodingNameError",
    "UnsupportedModifierError",
]
