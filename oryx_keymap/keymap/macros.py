r"""Extract and decode the ``SEND_STRING`` macros of an Oryx keymap.

Oryx writes each macro as a ``case ST_MACRO_<n>:`` block whose body is a
single ``SEND_STRING(...)`` call made of tap expressions separated by delays::

    SEND_STRING(SS_TAP(X_R) SS_DELAY(100) SS_LSFT(SS_TAP(X_MINUS)));

:func:`extract_macros` turns every call into a
:class:`~oryx_keymap.keymap.models.RawMacroSlot` whose text is the lowercase
string the macro types. A macro that holds a tap under Ctrl, Alt or GUI, or a
key with no character (``X_SPACE``, ``X_KP_0``), cannot be a plain snippet, so
its slot is kept literal instead of failing the run.
"""

from __future__ import annotations

import logging
import re

from oryx_keymap import codemap
from oryx_keymap.errors import (
    ControlModifierError,
    UnknownEncodingNameError,
    UnsupportedModifierError,
)

from .models import RawMacroSlot

logger = logging.getLogger(__name__)

SEND_STRING_PATTERN = re.compile(r"SEND_STRING\((.+)\);\n")

_KEY = r"[A-Za-z0-9_]+"
TAP_PATTERN = re.compile(
    r"(?P<modifier>SS_[LR](?P<kind>CTL|ALT|GUI)\()"
    rf"|SS_[LR]SFT\(SS_TAP\(X_(?P<shifted>{_KEY})\)\)"
    rf"|SS_TAP\(X_(?P<plain>{_KEY})\)"
)


def decode_send_string(arguments: str) -> str:
    """Return the lowercase text typed by the ``SEND_STRING`` ``arguments``.

    Parameters
    ----------
    arguments : str
        Text between the parentheses of a ``SEND_STRING`` call.

    Returns
    -------
    str
        Decoded characters in source order, lowercased for matching.

    Raises
    ------
    ControlModifierError
        If any tap is wrapped in ``SS_LCTL``/``SS_RCTL``.
    UnsupportedModifierError
        If any tap is wrapped in ``SS_LALT``/``SS_RALT`` or
        ``SS_LGUI``/``SS_RGUI``.
    UnknownEncodingNameError
        If a tap names a key with no character mapping.
    """
    chars: list[str] = []
    for match in TAP_PATTERN.finditer(arguments):
        if match.group("modifier"):
            kind = match.group("kind")
            msg = f"Macro uses {kind}: {match.group(0)}"
            if kind == "CTL":
                raise ControlModifierError(msg)
            raise UnsupportedModifierError(msg)
        shifted_name, plain_name = match.group("shifted"), match.group("plain")
        if shifted_name is not None:
            chars.append(codemap.decode(shifted_name, shifted=True))
        else:
            chars.append(codemap.decode(plain_name, shifted=False))
    return "".join(chars).lower()


def extract_macros(macro_defs: str) -> list[RawMacroSlot]:
    """Decode every ``SEND_STRING`` call in ``macro_defs`` in source order.

    Slots that cannot be decoded get ``text=None`` and a warning naming the
    slot; the remaining slots are still extracted.
    """
    slots: list[RawMacroSlot] = []
    for ordinal, match in enumerate(SEND_STRING_PATTERN.finditer(macro_defs)):
        try:
            text: str | None = decode_send_string(match.group(1))
        except (UnsupportedModifierError, UnknownEncodingNameError) as exc:
            logger.warning("ST_MACRO_%d kept literal: %s", ordinal, exc)
            text = None
        slots.append(RawMacroSlot(ordinal=ordinal, text=text))
    return slots


__all__ = [
    "SEND_STRING_PATTERN",
    "TAP_PATTERN",
    "decode_send_string",
    "extract_macros",
]
