r"""Translate between QMK key names and the characters they type.

Oryx renders every macro as a ``SEND_STRING`` call built from tap
expressions such as ``SS_TAP(X_R)`` or ``SS_LSFT(SS_TAP(X_MINUS))``. This
module maps a key name (the part after ``X_``) plus its shift state to the
character it produces on a US layout, and back again so the snippet catalog
can be re-encoded.

Example
-------
>>> from oryx_keymap.codemap import decode, encode
>>> decode("MINUS", shifted=True)
'_'
>>> encode("!")
'SS_LSFT(SS_TAP(X_1))'
"""

from __future__ import annotations

import string

from .errors import UnencodableCharError, UnknownEncodingNameError

# US top row, shifted.
DIGIT_SYMBOLS: dict[str, str] = {
    "1": "!",
    "2": "@",
    "3": "#",
    "4": "$",
    "5": "%",
    "6": "^",
    "7": "&",
    "8": "*",
    "9": "(",
    "0": ")",
}

PUNCTUATION: dict[str, tuple[str, str]] = {
    "EQUAL": ("=", "+"),
    "MINUS": ("-", "_"),
    "DOT": (".", ">"),
    "COMMA": (",", "<"),
}

# Bare punctuation is accepted as a key name alongside EQUAL, MINUS, etc.
_PUNCTUATION_BY_CHAR: dict[str, tuple[str, str]] = {
    pair[0]: pair for pair in PUNCTUATION.values()
}


def decode(name: str, shifted: bool = False) -> str:
    """Return the character typed by QMK key ``X_<name>``.

    Parameters
    ----------
    name : str
        Key name without the ``X_`` prefix, e.g. ``"A"``, ``"7"`` or
        ``"EQUAL"``.
    shifted : bool, optional
        Whether the tap is wrapped in ``SS_LSFT``/``SS_RSFT``.

    Returns
    -------
    str
        A single character.

    Raises
    ------
    UnknownEncodingNameError
        If ``name`` is outside the supported key set.
    """
    if len(name) == 1:
        if name in string.ascii_letters:
            return name.upper() if shifted else name.lower()
        if name in DIGIT_SYMBOLS:
            return DIGIT_SYMBOLS[name] if shifted else name
        if name in _PUNCTUATION_BY_CHAR:
            plain, upper = _PUNCTUATION_BY_CHAR[name]
            return upper if shifted else plain
    elif name in PUNCTUATION:
        plain, upper = PUNCTUATION[name]
        return upper if shifted else plain
    raise UnknownEncodingNameError(name, shifted=shifted)


def _tap(name: str, *, shifted: bool = False) -> str:
    tap = f"SS_TAP(X_{name})"
    return f"SS_LSFT({tap})" if shifted else tap


def _build_encoding() -> dict[str, str]:
    table: dict[str, str] = {}
    for letter in string.ascii_uppercase:
        table[letter.lower()] = _tap(letter)
        table[letter] = _tap(letter, shifted=True)
    for digit, symbol in DIGIT_SYMBOLS.items():
        table[digit] = _tap(digit)
        table[symbol] = _tap(digit, shifted=True)
    for name, (plain, upper) in PUNCTUATION.items():
        table[plain] = _tap(name)
        table[upper] = _tap(name, shifted=True)
    return table


ENCODING: dict[str, str] = _build_encoding()


def encode(char: str) -> str:
    """Return the QMK tap expression that types ``char``.

    Raises
    ------
    UnencodableCharError
        If ``char`` cannot be typed with a single (optionally shifted) tap.
    """
    try:
        return ENCODING[char]
    except KeyError as exc:
        raise UnencodableCharError(char) from exc


__all__ = ["DIGIT_SYMBOLS", "ENCODING", "PUNCTUATION", "decode", "encode"]
