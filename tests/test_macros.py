"""Unit tests for ``SEND_STRING`` extraction and decoding."""

from __future__ import annotations

import logging

import pytest

from oryx_keymap import codemap
from oryx_keymap.catalog import Snippet
from oryx_keymap.errors import (
    ControlModifierError,
    UnknownEncodingNameError,
    UnsupportedModifierError,
)
from oryx_keymap.keymap import RawMacroSlot, decode_send_string, extract_macros


def _case(body: str) -> str:
    return f"    if (record->event.pressed) {{\n      SEND_STRING({body});\n    }}\n"


def test_decode_mixes_shifted_and_plain_taps() -> None:
    text = decode_send_string(
        "SS_TAP(X_N) SS_DELAY(100) SS_LSFT(SS_TAP(X_1)) SS_DELAY(100) SS_RSFT(SS_TAP(X_EQUAL))"
    )
    assert text == "n!+"


def test_decode_lowercases_letters() -> None:
    assert decode_send_string("SS_LSFT(SS_TAP(X_V)) SS_TAP(X_O)") == "vo"


@pytest.mark.parametrize("snippet", list(Snippet), ids=lambda snippet: snippet.label)
def test_encoded_snippet_decodes_to_its_text(snippet: Snippet) -> None:
    """Re-encoding a snippet and decoding it yields the snippet text again."""
    arguments = " SS_DELAY(0) ".join(codemap.encode(char) for char in snippet.text)
    assert decode_send_string(arguments) == snippet.text


def test_decode_rejects_control() -> None:
    with pytest.raises(ControlModifierError):
        decode_send_string("SS_TAP(X_A) SS_RCTL(SS_TAP(X_V))")


@pytest.mark.parametrize("wrapper", ["SS_LALT", "SS_RALT", "SS_LGUI", "SS_RGUI"])
def test_decode_rejects_other_modifiers(wrapper: str) -> None:
    with pytest.raises(UnsupportedModifierError):
        decode_send_string(f"SS_TAP(X_V) {wrapper}(SS_TAP(X_O)) SS_TAP(X_I)")


def test_decode_rejects_key_names_with_underscores() -> None:
    """Keys such as ``X_KP_0`` reach the key map instead of being skipped."""
    with pytest.raises(UnknownEncodingNameError) as excinfo:
        decode_send_string("SS_TAP(X_V) SS_DELAY(100) SS_TAP(X_KP_0) SS_DELAY(100) SS_TAP(X_O)")
    assert excinfo.value.name == "KP_0"


def test_extract_keeps_control_macros_literal(caplog: pytest.LogCaptureFixture) -> None:
    macro_defs = _case("SS_TAP(X_V) SS_TAP(X_O)") + _case("SS_LCTL(SS_TAP(X_C))")
    with caplog.at_level(logging.WARNING):
        slots = extract_macros(macro_defs)
    assert slots == [RawMacroSlot(0, "vo"), RawMacroSlot(1, None)]
    assert "ST_MACRO_1" in caplog.text


def test_extract_keeps_alt_macros_literal() -> None:
    slots = extract_macros(_case("SS_TAP(X_V) SS_LALT(SS_TAP(X_O)) SS_TAP(X_I)"))
    assert slots == [RawMacroSlot(0, None)]


def test_extract_keeps_undecodable_macros_literal(caplog: pytest.LogCaptureFixture) -> None:
    """A key without a character keeps its slot literal and the run goes on."""
    macro_defs = (
        _case("SS_TAP(X_H) SS_TAP(X_SPACE) SS_TAP(X_I)")
        + _case("SS_TAP(X_V) SS_TAP(X_KP_0) SS_TAP(X_O)")
        + _case("SS_TAP(X_R) SS_TAP(X_E)")
    )
    with caplog.at_level(logging.WARNING):
        slots = extract_macros(macro_defs)
    assert slots == [RawMacroSlot(0, None), RawMacroSlot(1, None), RawMacroSlot(2, "re")]
    assert "ST_MACRO_0 kept literal" in caplog.text
    assert "'SPACE'" in caplog.text
    assert "ST_MACRO_1 kept literal" in caplog.text
