"""Unit tests for the ``keymap.c`` section state machine."""

from __future__ import annotations

import pytest

from oryx_keymap.errors import MalformedSectionOrderError
from oryx_keymap.keymap import KeymapSection, OutputAction, SectionSplitter, Sink, step
from oryx_keymap.keymap.sections import (
    MACRO_ENUM_MARKER,
    TAP_DANCE_DEFS_PREFIX,
    TAP_DANCE_ENUM_MARKER,
)

INCLUDE = "petkau_macros.inl"


def test_preprocessing_marker_becomes_include() -> None:
    section, actions = step(
        KeymapSection.PREPROCESSING, MACRO_ENUM_MARKER, macros_include=INCLUDE
    )
    assert section is KeymapSection.MACRO_ENUM
    assert actions == [
        OutputAction(Sink.DISCARD, MACRO_ENUM_MARKER),
        OutputAction(Sink.RETAINED, '#include "petkau_macros.inl"'),
    ]


def test_macro_enum_body_is_discarded() -> None:
    section, actions = step(
        KeymapSection.MACRO_ENUM, "  ST_MACRO_0,", macros_include=INCLUDE
    )
    assert section is KeymapSection.MACRO_ENUM
    assert actions == [OutputAction(Sink.DISCARD, "  ST_MACRO_0,")]


def test_tap_dance_enum_marker_goes_to_side_file() -> None:
    section, actions = step(
        KeymapSection.MACRO_ENUM, TAP_DANCE_ENUM_MARKER, macros_include=INCLUDE
    )
    assert section is KeymapSection.TAP_DANCE_ENUM
    assert actions == [OutputAction(Sink.SIDE, TAP_DANCE_ENUM_MARKER)]


def test_tap_dance_defs_marker_is_a_prefix_match() -> None:
    line = f"{TAP_DANCE_DEFS_PREFIX}[4];"
    section, actions = step(KeymapSection.TAP_DANCE_SETUP, line, macros_include=INCLUDE)
    assert section is KeymapSection.TAP_DANCE_DEFS
    assert actions == [OutputAction(Sink.SIDE, line)]


def test_markers_must_match_the_whole_line() -> None:
    section, _ = step(
        KeymapSection.PREPROCESSING, f"  {MACRO_ENUM_MARKER}", macros_include=INCLUDE
    )
    assert section is KeymapSection.PREPROCESSING


def test_terminal_section_sends_everything_to_side_file() -> None:
    section, actions = step(
        KeymapSection.TAP_DANCE_DEFS, MACRO_ENUM_MARKER, macros_include=INCLUDE
    )
    assert section is KeymapSection.TAP_DANCE_DEFS
    assert actions == [OutputAction(Sink.SIDE, MACRO_ENUM_MARKER)]


def test_regions_reassemble_the_input(keymap_text: str) -> None:
    """Every input line lands in exactly one region, in file order."""
    split = SectionSplitter(macros_include=INCLUDE).split(keymap_text)
    assert list(split.regions) == list(KeymapSection)
    rejoined = [line for section in KeymapSection for line in split.regions[section]]
    assert rejoined == keymap_text.splitlines()


def test_split_routes_lines(keymap_text: str) -> None:
    split = SectionSplitter(macros_include=INCLUDE).split(keymap_text)
    assert split.side[0] == TAP_DANCE_ENUM_MARKER
    assert "static tap dance_state[1];" in split.side
    assert split.keymap[0].startswith("const uint16_t PROGMEM keymaps")
    assert split.keymap[-1] == "extern rgb_config_t rgb_matrix_config;"
    assert split.macro_defs[0].startswith("bool process_record_user")
    assert "typedef struct {" in split.retained
    assert "  ST_MACRO_0," not in split.retained


def test_split_is_deterministic(keymap_text: str) -> None:
    splitter = SectionSplitter(macros_include=INCLUDE)
    assert splitter.split(keymap_text) == splitter.split(keymap_text)


def test_truncated_input_names_the_missing_marker(keymap_text: str) -> None:
    truncated = keymap_text.split("typedef struct {")[0]
    with pytest.raises(MalformedSectionOrderError, match="MACRO_DEFS") as excinfo:
        SectionSplitter(macros_include=INCLUDE).split(truncated)
    assert "typedef struct {" in str(excinfo.value)


def test_empty_input_is_malformed() -> None:
    with pytest.raises(MalformedSectionOrderError, match="PREPROCESSING after 0 lines"):
        SectionSplitter(macros_include=INCLUDE).split("")
