r"""Split an Oryx ``keymap.c`` into its structural sections.

The vendor file always lists its sections in the same order (see
:class:`~oryx_keymap.keymap.models.KeymapSection`), each opened by a fixed
marker line. :func:`step` is the pure transition function of the state
machine: given the current section and one input line it returns the next
section and the :class:`~oryx_keymap.keymap.models.OutputAction` list for that
line. :class:`SectionSplitter` drives it over a whole file.

Example
-------
>>> from oryx_keymap.keymap.sections import SectionSplitter
>>> splitter = SectionSplitter(macros_include="petkau_macros.inl")
>>> split = splitter.split(open("keymap.c").read())  # doctest: +SKIP
>>> split.side[0]  # doctest: +SKIP
'enum tap_dance_codes {'
"""

from __future__ import annotations

import dataclasses as dc

from oryx_keymap.errors import MalformedSectionOrderError

from .models import KeymapSection, OutputAction, Sink, SplitKeymap

MACRO_ENUM_MARKER = "enum custom_keycodes {"
TAP_DANCE_ENUM_MARKER = "enum tap_dance_codes {"
KEYMAP_MARKER = "const uint16_t PROGMEM keymaps[][MATRIX_ROWS][MATRIX_COLS] = {"
RGB_SETUP_MARKER = "extern rgb_config_t rgb_matrix_config;"
MACRO_DEFS_MARKER = "bool process_record_user(uint16_t keycode, keyrecord_t *record) {"
TAP_DANCE_SETUP_MARKER = "typedef struct {"
TAP_DANCE_DEFS_PREFIX = "static tap dance_state"


@dc.dataclass(frozen=True, slots=True)
class _Transition:
    """How a section reacts to its own lines and to its closing marker."""

    marker: str
    prefix_match: bool
    body_sink: Sink
    marker_sink: Sink

    def triggered_by(self, line: str) -> bool:
        if self.prefix_match:
            return line.startswith(self.marker)
        return line == self.marker


_TRANSITIONS: dict[KeymapSection, _Transition] = {
    # The marker line is dropped; step() emits the catalog include instead.
    KeymapSection.PREPROCESSING: _Transition(
        MACRO_ENUM_MARKER, False, Sink.RETAINED, Sink.DISCARD
    ),
    KeymapSection.MACRO_ENUM: _Transition(
        TAP_DANCE_ENUM_MARKER, False, Sink.DISCARD, Sink.SIDE
    ),
    KeymapSection.TAP_DANCE_ENUM: _Transition(
        KEYMAP_MARKER, False, Sink.SIDE, Sink.KEYMAP
    ),
    KeymapSection.KEYMAP: _Transition(
        RGB_SETUP_MARKER, False, Sink.KEYMAP, Sink.KEYMAP
    ),
    KeymapSection.RGB_SETUP: _Transition(
        MACRO_DEFS_MARKER, False, Sink.RETAINED, Sink.MACRO_DEFS
    ),
    KeymapSection.MACRO_DEFS: _Transition(
        TAP_DANCE_SETUP_MARKER, False, Sink.MACRO_DEFS, Sink.RETAINED
    ),
    KeymapSection.TAP_DANCE_SETUP: _Transition(
        TAP_DANCE_DEFS_PREFIX, True, Sink.RETAINED, Sink.SIDE
    ),
}

TERMINAL_SECTION = KeymapSection.TAP_DANCE_DEFS


def include_directive(filename: str) -> str:
    """Return a quoted ``#include`` line for ``filename``."""
    return f'#include "{filename}"'


def step(
    section: KeymapSection, line: str, *, macros_include: str
) -> tuple[KeymapSection, list[OutputAction]]:
    """Advance the splitter by one input line.

    Parameters
    ----------
    section : KeymapSection
        Section the splitter is currently in.
    line : str
        Input line without its trailing newline.
    macros_include : str
        File name of the generated catalog, included in place of the vendor's
        ``custom_keycodes`` enum.

    Returns
    -------
    tuple[KeymapSection, list[OutputAction]]
        The section that owns the following line and the actions for ``line``.
    """
    transition = _TRANSITIONS.get(section)
    if transition is None:
        return section, [OutputAction(Sink.SIDE, line)]
    if not transition.triggered_by(line):
        return section, [OutputAction(transition.body_sink, line)]

    actions = [OutputAction(transition.marker_sink, line)]
    if section is KeymapSection.PREPROCESSING:
        actions.append(OutputAction(Sink.RETAINED, include_directive(macros_include)))
    return KeymapSection(section + 1), actions


class SectionSplitter:
    """Route every line of a vendor ``keymap.c`` to its destination."""

    def __init__(self, *, macros_include: str) -> None:
        self.macros_include = macros_include

    def split(self, text: str) -> SplitKeymap:
        """Run the state machine over ``text``.

        Raises
        ------
        MalformedSectionOrderError
            If the input ends before the tap-dance definitions were reached.
        """
        split = SplitKeymap()
        section = KeymapSection.PREPROCESSING
        line_number = 0
        for line_number, line in enumerate(text.splitlines(), start=1):
            following, actions = step(section, line, macros_include=self.macros_include)
            # A trigger line belongs to the section it opens.
            split.regions.setdefault(following, []).append(line)
            for action in actions:
                buffer = split.lines(action.sink)
                if buffer is not None:
                    buffer.append(action.text)
            section = following

        if section is not TERMINAL_SECTION:
            expected = _TRANSITIONS[section].marker
            msg = (
                f"Input ended in section {section.name} after {line_number} lines; "
                f"expected a line matching {expected!r}."
            )
            raise MalformedSectionOrderError(msg)
        return split


__all__ = [
    "KEYMAP_MARKER",
    "MACRO_DEFS_MARKER",
    "MACRO_ENUM_MARKER",
    "RGB_SETUP_MARKER",
    "TAP_DANCE_DEFS_PREFIX",
    "TAP_DANCE_ENUM_MARKER",
    "TAP_DANCE_SETUP_MARKER",
    "TERMINAL_SECTION",
    "SectionSplitter",
    "include_directive",
    "step",
]
