"""Unit tests for the snippet and custom keycode catalogs."""

from __future__ import annotations

from oryx_keymap.catalog import (
    CATALOGS,
    CUSTOM_KEYCODES,
    SNIPPETS,
    CatalogKind,
    CatalogRef,
    CustomKeycode,
    Snippet,
    snippet_identifier,
)


def test_search_is_prefix_match_in_enum_order() -> None:
    assert SNIPPETS.search("re") == [Snippet.RETURN, Snippet.REINTERPRET_CAST]
    assert SNIPPETS.search("ret") == [Snippet.RETURN]
    assert SNIPPETS.search("xyz") == []


def test_custom_keycode_search_ignores_case() -> None:
    assert CUSTOM_KEYCODES.search("dt_") == [
        CustomKeycode.DYNAMIC_TAPPING_TERM_PRINT,
        CustomKeycode.DYNAMIC_TAPPING_TERM_INCREASE,
        CustomKeycode.DYNAMIC_TAPPING_TERM_DECREASE,
    ]


def test_catalogs_are_searched_snippets_first() -> None:
    assert [catalog.kind for catalog in CATALOGS] == [
        CatalogKind.SNIPPET,
        CatalogKind.CUSTOM_KEYCODE,
    ]


def test_identifiers() -> None:
    """Snippets get prefixed identifiers; custom keycodes keep their QMK name."""
    assert snippet_identifier("petkau", Snippet.NULL_PTR) == "PETKAU_MACRO_NullPtr"
    snippet = CatalogRef(CatalogKind.SNIPPET, Snippet.VOID)
    keycode = CatalogRef(CatalogKind.CUSTOM_KEYCODE, CustomKeycode.DYNAMIC_TAPPING_TERM_INCREASE)
    assert snippet.identifier("custom") == "CUSTOM_MACRO_Void"
    assert keycode.identifier("custom") == "DT_UP"


def test_snippet_labels_are_unique() -> None:
    labels = [snippet.label for snippet in Snippet]
    assert len(labels) == len(set(labels)), "Duplicate snippet label would clash in C"
