"""Fixed catalogs of code snippets and custom keycodes recognised in macros.

The primary catalog (:class:`Snippet`) lists the code fragments that the
firmware types through its own ``process_record_macros`` dispatcher. The
secondary catalog (:class:`CustomKeycode`) lists QMK keycodes that Oryx cannot
assign directly, so users record them as macros that spell the keycode name.

Both catalogs are plain enums whose members carry a ``label`` (used to build C
identifiers) and a ``text`` (the canonical rendering that macro bodies are
matched against). Enumeration order is significant: it breaks ties between
several entries sharing a prefix.

Examples
--------
>>> from oryx_keymap.catalog import SNIPPETS, Snippet
>>> [entry.label for entry in SNIPPETS.search("ret")]
['Return']
>>> Snippet.NULL_PTR.text
'nullptr'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class CatalogKind(enum.Enum):
    """Identify which catalog a match came from."""

    SNIPPET = "snippet"
    CUSTOM_KEYCODE = "custom keycode"


class Snippet(enum.Enum):
    """Code snippets typed by the firmware's macro dispatcher."""

    VOID = ("Void", "void")
    BREAK = ("Break", "break")
    NOT_EQUAL = ("NotEqual", "!=")
    EQUALS_ARROW = ("EqualsArrow", "=>")
    DASH_ARROW = ("DashArrow", "->")
    RETURN = ("Return", "return")
    BOOL = ("Bool", "bool")
    FALSE = ("False", "false")
    TRUE = ("True", "true")
    NULL_PTR = ("NullPtr", "nullptr")
    CONTINUE = ("Continue", "continue")
    VIRTUAL = ("Virtual", "virtual")
    OVERRIDE = ("Override", "override")
    STATIC = ("Static", "static")
    ENUM = ("Enum", "enum")
    CLASS = ("Class", "class")
    STRUCT = ("Struct", "struct")
    NAMESPACE = ("Namespace", "namespace")
    INCLUDE = ("Include", "#include")
    DEFINE = ("Define", "#define")
    IF_DEF = ("IfDef", "#ifdef")
    ELSE = ("Else", "#else")
    END_IF = ("EndIf", "#endif")
    PUBLIC = ("Public", "public")
    PRIVATE = ("Private", "private")
    TEMPLATE = ("Template", "template")
    TYPENAME = ("Typename", "typename")
    AUTO = ("Auto", "auto")
    WHILE = ("While", "while")
    REINTERPRET_CAST = ("ReinterpretCast", "reinterpret_cast")
    FUNCTION = ("Function", "function")

    def __init__(self, label: str, text: str) -> None:
        self.label = label
        self.text = text


class CustomKeycode(enum.Enum):
    """QMK keycodes that are entered in Oryx as macros spelling their name."""

    DYNAMIC_TAPPING_TERM_PRINT = ("DynamicTappingTermPrint", "DT_PRNT")
    DYNAMIC_TAPPING_TERM_INCREASE = ("DynamicTappingTermIncrease", "DT_UP")
    DYNAMIC_TAPPING_TERM_DECREASE = ("DynamicTappingTermDecrease", "DT_DOWN")

    def __init__(self, label: str, text: str) -> None:
        self.label = label
        self.text = text


CatalogEntry: typ.TypeAlias = Snippet | CustomKeycode


@dc.dataclass(frozen=True, slots=True)
class CatalogRef:
    """A macro slot's match: the catalog it came from and the entry."""

    kind: CatalogKind
    entry: CatalogEntry

    def identifier(self, prefix: str) -> str:
        """Return the C identifier that replaces ``ST_MACRO_<n>``.

        Snippets become ``<PREFIX>_MACRO_<Label>`` (declared by the catalog
        file); custom keycodes are already QMK identifiers.
        """
        if self.kind is CatalogKind.SNIPPET:
            return snippet_identifier(prefix, typ.cast("Snippet", self.entry))
        return self.entry.text


def snippet_identifier(prefix: str, snippet: Snippet) -> str:
    """Return the enum identifier used for ``snippet`` in generated C code."""
    return f"{prefix.upper()}_MACRO_{snippet.label}"


@dc.dataclass(frozen=True, slots=True)
class Catalog:
    """An ordered, immutable catalog searchable by text prefix."""

    kind: CatalogKind
    entries: tuple[CatalogEntry, ...]

    def search(self, prefix: str) -> list[CatalogEntry]:
        """Return entries whose lowercased text starts with ``prefix``.

        ``prefix`` is compared case-insensitively; results keep enumeration
        order.
        """
        needle = prefix.lower()
        return [entry for entry in self.entries if entry.text.lower().startswith(needle)]

    def ref(self, entry: CatalogEntry) -> CatalogRef:
        """Wrap ``entry`` in a :class:`CatalogRef` tagged with this catalog."""
        return CatalogRef(kind=self.kind, entry=entry)


SNIPPETS = Catalog(kind=CatalogKind.SNIPPET, entries=tuple(Snippet))
CUSTOM_KEYCODES = Catalog(kind=CatalogKind.CUSTOM_KEYCODE, entries=tuple(CustomKeycode))

# Searched in this order; the first catalog with a match wins.
CATALOGS: tuple[Catalog, ...] = (SNIPPETS, CUSTOM_KEYCODES)


__all__ = [
    "CATALOGS",
    "CUSTOM_KEYCODES",
    "SNIPPETS",
    "Catalog",
    "CatalogEntry",
    "CatalogKind",
    "CatalogRef",
    "CustomKeycode",
    "Snippet",
    "snippet_identifier",
]
