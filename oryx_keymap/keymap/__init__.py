"""Split, classify, and rewrite Oryx ``keymap.c`` exports."""

from .classifier import CatalogMatch, MacroClassifier, match_catalog
from .macros import decode_send_string, extract_macros
from .models import (
    AmbiguousCatalogMatch,
    Classification,
    KeymapSection,
    OutputAction,
    RawMacroSlot,
    Sink,
    SplitKeymap,
    TransformResult,
)
from .rewriter import KeymapRewriter
from .sections import SectionSplitter, step
from .transformer import KEYMAP_FILENAME, KeymapTransformer

__all__ = [
    "KEYMAP_FILENAME",
    "AmbiguousCatalogMatch",
    "CatalogMatch",
    "Classification",
    "KeymapRewriter",
    "KeymapSection",
    "KeymapTransformer",
    "MacroClassifier",
    "OutputAction",
    "RawMacroSlot",
    "SectionSplitter",
    "Sink",
    "SplitKeymap",
    "TransformResult",
    "decode_send_string",
    "extract_macros",
    "match_catalog",
    "step",
]
