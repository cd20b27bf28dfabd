"""Turn ZSA Oryx keymap exports into a maintainable QMK keymap folder.

This package exposes the ``keymap`` console script, which rewrites the
vendor ``keymap.c`` so its ``SEND_STRING`` macros resolve to a fixed snippet
catalog, and imports the newest Oryx download end to end.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that configures logging and invokes ``app``.

Examples
--------
>>> from oryx_keymap import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
