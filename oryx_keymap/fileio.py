"""Write generated files so a failed run never leaves a partial artifact."""

from __future__ import annotations

import collections.abc as cabc
import os
import tempfile
from pathlib import Path

_FILE_MODE = 0o644


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step.

    The content goes to a temporary file next to ``path`` which is then
    renamed over it; on any error the temporary file is removed and ``path``
    is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}-", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.chmod(tmp, _FILE_MODE)
        os.replace(tmp, path)
    finally:
        tmp.unlink(missing_ok=True)


def write_all(outputs: cabc.Mapping[Path, str]) -> list[Path]:
    """Write every rendered output with :func:`write_atomic`.

    Callers render all outputs before calling this, so a rendering error
    aborts the run before any file is touched.
    """
    written: list[Path] = []
    for path, text in outputs.items():
        write_atomic(path, text)
        written.append(path)
    return written


__all__ = ["write_all", "write_atomic"]
