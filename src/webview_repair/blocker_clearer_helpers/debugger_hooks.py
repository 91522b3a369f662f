"""Normalization of Image File Execution Options ``Debugger`` values.

A debugger value is a command line, not a path: it may be quoted, carry
arguments, reference environment variables or name a bare executable that the
loader finds on ``PATH``. Comparison against the block list happens on the
canonical form produced by :func:`normalize_debugger_path`:

* ``"C:\\Tools\\dbg.exe" -p``      -> ``c:\\tools\\dbg.exe``
* ``%SystemRoot%\\System32\\systray.exe`` -> ``c:\\windows\\system32\\systray.exe``
  (when ``SystemRoot`` is ``C:\\Windows``)
* ``systray.exe``                   -> resolved through ``PATH`` when found,
  otherwise left relative (and therefore never equal to an absolute entry)
* empty or whitespace-only values   -> ``None``

Paths are handled with :mod:`ntpath` so the rules are identical on every host.
"""

from __future__ import annotations

import ntpath
import re
import shutil
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Optional

WhichFunc = Callable[[str], Optional[str]]

_EXE_BOUNDARY = re.compile(r"\.exe(?=\s|$)", re.IGNORECASE)


@dataclass(frozen=True)
class DebuggerValueEntry:
    target_executable: str
    raw_value: str


def extract_executable(raw_value: str) -> Optional[str]:
    """Return the executable part of a debugger command line."""
    text = raw_value.strip()
    if not text:
        return None

    if text.startswith('"'):
        closing = text.find('"', 1)
        candidate = text[1:closing] if closing != -1 else text[1:]
    else:
        match = _EXE_BOUNDARY.search(text)
        if match:
            candidate = text[: match.end()]
        else:
            candidate = text.split(None, 1)[0]

    candidate = candidate.strip()
    if not candidate:
        return None
    return candidate


def normalize_debugger_path(raw_value: str, *, which: WhichFunc = shutil.which) -> Optional[str]:
    """Canonicalize a debugger value for block-list comparison."""
    executable = extract_executable(raw_value)
    if executable is None:
        return None

    expanded = ntpath.expandvars(executable)
    if not ntpath.isabs(expanded) and ntpath.basename(expanded) == expanded:
        located = which(expanded)
        if located:
            expanded = located

    return ntpath.normcase(ntpath.normpath(expanded))


def normalize_block_list(entries: Iterable[str], *, which: WhichFunc = shutil.which) -> FrozenSet[str]:
    normalized = (normalize_debugger_path(entry, which=which) for entry in entries)
    return frozenset(path for path in normalized if path)


__all__ = [
    "DebuggerValueEntry",
    "WhichFunc",
    "extract_executable",
    "normalize_block_list",
    "normalize_debugger_path",
]
