"""Pure matching helpers used by the blocker clearer."""

from .debugger_hooks import (
    DebuggerValueEntry,
    extract_executable,
    normalize_block_list,
    normalize_debugger_path,
)
from .registrations import registration_matches

__all__ = [
    "DebuggerValueEntry",
    "extract_executable",
    "normalize_block_list",
    "normalize_debugger_path",
    "registration_matches",
]
