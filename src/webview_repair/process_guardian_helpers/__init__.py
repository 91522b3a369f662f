"""Helpers for capturing and terminating runtime worker process trees."""

from .parent_record import ParentDisposition, ParentProcessRecord, classify_parent
from .process_table import (
    find_worker_processes,
    force_kill,
    import_psutil,
    lookup_parent,
    read_command_line,
    read_name,
)

__all__ = [
    "ParentDisposition",
    "ParentProcessRecord",
    "classify_parent",
    "find_worker_processes",
    "force_kill",
    "import_psutil",
    "lookup_parent",
    "read_command_line",
    "read_name",
]
