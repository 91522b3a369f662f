from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Any, Dict, Optional


@dataclass(frozen=True)
class ParentProcessRecord:
    """A process that hosted a runtime worker and is restarted after the repair."""

    name: str
    pid: int
    command_line: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "pid": self.pid, "command_line": self.command_line}


class ParentDisposition(Enum):
    RECORD = "record"
    PROTECTED = "protected"
    WORKER = "worker"


def classify_parent(parent_name: str, *, worker_name: str, protected: AbstractSet[str]) -> ParentDisposition:
    """Decide what happens to a worker's parent; names compare case-insensitively."""
    folded = parent_name.casefold()
    if folded in protected:
        return ParentDisposition.PROTECTED
    if folded == worker_name.casefold():
        return ParentDisposition.WORKER
    return ParentDisposition.RECORD


__all__ = ["ParentDisposition", "ParentProcessRecord", "classify_parent"]
