"""
Process Guardian

Stops everything that holds the old runtime open, in two passes:

1. For every running worker, resolve its parent. Unless the parent is a
   protected OS process, remember the parent's name, PID and command line, then
   kill the worker right away. The parent is captured before anything dies so
   its identity is never lost.
2. Kill every remembered parent, once per PID.

The returned records are the only state carried into the restore stage.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, Dict, List, Optional, Sequence, Tuple

from .constants import PROTECTED_PROCESS_NAMES, WORKER_PROCESS_NAME
from .outcome import ActionOutcome, StageResult
from .process_guardian_helpers import (
    ParentDisposition,
    ParentProcessRecord,
    classify_parent,
    find_worker_processes,
    force_kill,
    import_psutil,
    lookup_parent,
    read_command_line,
    read_name,
)

CAPTURE_STAGE_NAME = "capture_and_kill_workers"
KILL_PARENTS_STAGE_NAME = "kill_parents"

logger = logging.getLogger(__name__)


def _capture_parent(
    worker: Any,
    psutil: Any,
    *,
    worker_name: str,
    protected: AbstractSet[str],
) -> Tuple[Optional[ParentDisposition], Optional[ParentProcessRecord], str]:
    """Return the parent's disposition, its record when it qualifies and a reason."""
    parent = lookup_parent(worker, psutil)
    if parent is None:
        return None, None, "no resolvable parent"

    parent_name = read_name(parent, psutil)
    if parent_name is None:
        return None, None, "parent exited before inspection"

    disposition = classify_parent(parent_name, worker_name=worker_name, protected=protected)
    if disposition is ParentDisposition.PROTECTED:
        return disposition, None, f"parent {parent_name} is protected"
    if disposition is ParentDisposition.WORKER:
        return disposition, None, f"parent {parent_name} is a worker"

    record = ParentProcessRecord(
        name=parent_name,
        pid=parent.pid,
        command_line=read_command_line(parent, psutil),
    )
    return disposition, record, f"parent {parent_name} (PID {parent.pid})"


def capture_and_kill_workers(
    *,
    worker_name: str = WORKER_PROCESS_NAME,
    protected: AbstractSet[str] = PROTECTED_PROCESS_NAMES,
) -> Tuple[List[ParentProcessRecord], StageResult]:
    """Record qualifying parents and kill their workers.

    Workers with no resolvable parent or a protected parent are left alone.
    A parent hosting several workers is recorded once.
    """
    psutil = import_psutil()
    result = StageResult(CAPTURE_STAGE_NAME)
    records: Dict[int, ParentProcessRecord] = {}

    for worker in find_worker_processes(psutil, worker_name):
        disposition, record, reason = _capture_parent(worker, psutil, worker_name=worker_name, protected=protected)
        label = f"{worker_name} (PID {worker.pid})"

        if disposition is None or disposition is ParentDisposition.PROTECTED:
            logger.debug("Skipping %s: %s", label, reason)
            result.add(ActionOutcome.skipped(CAPTURE_STAGE_NAME, "kill", label, reason))
            continue

        if record is not None and record.pid not in records:
            records[record.pid] = record
            logger.info("Captured %s", reason)

        result.add(force_kill(worker, psutil, stage=CAPTURE_STAGE_NAME, label=worker_name))

    return list(records.values()), result


def kill_parents(records: Sequence[ParentProcessRecord]) -> StageResult:
    """Kill each recorded parent; a PID now owned by another program is skipped."""
    result = StageResult(KILL_PARENTS_STAGE_NAME)
    if not records:
        return result

    psutil = import_psutil()
    seen: set[int] = set()
    for record in records:
        if record.pid in seen:
            continue
        seen.add(record.pid)
        result.add(_kill_parent(record, psutil))

    return result


def _kill_parent(record: ParentProcessRecord, psutil: Any) -> ActionOutcome:
    target = f"{record.name} (PID {record.pid})"
    try:
        proc = psutil.Process(record.pid)
    except psutil.NoSuchProcess:  # policy_guard: allow-silent-handler
        return ActionOutcome.ok(KILL_PARENTS_STAGE_NAME, "kill", target, "already exited")
    except psutil.AccessDenied as exc:  # policy_guard: allow-silent-handler
        return ActionOutcome.failed(KILL_PARENTS_STAGE_NAME, "kill", target, f"access denied: {exc}")

    current_name = read_name(proc, psutil)
    if current_name is not None and current_name.casefold() != record.name.casefold():
        return ActionOutcome.skipped(KILL_PARENTS_STAGE_NAME, "kill", target, f"PID now belongs to {current_name}")

    return force_kill(proc, psutil, stage=KILL_PARENTS_STAGE_NAME, label=record.name)


__all__ = [
    "CAPTURE_STAGE_NAME",
    "KILL_PARENTS_STAGE_NAME",
    "capture_and_kill_workers",
    "kill_parents",
]
