"""Relaunch captured parent processes with their original command lines."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from .outcome import ActionOutcome, StageResult
from .process_guardian_helpers import ParentProcessRecord
from .process_launch import hidden_window_options

STAGE_NAME = "restore_parents"

logger = logging.getLogger(__name__)


def relaunch(record: ParentProcessRecord) -> ActionOutcome:
    """Start ``record.command_line`` hidden and detached; the new process is not tracked."""
    target = f"{record.name} (PID {record.pid})"
    if not record.command_line:
        return ActionOutcome.skipped(STAGE_NAME, "relaunch", target, "command line unavailable")

    try:
        subprocess.Popen(
            record.command_line,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            **hidden_window_options(),
        )
    except (OSError, ValueError, subprocess.SubprocessError) as exc:  # policy_guard: allow-silent-handler
        return ActionOutcome.failed(STAGE_NAME, "relaunch", target, str(exc))

    logger.info("Relaunched %s", record.name)
    return ActionOutcome.ok(STAGE_NAME, "relaunch", target, record.command_line)


def restore_parents(records: Sequence[ParentProcessRecord]) -> StageResult:
    result = StageResult(STAGE_NAME)
    for record in records:
        result.add(relaunch(record))
    return result


__all__ = ["STAGE_NAME", "relaunch", "restore_parents"]
