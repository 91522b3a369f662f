"""Thin psutil wrappers that turn process-table races into plain values.

psutil exposes a process's command line only as the argument list Windows
parsed from it, so :func:`read_command_line` re-quotes that list with
``subprocess.list2cmdline``. The result starts the same program with the same
arguments for programs that parse their command line the standard way, but it
is not byte-identical to the original string: ``/arg:"a b"`` comes back as
``"/arg:a b"``.
"""

import logging
import subprocess
from typing import Any, List, Optional

from ..outcome import ActionOutcome

logger = logging.getLogger(__name__)


def import_psutil() -> Any:
    """Import psutil or raise a helpful error."""
    try:
        import psutil

    except ImportError as import_exc:
        raise RuntimeError("psutil is required to inspect and terminate runtime processes but is not available") from import_exc
    else:
        return psutil


def find_worker_processes(psutil: Any, worker_name: str) -> List[Any]:
    """Return running processes whose executable name equals ``worker_name``."""
    target = worker_name.casefold()
    workers = []
    for proc in psutil.process_iter(["pid", "name"]):
        name = proc.info.get("name") or ""
        if name.casefold() == target:
            workers.append(proc)
    logger.debug("Found %d %s processes", len(workers), worker_name)
    return workers


def lookup_parent(proc: Any, psutil: Any) -> Optional[Any]:
    try:
        return proc.parent()
    except (psutil.NoSuchProcess, psutil.AccessDenied):  # policy_guard: allow-silent-handler
        logger.debug("Parent of process %s could not be resolved", proc.pid)
        return None


def read_name(proc: Any, psutil: Any) -> Optional[str]:
    try:
        return proc.name()
    except (psutil.NoSuchProcess, psutil.AccessDenied):  # policy_guard: allow-silent-handler
        return None


def read_command_line(proc: Any, psutil: Any) -> Optional[str]:
    """Return the process command line quoted for ``CreateProcess``, or ``None``."""
    try:
        args = proc.cmdline()
    except (psutil.NoSuchProcess, psutil.AccessDenied, OSError):  # policy_guard: allow-silent-handler
        logger.debug("Command line of process %s is unavailable", proc.pid)
        return None
    if not args:
        return None
    return subprocess.list2cmdline(args)


def force_kill(proc: Any, psutil: Any, *, stage: str, label: str) -> ActionOutcome:
    """Kill a process; one that already exited counts as success."""
    target = f"{label} (PID {proc.pid})"
    try:
        proc.kill()
    except psutil.NoSuchProcess:  # policy_guard: allow-silent-handler
        return ActionOutcome.ok(stage, "kill", target, "already exited")
    except psutil.AccessDenied as exc:  # policy_guard: allow-silent-handler
        return ActionOutcome.failed(stage, "kill", target, f"access denied: {exc}")
    logger.info("Killed %s", target)
    return ActionOutcome.ok(stage, "kill", target)


__all__ = [
    "find_worker_processes",
    "force_kill",
    "import_psutil",
    "lookup_parent",
    "read_command_line",
    "read_name",
]
