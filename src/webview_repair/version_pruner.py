"""
Version Pruner

Keeps only the newest build directory under the runtime installation root.
Directory names must be purely dotted-numeric (``120.0.2210.91``); anything
else (``EdgeWebView``, ``SetupMetrics``, ``1.0-beta``) is ignored. Versions
compare as integer tuples, so ``2.3.10`` is newer than ``2.3.1``.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .outcome import ActionOutcome, StageResult

STAGE_NAME = "prune_versions"

_VERSION_NAME = re.compile(r"[0-9]+(?:\.[0-9]+)*")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class VersionDirectory:
    version: Tuple[int, ...]
    path: Path


def parse_version(name: str) -> Optional[Tuple[int, ...]]:
    """Return the numeric tuple for a dotted version name, or ``None``."""
    if not _VERSION_NAME.fullmatch(name):
        return None
    return tuple(int(part) for part in name.split("."))


def _is_link(entry: Path) -> bool:
    """Symlinks and NTFS junctions point elsewhere and are never pruned."""
    is_junction = getattr(os.path, "isjunction", None)
    return entry.is_symlink() or bool(is_junction and is_junction(entry))


def list_version_directories(install_root: Path) -> List[VersionDirectory]:
    if not install_root.is_dir():
        return []

    directories = []
    for entry in install_root.iterdir():
        if not entry.is_dir() or _is_link(entry):
            continue
        version = parse_version(entry.name)
        if version is not None:
            directories.append(VersionDirectory(version=version, path=entry))
    return directories


def select_superseded(directories: Sequence[VersionDirectory]) -> Tuple[Optional[VersionDirectory], List[VersionDirectory]]:
    """Split directories into the newest one and everything older."""
    if not directories:
        return None, []
    newest = max(directories, key=lambda directory: directory.version)
    return newest, [directory for directory in directories if directory is not newest]


def _make_force_handler(failures: List[str]) -> Callable[..., None]:
    """Build an rmtree error handler that clears read-only bits and retries once."""

    def _handler(function: Callable[[str], Any], path: str, _error: Any) -> None:
        if function is os.path.islink:
            failures.append(f"{path}: refusing to follow a link")
            return
        try:
            os.chmod(path, stat.S_IWRITE)
            function(path)
        except OSError as exc:  # policy_guard: allow-silent-handler
            failures.append(f"{path}: {exc}")

    return _handler


def force_delete_tree(path: Path) -> ActionOutcome:
    """Recursively delete ``path``; locked files are left behind and reported."""
    failures: List[str] = []
    handler = _make_force_handler(failures)
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=handler)
    else:
        shutil.rmtree(path, onerror=handler)

    if failures:
        logger.debug("Could not fully remove %s: %d entries left", path, len(failures))
        return ActionOutcome.failed(STAGE_NAME, "delete_directory", str(path), "; ".join(failures[:5]))
    logger.info("Removed superseded runtime directory %s", path)
    return ActionOutcome.ok(STAGE_NAME, "delete_directory", str(path))


def prune_versions(install_root: Path) -> StageResult:
    """Delete every version directory except the newest."""
    result = StageResult(STAGE_NAME)
    newest, superseded = select_superseded(list_version_directories(install_root))
    if newest is None:
        logger.debug("No runtime versions under %s", install_root)
        return result

    logger.debug("Keeping runtime version %s", newest.path.name)
    for directory in superseded:
        result.add(force_delete_tree(directory.path))
    return result


__all__ = [
    "STAGE_NAME",
    "VersionDirectory",
    "force_delete_tree",
    "list_version_directories",
    "parse_version",
    "prune_versions",
    "select_superseded",
]
