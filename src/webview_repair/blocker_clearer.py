"""
Blocker Clearer

Removes registry state that stops the runtime installer or the runtime itself
from starting:

1. ``Debugger`` hooks under Image File Execution Options for the runtime's
   executables. Only hooks pointing at a known-bad debugger are removed, so
   legitimate debugging setups survive. The force flag removes all of them.
2. Stale update-client registrations whose key name contains the product name.

Per-entry failures are recorded as failed outcomes; the stage never raises for
an individual entry.
"""

from __future__ import annotations

import logging
import shutil
from typing import FrozenSet, Iterable, List, Optional

from .blocker_clearer_helpers import (
    DebuggerValueEntry,
    normalize_block_list,
    normalize_debugger_path,
    registration_matches,
)
from .blocker_clearer_helpers.debugger_hooks import WhichFunc
from .constants import (
    DEBUGGER_BLOCK_LIST,
    DEBUGGER_TARGET_EXECUTABLES,
    DEBUGGER_VALUE_NAME,
    IMAGE_FILE_EXECUTION_OPTIONS_KEY,
    PRODUCT_NAME,
    UPDATE_CLIENT_REGISTRATION_KEY,
)
from .outcome import ActionOutcome, StageResult
from .registry_store import RegistryStore

STAGE_NAME = "clear_blockers"

logger = logging.getLogger(__name__)


def should_remove_debugger(
    entry: DebuggerValueEntry,
    *,
    force: bool,
    blocked_paths: FrozenSet[str],
    which: WhichFunc = shutil.which,
) -> bool:
    """Decide whether a debugger hook is removed."""
    if force:
        return True
    normalized = normalize_debugger_path(entry.raw_value, which=which)
    return normalized is not None and normalized in blocked_paths


def _read_debugger_entry(registry: RegistryStore, executable: str) -> tuple[Optional[DebuggerValueEntry], Optional[ActionOutcome]]:
    key_path = f"{IMAGE_FILE_EXECUTION_OPTIONS_KEY}\\{executable}"
    try:
        raw_value = registry.read_value(key_path, DEBUGGER_VALUE_NAME)
    except OSError as exc:  # policy_guard: allow-silent-handler
        return None, ActionOutcome.failed(STAGE_NAME, "read_debugger", executable, str(exc))
    if raw_value is None:
        return None, ActionOutcome.skipped(STAGE_NAME, "read_debugger", executable, "no debugger hook")
    return DebuggerValueEntry(target_executable=executable, raw_value=raw_value), None


def _delete_debugger(registry: RegistryStore, entry: DebuggerValueEntry) -> ActionOutcome:
    key_path = f"{IMAGE_FILE_EXECUTION_OPTIONS_KEY}\\{entry.target_executable}"
    try:
        registry.delete_value(key_path, DEBUGGER_VALUE_NAME)
    except FileNotFoundError:  # policy_guard: allow-silent-handler
        return ActionOutcome.skipped(STAGE_NAME, "delete_debugger", entry.target_executable, "already removed")
    except OSError as exc:  # policy_guard: allow-silent-handler
        return ActionOutcome.failed(STAGE_NAME, "delete_debugger", entry.target_executable, str(exc))
    logger.info("Removed debugger hook for %s (%s)", entry.target_executable, entry.raw_value)
    return ActionOutcome.ok(STAGE_NAME, "delete_debugger", entry.target_executable, entry.raw_value)


def clear_debugger_hooks(
    registry: RegistryStore,
    *,
    force: bool,
    targets: Iterable[str] = DEBUGGER_TARGET_EXECUTABLES,
    block_list: Iterable[str] = DEBUGGER_BLOCK_LIST,
    which: WhichFunc = shutil.which,
) -> List[ActionOutcome]:
    """Inspect each target's debugger hook and delete the ones that block the runtime."""
    blocked_paths = normalize_block_list(block_list, which=which)
    outcomes: List[ActionOutcome] = []

    for executable in targets:
        entry, read_outcome = _read_debugger_entry(registry, executable)
        if entry is None:
            outcomes.append(read_outcome)
            continue

        if should_remove_debugger(entry, force=force, blocked_paths=blocked_paths, which=which):
            outcomes.append(_delete_debugger(registry, entry))
        else:
            logger.debug("Keeping debugger hook for %s: %s", executable, entry.raw_value)
            outcomes.append(ActionOutcome.skipped(STAGE_NAME, "delete_debugger", executable, "debugger not block-listed"))

    return outcomes


def remove_stale_registrations(
    registry: RegistryStore,
    *,
    location: str = UPDATE_CLIENT_REGISTRATION_KEY,
    product_name: str = PRODUCT_NAME,
) -> List[ActionOutcome]:
    """Delete every registration subkey whose name contains the product name."""
    try:
        entry_names = registry.list_subkeys(location)
    except OSError as exc:  # policy_guard: allow-silent-handler
        return [ActionOutcome.failed(STAGE_NAME, "list_registrations", location, str(exc))]

    outcomes: List[ActionOutcome] = []
    for entry_name in entry_names:
        if not registration_matches(entry_name, product_name):
            continue
        key_path = f"{location}\\{entry_name}"
        try:
            registry.delete_key_tree(key_path)
        except FileNotFoundError:  # policy_guard: allow-silent-handler
            outcomes.append(ActionOutcome.skipped(STAGE_NAME, "delete_registration", entry_name, "already removed"))
            continue
        except OSError as exc:  # policy_guard: allow-silent-handler
            outcomes.append(ActionOutcome.failed(STAGE_NAME, "delete_registration", entry_name, str(exc)))
            continue
        logger.info("Removed stale registration %s", entry_name)
        outcomes.append(ActionOutcome.ok(STAGE_NAME, "delete_registration", entry_name))

    return outcomes


def clear_blockers(registry: RegistryStore, *, force: bool, which: WhichFunc = shutil.which) -> StageResult:
    """Run both clean-ups and collect their outcomes."""
    result = StageResult(STAGE_NAME)
    result.extend(clear_debugger_hooks(registry, force=force, which=which))
    result.extend(remove_stale_registrations(registry))
    return result


__all__ = [
    "STAGE_NAME",
    "clear_blockers",
    "clear_debugger_hooks",
    "remove_stale_registrations",
    "should_remove_debugger",
]
