"""
Repair Run

Drives the fixed stage sequence once:

``clear_blockers -> install -> capture_and_kill_workers -> kill_parents ->
prune_versions -> restore_parents``

Each stage is guarded: an exception escaping a stage is logged, recorded as a
failed outcome and the next stage runs. The installer must exit before any
process is touched so restored parents start against the new runtime.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from . import blocker_clearer, installer_invoker, process_guardian, process_restorer, version_pruner
from .config import RepairSettings
from .outcome import ActionOutcome, OutcomeStatus, StageResult
from .process_guardian_helpers import ParentProcessRecord
from .registry_store import RegistryStore, WindowsRegistryStore
from .run_report import RunReport, write_report

T = TypeVar("T")

STAGE_SEQUENCE = (
    blocker_clearer.STAGE_NAME,
    installer_invoker.STAGE_NAME,
    process_guardian.CAPTURE_STAGE_NAME,
    process_guardian.KILL_PARENTS_STAGE_NAME,
    version_pruner.STAGE_NAME,
    process_restorer.STAGE_NAME,
)

logger = logging.getLogger(__name__)


def _guard_with_value(
    report: RunReport,
    stage_name: str,
    action: Callable[[], Tuple[T, StageResult]],
    fallback: T,
) -> T:
    """Run a stage that hands a value to later stages; ``fallback`` stands in when it raises."""
    logger.debug("Entering stage %s", stage_name)
    try:
        value, stage = action()
    except Exception as exc:  # Stages never abort the run  # policy_guard: allow-silent-handler
        logger.debug("Stage %s failed", stage_name, exc_info=True)
        value, stage = fallback, StageResult(stage_name)
        stage.add(ActionOutcome.failed(stage_name, "stage", stage_name, f"{type(exc).__name__}: {exc}"))
    report.add_stage(stage)
    return value


def _guard(report: RunReport, stage_name: str, action: Callable[[], StageResult]) -> None:
    _guard_with_value(report, stage_name, lambda: (None, action()), None)


def run_repair(
    settings: RepairSettings,
    *,
    registry: Optional[RegistryStore] = None,
    argv: Optional[Sequence[str]] = None,
) -> RunReport:
    """Execute every stage in order and return what happened."""
    report = RunReport()

    def _clear() -> StageResult:
        store = registry if registry is not None else WindowsRegistryStore()
        return blocker_clearer.clear_blockers(store, force=settings.force_clear)

    def _install() -> StageResult:
        return installer_invoker.invoke_installer(
            installer_dir=settings.installer_dir,
            timeout_seconds=settings.installer_timeout_seconds,
            argv=argv,
        )

    def _capture() -> Tuple[List[ParentProcessRecord], StageResult]:
        return process_guardian.capture_and_kill_workers(protected=settings.protected_processes)

    _guard(report, blocker_clearer.STAGE_NAME, _clear)
    _guard(report, installer_invoker.STAGE_NAME, _install)
    parents = _guard_with_value(report, process_guardian.CAPTURE_STAGE_NAME, _capture, [])
    report.parents = list(parents)
    _guard(report, process_guardian.KILL_PARENTS_STAGE_NAME, lambda: process_guardian.kill_parents(parents))
    _guard(report, version_pruner.STAGE_NAME, lambda: version_pruner.prune_versions(settings.install_root))
    _guard(report, process_restorer.STAGE_NAME, lambda: process_restorer.restore_parents(parents))

    logger.info(
        "Repair finished: %d ok, %d skipped, %d failed",
        report.count(OutcomeStatus.OK),
        report.count(OutcomeStatus.SKIPPED),
        report.count(OutcomeStatus.FAILED),
    )

    if settings.report_path is not None:
        write_report(report, settings.report_path)

    return report


__all__ = ["STAGE_SEQUENCE", "run_repair"]
