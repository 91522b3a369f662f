"""JSON report of a repair run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import orjson

from .outcome import OutcomeStatus, StageResult
from .process_guardian_helpers import ParentProcessRecord

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    stages: List[StageResult] = field(default_factory=list)
    parents: List[ParentProcessRecord] = field(default_factory=list)

    def add_stage(self, stage: StageResult) -> StageResult:
        self.stages.append(stage)
        return stage

    def stage(self, name: str) -> StageResult:
        for stage in self.stages:
            if stage.stage == name:
                return stage
        raise KeyError(name)

    @property
    def stage_names(self) -> List[str]:
        return [stage.stage for stage in self.stages]

    def count(self, status: OutcomeStatus) -> int:
        return sum(stage.count(status) for stage in self.stages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stages": [
                {"stage": stage.stage, "outcomes": [outcome.to_dict() for outcome in stage.outcomes]}
                for stage in self.stages
            ],
            "parents": [record.to_dict() for record in self.parents],
            "totals": {status.value: self.count(status) for status in OutcomeStatus},
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2)


def write_report(report: RunReport, path: Path) -> bool:
    """Write the report; failures are logged and reported as ``False``."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(report.to_json())
    except OSError as exc:  # Report is optional  # policy_guard: allow-silent-handler
        logger.warning("Could not write run report to %s: %s", path, exc)
        return False
    logger.debug("Wrote run report to %s", path)
    return True


__all__ = ["RunReport", "write_report"]
