"""Result records for fire-and-forget OS operations.

Every registry deletion, process termination, directory removal and launch
returns an :class:`ActionOutcome`. Callers decide per policy whether a failed
outcome matters; in this tool they never do, so stages hand them to
:func:`discard_failure`, which only logs them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ActionOutcome:
    stage: str
    action: str
    target: str
    status: OutcomeStatus
    detail: str = ""

    @classmethod
    def ok(cls, stage: str, action: str, target: str, detail: str = "") -> "ActionOutcome":
        return cls(stage, action, target, OutcomeStatus.OK, detail)

    @classmethod
    def skipped(cls, stage: str, action: str, target: str, detail: str = "") -> "ActionOutcome":
        return cls(stage, action, target, OutcomeStatus.SKIPPED, detail)

    @classmethod
    def failed(cls, stage: str, action: str, target: str, detail: str = "") -> "ActionOutcome":
        return cls(stage, action, target, OutcomeStatus.FAILED, detail)

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["status"] = self.status.value
        return payload


def discard_failure(outcome: ActionOutcome) -> ActionOutcome:
    """Log a failed outcome and let the run continue."""
    if outcome.status is OutcomeStatus.FAILED:
        logger.debug(
            "Ignoring failed %s on %s during %s: %s",
            outcome.action,
            outcome.target,
            outcome.stage,
            outcome.detail,
        )
    return outcome


@dataclass
class StageResult:
    """Outcomes produced by a single stage of the run."""

    stage: str
    outcomes: List[ActionOutcome] = field(default_factory=list)

    def add(self, outcome: ActionOutcome) -> ActionOutcome:
        self.outcomes.append(discard_failure(outcome))
        return outcome

    def extend(self, outcomes: List[ActionOutcome]) -> None:
        for outcome in outcomes:
            self.add(outcome)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)


__all__ = ["ActionOutcome", "OutcomeStatus", "StageResult", "discard_failure"]
