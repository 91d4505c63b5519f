import logging

from models.schemas import (
    InsightOutcome,
    InsightRequestState,
    InsightStatus,
    PerformanceResult,
    PhysicalInputs,
    PipelineSnapshot,
)

logger = logging.getLogger(__name__)


def terminal_state(outcome: InsightOutcome) -> InsightRequestState:
    status = InsightStatus.RESOLVED if outcome.source == "remote" else InsightStatus.FAILED
    return InsightRequestState(status=status, text=outcome.text)


class EstimationContext:
    """Owns the observable pipeline state.

    Each change swaps in a new frozen PipelineSnapshot, so readers never see a
    result from one request next to insight text from another. Only the latest
    issued sequence may advance the insight state; older resolutions are dropped.
    """

    def __init__(self):
        self._sequence = 0
        self._snapshot = PipelineSnapshot()

    @property
    def snapshot(self) -> PipelineSnapshot:
        return self._snapshot

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def publish(self, sequence: int, inputs: PhysicalInputs, result: PerformanceResult) -> bool:
        if not self._is_current(sequence, "publish"):
            return False
        self._snapshot = PipelineSnapshot(sequence=sequence, inputs=inputs, result=result)
        logger.debug(f"[#{sequence}] result published, insight idle")
        return True

    def mark_in_flight(self, sequence: int) -> bool:
        if not self._is_current(sequence, "mark_in_flight"):
            return False
        if self._snapshot.insight.status == InsightStatus.IN_FLIGHT:
            return True
        if self._snapshot.insight.status != InsightStatus.IDLE:
            logger.warning(f"[#{sequence}] cannot move insight from {self._snapshot.insight.status.value} to in_flight")
            return False
        self._replace_insight(InsightRequestState(status=InsightStatus.IN_FLIGHT))
        logger.debug(f"[#{sequence}] insight in flight")
        return True

    def complete(self, sequence: int, outcome: InsightOutcome) -> bool:
        if not self._is_current(sequence, "complete"):
            return False
        state = terminal_state(outcome)
        self._snapshot = self._snapshot.model_copy(update={"insight": state, "notices": list(outcome.notices)})
        logger.debug(f"[#{sequence}] insight {state.status.value}")
        return True

    def _is_current(self, sequence: int, action: str) -> bool:
        if sequence != self._sequence:
            logger.warning(f"Discarding stale {action} for request #{sequence}; latest is #{self._sequence}")
            return False
        return True

    def _replace_insight(self, insight: InsightRequestState) -> None:
        self._snapshot = self._snapshot.model_copy(update={"insight": insight})
