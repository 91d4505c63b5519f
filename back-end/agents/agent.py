import asyncio
import logging
from typing import Optional, Set, Tuple

import config
from models.errors import InputValidationError
from models.schemas import (
    EstimationReport,
    EstimatorConstants,
    InsightOutcome,
    PerformanceResult,
    PipelineSnapshot,
    RawInputs,
)
from tools.notifications import LoggingNotifier
from .context import EstimationContext, terminal_state
from .subagents.input_validator.validator import validate
from .subagents.performance_insights.agent import PerformanceInsightAgent
from .subagents.performance_insights.gemini_api import GeminiAPIClient
from .subagents.solar_calculator.calculator import estimate

logger = logging.getLogger(__name__)


class EstimationPipeline:
    """Validator -> estimator -> insight agent.

    Validation and estimation run synchronously; the insight request is the only
    suspension point. Overlapping calls are not cancelled, the context simply
    ignores resolutions from anything but the latest request.
    """

    def __init__(
        self,
        insight_agent: PerformanceInsightAgent,
        notifier: LoggingNotifier,
        constants: EstimatorConstants,
        context: Optional[EstimationContext] = None,
    ):
        self.insight_agent = insight_agent
        self.notifier = notifier
        self.constants = constants
        self.context = context or EstimationContext()
        self._pending: Set[asyncio.Task] = set()

    @property
    def snapshot(self) -> PipelineSnapshot:
        return self.context.snapshot

    def submit(self, raw: RawInputs) -> Tuple[int, PerformanceResult, "asyncio.Task[InsightOutcome]"]:
        """Estimate now and schedule the insight request.

        Must be called from a running event loop. Raises InputValidationError,
        after notifying, without computing anything.
        """
        try:
            inputs = validate(raw)
        except InputValidationError as e:
            logger.info(f"Rejected inputs ({e.code}): {e.fields}")
            e.notices = [self.notifier.notify(e.title, e.message, "destructive")]
            raise

        result = estimate(inputs, self.constants)
        sequence = self.context.next_sequence()
        self.context.publish(sequence, inputs, result)
        self.context.mark_in_flight(sequence)
        logger.info(f"[#{sequence}] power={result.power_output:.2f} W, monthly={result.monthly_energy:.2f} kWh")

        task = asyncio.create_task(self.insight_agent.run(result, inputs, self.context, sequence))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(self._log_failure)
        return sequence, result, task

    async def run(self, raw: RawInputs) -> EstimationReport:
        sequence, result, task = self.submit(raw)
        outcome = await task
        # A newer request may own the visible state by now; report this request's own outcome.
        return EstimationReport(
            sequence=sequence,
            result=result,
            insight=outcome,
            state=terminal_state(outcome),
            notices=outcome.notices,
        )

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Insight task failed: {task.exception()!r}")

    async def wait_for_pending(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def build_pipeline(
    client: Optional[GeminiAPIClient] = None,
    notifier: Optional[LoggingNotifier] = None,
    constants: Optional[EstimatorConstants] = None,
) -> EstimationPipeline:
    """Factory wiring the pipeline from config, with optional overrides for tests."""
    notifier = notifier or LoggingNotifier()
    constants = constants or EstimatorConstants(
        derate_factor=config.SOLAR_DERATE_FACTOR,
        emission_factor=config.SOLAR_EMISSION_FACTOR,
        days_per_month=config.SOLAR_DAYS_PER_MONTH,
    )
    agent = PerformanceInsightAgent(client=client or GeminiAPIClient(), notifier=notifier)
    return EstimationPipeline(insight_agent=agent, notifier=notifier, constants=constants)
