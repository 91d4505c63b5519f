import logging

import config
from agents.context import EstimationContext
from models.errors import InsightServiceError
from models.schemas import InsightOutcome, PerformanceResult, PhysicalInputs
from tools.notifications import LoggingNotifier
from .gemini_api import GeminiAPIClient, extract_text
from . import prompt

logger = logging.getLogger(__name__)


def build_prompt(result: PerformanceResult, inputs: PhysicalInputs, currency: str = config.CURRENCY_SYMBOL) -> str:
    return prompt.TASK_PROMPT.format(
        currency=currency,
        **inputs.model_dump(),
        **result.model_dump(),
    )


class PerformanceInsightAgent:
    """Turns a performance result into improvement suggestions from Gemini.

    Never raises for service failures: those resolve to a fallback outcome and a
    destructive notice, so the numeric result stays usable.
    """

    def __init__(self, client: GeminiAPIClient, notifier: LoggingNotifier, currency: str = config.CURRENCY_SYMBOL):
        self.name = "performance_insight_agent"
        self.client = client
        self.notifier = notifier
        self.currency = currency

    async def run(
        self,
        result: PerformanceResult,
        inputs: PhysicalInputs,
        context: EstimationContext,
        sequence: int,
    ) -> InsightOutcome:
        context.mark_in_flight(sequence)
        outcome = InsightOutcome(text=prompt.CONNECTION_FALLBACK, source="fallback")
        try:
            data = await self.client.generate_content(build_prompt(result, inputs, self.currency))
            text = extract_text(data)
            if text:
                outcome = InsightOutcome(text=text, source="remote")
            else:
                logger.info(f"[{self.name}] #{sequence}: response had no candidate text")
                outcome = InsightOutcome(text=prompt.NO_SUGGESTIONS_FALLBACK, source="fallback")
        except InsightServiceError as e:
            logger.warning(f"[{self.name}] #{sequence}: {e}")
            notice = self.notifier.notify(prompt.ERROR_NOTICE_TITLE, prompt.ERROR_NOTICE_DESCRIPTION, "destructive")
            outcome = outcome.model_copy(update={"notices": [notice]})
        finally:
            context.complete(sequence, outcome)
        return outcome
