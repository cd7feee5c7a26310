"""One respondent's view of one module: load answers, aggregate, refresh on submit."""
import asyncio
import logging
from typing import Optional, Protocol, Sequence

from survey_analytics.config import get_settings
from survey_analytics.exceptions import FetchFailure, ParseFailure
from survey_analytics.models.enums import DataSource, GroupingDimension, SurveyModule
from survey_analytics.models.survey import (
    AggregationResult,
    LoadedResponses,
    ModuleSummary,
    Question,
    SurveySubmitted,
)
from survey_analytics.pipelines.events import SubmissionChannel, matches
from survey_analytics.pipelines.reconciler import AnalyticsReconciler
from survey_analytics.scoring.aggregator import ResponseAggregator
from survey_analytics.services.mock_data import mock_answers, synthesize_answers
from survey_analytics.services.question_bank import get_question_bank

logger = logging.getLogger(__name__)


class ResponseSource(Protocol):
    async def fetch_answers_and_questions(
        self, module: SurveyModule, user_id: str
    ) -> tuple[list[Question], dict[str, str]]: ...


class ModuleResponseSession:
    """Load a user's answers for a module and keep its summary current.

    On ``FetchFailure``/``ParseFailure`` the built-in question bank is paired
    with mock answers, or with a synthesized answer set when the mock data
    covers none of the questions, so the dashboard stays populated. A
    ``SurveySubmitted`` notification on ``channel`` that matches this module
    and user triggers an immediate reload.
    """

    def __init__(
        self,
        module: SurveyModule,
        user_id: str,
        source: ResponseSource,
        channel: Optional[SubmissionChannel] = None,
        aggregator: Optional[ResponseAggregator] = None,
        reconciler: Optional[AnalyticsReconciler] = None,
        question_bank: Optional[Sequence[Question]] = None,
        enable_fallback: Optional[bool] = None,
    ):
        self.module = SurveyModule(module)
        self.user_id = user_id
        self.source = source
        self.aggregator = aggregator or ResponseAggregator()
        self.reconciler = reconciler
        self.question_bank = list(question_bank) if question_bank is not None else None
        self.enable_fallback = (
            enable_fallback if enable_fallback is not None else get_settings().enable_mock_fallback
        )
        self.loaded: Optional[LoadedResponses] = None
        self.summary = ModuleSummary()
        self.reload_pending = False
        self._closed = False
        self._issued = 0
        self._last_applied = 0
        self._reloads: set[asyncio.Task] = set()
        self._subscription = channel.subscribe(self._on_submitted) if channel is not None else None

    def _fallback(self) -> LoadedResponses:
        questions = self.question_bank if self.question_bank is not None else get_question_bank(self.module)
        if not self.enable_fallback:
            return LoadedResponses(
                module=self.module, user_id=self.user_id,
                questions=questions, source=DataSource.UNAVAILABLE,
            )
        answers = mock_answers(self.module, questions)
        source = DataSource.MOCK
        if not answers:
            answers = synthesize_answers(questions)
            source = DataSource.SYNTHETIC
        return LoadedResponses(
            module=self.module, user_id=self.user_id,
            questions=questions, answers=answers, source=source,
        )

    async def load(self) -> ModuleSummary:
        """Fetch (or fall back), re-aggregate and push the local percentage to the reconciler.

        Loads are numbered when issued; a load that completes after a newer
        one has been applied is discarded.
        """
        self._issued += 1
        seq = self._issued
        try:
            questions, answers = await self.source.fetch_answers_and_questions(self.module, self.user_id)
            loaded = LoadedResponses(
                module=self.module, user_id=self.user_id,
                questions=questions, answers=answers, source=DataSource.BACKEND,
            )
        except (FetchFailure, ParseFailure) as e:
            logger.warning(f"Falling back for {self.module.value}/{self.user_id}: {e}")
            loaded = self._fallback()

        if self._closed:
            return self.summary
        if seq <= self._last_applied:
            logger.debug(
                f"Load #{seq} for {self.module.value}/{self.user_id} discarded; "
                f"#{self._last_applied} already applied"
            )
            return self.summary
        self._last_applied = seq
        self.loaded = loaded
        self.summary = self.aggregator.summarize(loaded.questions, loaded.answers)
        self.reload_pending = False
        if self.reconciler is not None:
            self.reconciler.update_local(self.summary.positive_percentage)
        logger.info(
            f"Loaded {self.module.value}/{self.user_id} from {loaded.source.value}: "
            f"{self.summary.positive_responses}/{self.summary.total_responses} positive"
        )
        return self.summary

    def breakdown(self, dimension: GroupingDimension = GroupingDimension.SECTION) -> AggregationResult:
        """Aggregate the currently loaded answers with a grouped breakdown."""
        if self.loaded is None:
            return AggregationResult(summary=ModuleSummary(), dimension=GroupingDimension(dimension), groups=[])
        return self.aggregator.aggregate(self.loaded.questions, self.loaded.answers, dimension)

    def _on_submitted(self, event: SurveySubmitted) -> None:
        if self._closed or not matches(event, self.module, self.user_id):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to schedule on; the next load() picks it up.
            self.reload_pending = True
            logger.info(f"Submission for {self.module.value}/{self.user_id} queued; no running loop")
            return
        task = loop.create_task(self.load())
        self._reloads.add(task)
        task.add_done_callback(self._reloads.discard)

    async def wait_for_reloads(self) -> None:
        """Wait for reloads triggered by submission notifications."""
        while self._reloads:
            await asyncio.gather(*list(self._reloads), return_exceptions=True)

    def close(self) -> None:
        """Unsubscribe and cancel pending reloads; no updates are applied afterwards."""
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
        for task in list(self._reloads):
            task.cancel()
