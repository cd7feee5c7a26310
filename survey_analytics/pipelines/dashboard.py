"""Module dashboard: the consuming view that owns the timers.

Wires one ``ModuleResponseSession`` to an ``AnalyticsReconciler`` and a
``LiveStatsPoller``. Both pollers share the dashboard's cancellation token,
so tearing the dashboard down stops every timer and in-flight fetch.
"""
import logging
from typing import Any, Optional

from survey_analytics.models.enums import GroupingDimension, SurveyModule
from survey_analytics.pipelines.events import SubmissionChannel
from survey_analytics.pipelines.module_session import ModuleResponseSession
from survey_analytics.pipelines.polling import CancellationToken
from survey_analytics.pipelines.realtime_stats import LiveStatsPoller
from survey_analytics.pipelines.reconciler import AnalyticsReconciler
from survey_analytics.services.survey_api import SurveyApiClient

logger = logging.getLogger(__name__)


class ModuleDashboard:
    """Summary, reconciled module percentage and live stats for one module/user."""

    def __init__(
        self,
        module: SurveyModule,
        user_id: str,
        client: SurveyApiClient,
        channel: Optional[SubmissionChannel] = None,
        survey_id: Optional[str] = None,
        module_interval: Optional[float] = None,
        realtime_interval: Optional[float] = None,
    ):
        self.module = SurveyModule(module)
        self.channel = channel or SubmissionChannel()
        self.token = CancellationToken()
        self.reconciler = AnalyticsReconciler(
            self.module,
            client.fetch_module_analytics,
            interval=module_interval,
            token=self.token,
        )
        self.live_stats = LiveStatsPoller(
            client.fetch_realtime_stats,
            survey_id=survey_id,
            interval=realtime_interval,
            token=self.token,
        )
        self.session = ModuleResponseSession(
            self.module,
            user_id,
            client,
            channel=self.channel,
            reconciler=self.reconciler,
        )

    async def start(self) -> None:
        """Load the user's answers, then start both pollers."""
        await self.session.load()
        self.reconciler.start()
        self.live_stats.start()

    async def stop(self) -> None:
        self.session.close()
        await self.reconciler.stop()
        await self.live_stats.stop()

    async def __aenter__(self) -> "ModuleDashboard":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    def view(self, dimension: GroupingDimension = GroupingDimension.SECTION) -> dict[str, Any]:
        """Everything the module page renders, as plain data."""
        result = self.session.breakdown(dimension)
        stats = self.live_stats.stats
        return {
            "module": self.module.value,
            "summary": result.summary.model_dump(exclude={"grouped_by_section"}),
            "sections": {
                name: [q.id for q in questions]
                for name, questions in result.summary.grouped_by_section.items()
            },
            "groups": [g.model_dump() for g in result.groups or []],
            "module_average": self.reconciler.displayed_percentage,
            "analytics": self.reconciler.snapshot().to_dict(),
            "realtime": stats.model_dump() if stats else None,
            "realtime_loading": self.live_stats.loading,
        }
