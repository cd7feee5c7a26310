"""Live Stats Poller: periodic refresh of auxiliary realtime counters."""
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from survey_analytics.config import get_settings
from survey_analytics.exceptions import ParseFailure
from survey_analytics.models.survey import RealtimeStats
from survey_analytics.pipelines.polling import CancellationToken, PeriodicPoller

logger = logging.getLogger(__name__)

StatsFetcher = Callable[[Optional[str]], Awaitable[Union[RealtimeStats, dict[str, Any]]]]


class LiveStatsPoller(PeriodicPoller[RealtimeStats]):
    """Poll ``fetch(survey_id)`` and keep the latest good ``RealtimeStats``.

    Failures are logged and the previous value is kept; nothing is raised to
    the consumer. ``loading`` stays True until the first poll finishes either
    way.
    """

    name = "live_stats_poller"

    def __init__(
        self,
        fetch: StatsFetcher,
        survey_id: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            interval=interval if interval is not None else settings.realtime_poll_interval,
            timeout=timeout if timeout is not None else settings.survey_api_timeout,
            token=token,
        )
        self._fetcher = fetch
        self.survey_id = survey_id
        self.stats: Optional[RealtimeStats] = None
        self.loading = True
        self.last_error: Optional[str] = None

    async def _fetch(self) -> RealtimeStats:
        result = await self._fetcher(self.survey_id)
        if isinstance(result, RealtimeStats):
            return result
        try:
            return RealtimeStats.model_validate(result)
        except ValidationError as e:
            raise ParseFailure(f"invalid realtime stats: {e}") from e

    def _on_result(self, result: RealtimeStats) -> None:
        self.stats = result
        self.loading = False
        self.last_error = None

    def _on_failure(self, error: Exception) -> None:
        self.loading = False
        self.last_error = str(error)
        logger.warning(f"Realtime stats fetch failed (survey={self.survey_id}): {error}")
