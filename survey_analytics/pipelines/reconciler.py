"""Analytics Reconciler: local module percentage vs. polled server analytics.

States
------
  LOCAL_ONLY      initial; shows the Response Aggregator's local percentage
  AUTHORITATIVE   a numeric ``positive_score`` was received; shows it, rounded
  STALE_FALLBACK  polls are failing and no server value was ever received;
                  shows the local percentage

Once authoritative, a module never goes back: failed polls keep the last
server value on screen and the next tick retries. A successful poll whose
body has no numeric ``positive_score`` changes nothing.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from survey_analytics.config import get_settings
from survey_analytics.exceptions import ParseFailure
from survey_analytics.models.enums import ReconcilerState, SurveyModule, VALID_STATE_TRANSITIONS
from survey_analytics.models.survey import AuthoritativeScore
from survey_analytics.pipelines.polling import CancellationToken, PeriodicPoller
from survey_analytics.scoring.utils import round_percentage

logger = logging.getLogger(__name__)

AnalyticsFetcher = Callable[[SurveyModule], Awaitable[Union[AuthoritativeScore, dict[str, Any], None]]]


@dataclass
class ReconcilerSnapshot:
    """Point-in-time view of a reconciler, for display and logging."""

    module: SurveyModule
    state: ReconcilerState
    displayed_percentage: int
    local_percentage: int
    authoritative_score: Optional[float]
    last_updated: Optional[datetime]
    consecutive_failures: int
    last_error: Optional[str]

    def to_dict(self) -> dict:
        return {
            "module": self.module.value,
            "state": self.state.value,
            "displayed_percentage": self.displayed_percentage,
            "local_percentage": self.local_percentage,
            "authoritative_score": self.authoritative_score,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "consecutive_failures": self.consecutive_failures,
            "last_error": self.last_error,
        }


class AnalyticsReconciler(PeriodicPoller[AuthoritativeScore]):
    """Keep one module's displayed percentage reconciled with server analytics.

    Parameters
    ----------
    module:
        Survey module whose analytics are polled.
    fetch:
        ``async fetch(module)`` returning an ``AuthoritativeScore`` (or a raw
        dict / None), e.g. ``SurveyApiClient.fetch_module_analytics``.
    local_percentage:
        The aggregator's local estimate shown until a server value arrives.
    interval, timeout:
        Default to ``module_poll_interval`` / ``survey_api_timeout`` settings.
    """

    name = "analytics_reconciler"

    def __init__(
        self,
        module: SurveyModule,
        fetch: AnalyticsFetcher,
        local_percentage: float = 0,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            interval=interval if interval is not None else settings.module_poll_interval,
            timeout=timeout if timeout is not None else settings.survey_api_timeout,
            token=token,
        )
        self.module = SurveyModule(module)
        self.name = f"analytics_reconciler[{self.module.value}]"
        self._fetcher = fetch
        self.state = ReconcilerState.LOCAL_ONLY
        self.local_percentage = round_percentage(local_percentage)
        self.authoritative_score: Optional[float] = None
        self.last_updated: Optional[datetime] = None
        self.consecutive_failures = 0
        self.last_error: Optional[str] = None

    @property
    def displayed_percentage(self) -> int:
        if self.authoritative_score is not None:
            return round_percentage(self.authoritative_score)
        return self.local_percentage

    def _transition(self, new_state: ReconcilerState) -> None:
        if new_state == self.state:
            return
        if new_state not in VALID_STATE_TRANSITIONS[self.state]:
            raise ValueError(f"Invalid reconciler transition {self.state.value} -> {new_state.value}")
        logger.info(f"{self.name}: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def update_local(self, percentage: float) -> None:
        """Record a fresh local estimate (e.g. after re-aggregation).

        Only visible while no server value has been received.
        """
        self.local_percentage = round_percentage(percentage)

    async def _fetch(self) -> AuthoritativeScore:
        result = await self._fetcher(self.module)
        if result is None:
            return AuthoritativeScore()
        if isinstance(result, AuthoritativeScore):
            return result
        try:
            return AuthoritativeScore.model_validate(result)
        except ValidationError as e:
            raise ParseFailure(f"invalid analytics payload: {e}") from e

    def _on_result(self, result: AuthoritativeScore) -> None:
        self.consecutive_failures = 0
        self.last_error = None
        if result.positive_score is None:
            logger.debug(f"{self.name}: poll returned no positiveScore; state unchanged")
            return
        self.authoritative_score = result.positive_score
        self.last_updated = datetime.now(timezone.utc)
        self._transition(ReconcilerState.AUTHORITATIVE)

    def _on_failure(self, error: Exception) -> None:
        self.consecutive_failures += 1
        self.last_error = str(error)
        if self.state is ReconcilerState.LOCAL_ONLY:
            self._transition(ReconcilerState.STALE_FALLBACK)
        logger.warning(
            f"{self.name}: poll failed ({self.consecutive_failures} in a row), "
            f"keeping {self.displayed_percentage}%: {error}"
        )

    async def refresh(self) -> int:
        """Poll once now and return the displayed percentage."""
        await self.poll_once()
        return self.displayed_percentage

    def snapshot(self) -> ReconcilerSnapshot:
        return ReconcilerSnapshot(
            module=self.module,
            state=self.state,
            displayed_percentage=self.displayed_percentage,
            local_percentage=self.local_percentage,
            authoritative_score=self.authoritative_score,
            last_updated=self.last_updated,
            consecutive_failures=self.consecutive_failures,
            last_error=self.last_error,
        )
