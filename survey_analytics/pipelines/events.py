"""Publish/subscribe channel for "survey submitted" notifications.

A channel is created per aggregation session and handed by reference to the
consumers that need it; there is no process-wide bus.
"""
import logging
from typing import Callable, Optional

from survey_analytics.models.enums import SurveyModule
from survey_analytics.models.survey import SurveySubmitted

logger = logging.getLogger(__name__)

SubmissionHandler = Callable[[SurveySubmitted], None]


class Subscription:
    """Handle returned by ``SubmissionChannel.subscribe``."""

    def __init__(self, channel: "SubmissionChannel", handler: SubmissionHandler):
        self._channel = channel
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if self.active:
            self.active = False
            self._channel._remove(self)


class SubmissionChannel:
    """Synchronous fan-out of ``SurveySubmitted`` events in subscription order."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: SubmissionHandler) -> Subscription:
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def publish(self, event: SurveySubmitted) -> int:
        """Deliver ``event`` to every subscriber; returns how many handlers ran.

        A handler that raises is logged and skipped; delivery continues.
        """
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
                delivered += 1
            except Exception as e:
                logger.error(f"Submission handler failed for {event!r}: {e}", exc_info=True)
        return delivered

    def notify_submitted(
        self,
        module: Optional[SurveyModule] = None,
        user_id: Optional[str] = None,
    ) -> int:
        """Convenience wrapper building the event from its fields."""
        return self.publish(SurveySubmitted(module=module, user_id=user_id))


def matches(event: SurveySubmitted, module: SurveyModule, user_id: str) -> bool:
    """True when ``event`` concerns this module/user. Unset event fields match anything."""
    if event.user_id is not None and event.user_id != user_id:
        return False
    if event.module is not None and event.module != SurveyModule(module):
        return False
    return True
