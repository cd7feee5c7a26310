"""Error taxonomy for data sourcing and polling.

Empty question/answer sets are not errors; they surface as an empty
``ModuleSummary`` (see ``ModuleSummary.is_empty``).
"""
from typing import Optional


class SurveyAnalyticsError(Exception):
    """Base class for all survey analytics errors."""


class FetchFailure(SurveyAnalyticsError):
    """Network/transport failure (connection error, timeout, non-2xx status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseFailure(SurveyAnalyticsError):
    """Payload arrived but could not be decoded or validated."""


class UnknownScaleError(SurveyAnalyticsError, ValueError):
    """Scale tag is not one of the supported answer scales."""
