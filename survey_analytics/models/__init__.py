"""Pydantic models for the survey analytics engine."""

# Common Models
from survey_analytics.models.common import (
    HealthResponse,
)

# Enums
from survey_analytics.models.enums import (
    DEFAULT_GROUP,
    DataSource,
    DistributionOrder,
    GroupingDimension,
    ReconcilerState,
    ScaleType,
    SurveyModule,
    VALID_STATE_TRANSITIONS,
)

# Survey Models
from survey_analytics.models.survey import (
    AggregationResult,
    Answer,
    AuthoritativeScore,
    DistributionBucket,
    DriverResult,
    LoadedResponses,
    ModuleSummary,
    Question,
    RealtimeStats,
    ResponseRecord,
    SurveySubmitted,
)

__all__ = [
    # Common
    "HealthResponse",
    # Enums
    "DEFAULT_GROUP",
    "DataSource",
    "DistributionOrder",
    "GroupingDimension",
    "ReconcilerState",
    "ScaleType",
    "SurveyModule",
    "VALID_STATE_TRANSITIONS",
    # Survey
    "AggregationResult",
    "Answer",
    "AuthoritativeScore",
    "DistributionBucket",
    "DriverResult",
    "LoadedResponses",
    "ModuleSummary",
    "Question",
    "RealtimeStats",
    "ResponseRecord",
    "SurveySubmitted",
]
