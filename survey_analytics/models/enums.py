"""Enumeration types for the survey analytics engine."""
from enum import Enum


class SurveyModule(str, Enum):
    """The three survey instruments."""
    AI_READINESS = "ai-readiness"
    LEADERSHIP = "leadership"
    EMPLOYEE_EXPERIENCE = "employee-experience"


class ScaleType(str, Enum):
    """Answer scales used by survey questions."""
    FIVE_POINT = "1-5"  # Likert agreement scale
    ZERO_TO_TEN = "0-10"  # NPS-style
    ONE_TO_TEN = "1-10"  # banded low/medium/high


class GroupingDimension(str, Enum):
    """Question attributes that grouped aggregation can key on."""
    SECTION = "section"
    CATEGORY = "category"
    DRIVER = "driver"


class DistributionOrder(str, Enum):
    """Bucket ordering for score distributions."""
    INSERTION = "insertion"  # first occurrence, matches bar-chart ordering
    NUMERIC = "numeric"


class ReconcilerState(str, Enum):
    """Which source the displayed module percentage comes from."""
    LOCAL_ONLY = "local_only"
    AUTHORITATIVE = "authoritative"
    STALE_FALLBACK = "stale_fallback"  # polls failing, no server value ever received


class DataSource(str, Enum):
    """Where a module's answers were loaded from."""
    BACKEND = "backend"
    MOCK = "mock"
    SYNTHETIC = "synthetic"
    UNAVAILABLE = "unavailable"  # backend failed and fallback is disabled


DEFAULT_GROUP = "General"

# Valid reconciler transitions
VALID_STATE_TRANSITIONS: dict[ReconcilerState, list[ReconcilerState]] = {
    ReconcilerState.LOCAL_ONLY: [ReconcilerState.AUTHORITATIVE, ReconcilerState.STALE_FALLBACK],
    ReconcilerState.STALE_FALLBACK: [ReconcilerState.AUTHORITATIVE],
    ReconcilerState.AUTHORITATIVE: [],
}
