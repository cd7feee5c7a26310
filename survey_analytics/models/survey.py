"""Survey question, answer and aggregation result models."""
import math
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from survey_analytics.models.enums import (
    DEFAULT_GROUP,
    DataSource,
    GroupingDimension,
    ScaleType,
    SurveyModule,
)


class CamelModel(BaseModel):
    """Accepts camelCase keys from the survey backend as well as field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Inputs ---

class Question(CamelModel):
    """A question from a module's question bank. Immutable once loaded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    text: str = Field(default="", validation_alias=AliasChoices("text", "question"))
    section: str = DEFAULT_GROUP
    scale: ScaleType = ScaleType.FIVE_POINT
    category: Optional[str] = None
    driver: Optional[str] = None

    @field_validator("section", mode="before")
    @classmethod
    def default_section(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_GROUP
        return v

    @field_validator("scale", mode="before")
    @classmethod
    def default_scale(cls, v: object) -> object:
        return ScaleType.FIVE_POINT if v in (None, "") else v

    def group_value(self, dimension: GroupingDimension) -> str:
        """Value of the grouping attribute, or the ``General`` bucket when unset."""
        value = getattr(self, dimension.value)
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_GROUP
        return value


class Answer(CamelModel):
    """One respondent's answer to one question."""

    question_id: str
    raw_value: str = Field(validation_alias=AliasChoices("raw_value", "rawValue", "answer", "response"))

    @field_validator("raw_value", mode="before")
    @classmethod
    def stringify(cls, v: object) -> object:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ResponseRecord(CamelModel):
    """A stored response row as the backend (or the mock dataset) returns it."""

    id: str
    survey_id: Optional[str] = None
    question_id: str
    response: float
    section: Optional[str] = None
    category: Optional[str] = None
    driver: Optional[str] = None
    lens: Optional[str] = None
    configuration: Optional[str] = None
    scale: ScaleType = ScaleType.FIVE_POINT
    submitted_at: Optional[datetime] = None


# --- Derived results ---

class DriverResult(BaseModel):
    """Positive-response statistics for one group (section, category or driver)."""

    driver: str
    positive_count: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    positive_percentage: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_counts(self) -> "DriverResult":
        if self.positive_count > self.total_count:
            raise ValueError("positive_count cannot exceed total_count")
        return self


class ModuleSummary(BaseModel):
    """Module-level snapshot shown in the summary card."""

    total_responses: int = Field(default=0, ge=0)
    positive_responses: int = Field(default=0, ge=0)
    positive_percentage: int = Field(default=0, ge=0, le=100)
    grouped_by_section: dict[str, list[Question]] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when nothing was answered (renders the empty state, not an error)."""
        return self.total_responses == 0


class AggregationResult(BaseModel):
    """Module summary plus optional grouped breakdown."""

    summary: ModuleSummary
    dimension: Optional[GroupingDimension] = None
    groups: Optional[list[DriverResult]] = None


class DistributionBucket(BaseModel):
    """How many answers carried one score value."""

    score: int
    count: int = Field(..., ge=1)
    is_positive: bool
    label: str


# --- Polled payloads ---

class AuthoritativeScore(CamelModel):
    """Server-computed module percentage. ``positive_score`` is None when absent or non-numeric."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    positive_score: Optional[float] = None

    @field_validator("positive_score", mode="before")
    @classmethod
    def numeric_only(cls, v: Any) -> Optional[float]:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if not math.isfinite(v):
            return None
        return float(v)


class RealtimeStats(CamelModel):
    """Auxiliary live counters shown next to the dashboard."""

    active_responses: int = 0
    today_responses: int = 0
    average_completion_time: float = 0.0
    completion_rate: float = 0.0


class SurveySubmitted(CamelModel):
    """Notification that a respondent submitted a module. Unset fields match any consumer."""

    module: Optional[SurveyModule] = None
    user_id: Optional[str] = None


class LoadedResponses(BaseModel):
    """Questions and answers for one module/user, with where the answers came from."""

    module: SurveyModule
    user_id: str
    questions: list[Question] = Field(default_factory=list)
    answers: dict[str, str] = Field(default_factory=dict)
    source: DataSource = DataSource.BACKEND
