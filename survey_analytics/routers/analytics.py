"""Aggregation, distribution and classification endpoints."""

from typing import Optional, Union

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from survey_analytics.models import (
    AggregationResult,
    DistributionBucket,
    DistributionOrder,
    GroupingDimension,
    Question,
    ScaleType,
    SurveyModule,
)
from survey_analytics.pipelines.overview import overall_score
from survey_analytics.scoring.aggregator import ResponseAggregator
from survey_analytics.scoring.distribution import DistributionBuilder
from survey_analytics.scoring.scale_policy import get_scale_policy

RawValue = Union[str, int, float]

# ── request / response schema ─────────────────────────────────────────────────


class AggregateRequest(BaseModel):
    """Questions plus one respondent's answers."""

    questions: list[Question]
    answers: dict[str, Optional[RawValue]] = Field(default_factory=dict)
    dimension: Optional[GroupingDimension] = None


class DistributionRequest(BaseModel):
    values: list[Optional[RawValue]]
    scale: ScaleType
    order: DistributionOrder = DistributionOrder.INSERTION


class ClassifyRequest(BaseModel):
    scale: ScaleType
    value: RawValue


class ClassifyResponse(BaseModel):
    scale: ScaleType
    value: int
    is_positive: bool
    label: str


class OverviewRequest(BaseModel):
    module_averages: dict[SurveyModule, float]
    available_modules: Optional[list[SurveyModule]] = None


class OverviewResponse(BaseModel):
    overall_score: int


router = APIRouter(prefix="/api/v1", tags=["Analytics"])

_aggregator = ResponseAggregator()
_distribution = DistributionBuilder()


@router.post(
    "/aggregate",
    response_model=AggregationResult,
    summary="Aggregate Responses",
)
async def aggregate_responses(request: AggregateRequest):
    """Module summary and, when ``dimension`` is set, the grouped breakdown."""
    answers = {qid: value for qid, value in request.answers.items() if value is not None}
    return _aggregator.aggregate(request.questions, answers, request.dimension)


@router.post(
    "/distribution",
    response_model=list[DistributionBucket],
    summary="Score Distribution",
)
async def score_distribution(request: DistributionRequest):
    """Frequency of each score present in ``values``."""
    return _distribution.build(request.values, request.scale, order=request.order)


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    summary="Classify Answer",
)
async def classify_answer(request: ClassifyRequest):
    """Positivity and display label of one answer value."""
    result = get_scale_policy(request.scale).classify(request.value)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Value {request.value!r} is not a valid score",
        )
    return ClassifyResponse(
        scale=request.scale,
        value=result.value,
        is_positive=result.is_positive,
        label=result.label,
    )


@router.post(
    "/overview",
    response_model=OverviewResponse,
    summary="Overall Score",
)
async def overview_score(request: OverviewRequest):
    """Mean positive percentage across the available modules."""
    return OverviewResponse(
        overall_score=overall_score(request.module_averages, request.available_modules)
    )
