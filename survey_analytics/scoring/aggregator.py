"""Response Aggregator.

Turns a module's question list plus one respondent's answers into:

  * a ``ModuleSummary``: answered / positive counts and the positive rate,
    rounded to a whole percent for the summary card;
  * optionally, one ``DriverResult`` per distinct section, category or driver,
    in first-seen order of the question list, rounded to one decimal for the
    bar charts.

Only answered questions count. An unanswered question, or one whose answer
is not a valid number, is left out of both numerator and denominator. Answers
for question ids that are not in the question list are ignored.

The aggregator is a pure function of its inputs; audit trail emitted via
structlog.
"""
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence

import structlog

from survey_analytics.models.enums import DEFAULT_GROUP, GroupingDimension
from survey_analytics.models.survey import (
    AggregationResult,
    Answer,
    DriverResult,
    ModuleSummary,
    Question,
    ResponseRecord,
)
from survey_analytics.scoring.scale_policy import get_scale_policy
from survey_analytics.scoring.utils import percentage

logger = structlog.get_logger(__name__)

MODULE_PLACES = 0  # integer snapshot
GROUP_PLACES = 1  # bar-chart precision


@dataclass
class _Tally:
    positive: int = 0
    total: int = 0

    def add(self, positive: bool) -> None:
        self.total += 1
        if positive:
            self.positive += 1


@dataclass
class _Classified:
    """Answered questions of one aggregation pass, in question-list order."""

    questions: list[Question] = field(default_factory=list)
    positives: list[bool] = field(default_factory=list)


def answers_to_mapping(answers: Iterable[Answer]) -> dict[str, str]:
    """Collapse answers into ``question_id -> raw_value``; the last answer for a question wins."""
    mapping: dict[str, str] = {}
    for answer in answers:
        mapping[answer.question_id] = answer.raw_value
    return mapping


class ResponseAggregator:
    """Compute module summaries and grouped driver results."""

    def _classify(
        self,
        questions: Sequence[Question],
        answers: Mapping[str, object],
    ) -> _Classified:
        classified = _Classified()
        for question in questions:
            if question.id not in answers:
                continue
            result = get_scale_policy(question.scale).classify(answers[question.id])
            if result is None:
                continue
            classified.questions.append(question)
            classified.positives.append(result.is_positive)
        return classified

    # ── public API ────────────────────────────────────────────────────────────

    def summarize(
        self,
        questions: Sequence[Question],
        answers: Mapping[str, object],
    ) -> ModuleSummary:
        """Build the module-level summary.

        Args:
            questions: The module's question bank.
            answers: ``question_id -> raw_value`` for one respondent.

        Returns:
            ModuleSummary with integer positive percentage and answered
            questions grouped by section (sections with no answers omitted).
        """
        classified = self._classify(questions, answers)
        total = len(classified.questions)
        positive = sum(classified.positives)

        grouped: dict[str, list[Question]] = {}
        for question in classified.questions:
            grouped.setdefault(question.section, []).append(question)

        summary = ModuleSummary(
            total_responses=total,
            positive_responses=positive,
            positive_percentage=int(percentage(positive, total, MODULE_PLACES)),
            grouped_by_section=grouped,
        )
        logger.info(
            "module_summarized",
            total_responses=summary.total_responses,
            positive_responses=summary.positive_responses,
            positive_percentage=summary.positive_percentage,
            sections=list(grouped),
        )
        return summary

    def group_by(
        self,
        questions: Sequence[Question],
        answers: Mapping[str, object],
        dimension: GroupingDimension = GroupingDimension.SECTION,
    ) -> list[DriverResult]:
        """One DriverResult per distinct group value, in first-seen order.

        Questions with no value for the grouping attribute fall under ``General``.
        """
        dimension = GroupingDimension(dimension)
        classified = self._classify(questions, answers)
        tallies: dict[str, _Tally] = {}
        for question, positive in zip(classified.questions, classified.positives):
            tallies.setdefault(question.group_value(dimension), _Tally()).add(positive)

        results = [_to_driver_result(name, tally) for name, tally in tallies.items()]
        logger.info("drivers_grouped", dimension=dimension.value, groups=len(results))
        return results

    def aggregate(
        self,
        questions: Sequence[Question],
        answers: Mapping[str, object],
        dimension: Optional[GroupingDimension] = None,
    ) -> AggregationResult:
        """Summary plus, when a dimension is given, the grouped breakdown."""
        summary = self.summarize(questions, answers)
        if dimension is None:
            return AggregationResult(summary=summary)
        dimension = GroupingDimension(dimension)
        return AggregationResult(
            summary=summary,
            dimension=dimension,
            groups=self.group_by(questions, answers, dimension),
        )

    def summarize_records(
        self,
        records: Iterable[ResponseRecord],
        dimension: GroupingDimension = GroupingDimension.DRIVER,
    ) -> list[DriverResult]:
        """Group backend-shaped response rows, each carrying its own scale.

        Unlike ``group_by`` every row counts, so several respondents' answers
        to the same question accumulate.
        """
        dimension = GroupingDimension(dimension)
        tallies: dict[str, _Tally] = {}
        for record in records:
            result = get_scale_policy(record.scale).classify(record.response)
            if result is None:
                continue
            name = getattr(record, dimension.value) or DEFAULT_GROUP
            tallies.setdefault(name, _Tally()).add(result.is_positive)
        return [_to_driver_result(name, tally) for name, tally in tallies.items()]

    @staticmethod
    def rank(
        results: Sequence[DriverResult],
        limit: Optional[int] = None,
        descending: bool = True,
    ) -> list[DriverResult]:
        """Sort driver results by positive percentage (stable) for top/bottom lists."""
        ranked = sorted(results, key=lambda r: r.positive_percentage, reverse=descending)
        return ranked if limit is None else ranked[:limit]


def _to_driver_result(name: str, tally: _Tally) -> DriverResult:
    return DriverResult(
        driver=name,
        positive_count=tally.positive,
        total_count=tally.total,
        positive_percentage=float(percentage(tally.positive, tally.total, GROUP_PLACES)),
    )
