"""Unit tests for the Response Aggregator."""

import pytest

from survey_analytics.models import (
    Answer,
    DriverResult,
    GroupingDimension,
    Question,
    ResponseRecord,
    ScaleType,
)
from survey_analytics.scoring.aggregator import ResponseAggregator, answers_to_mapping


@pytest.fixture
def aggregator():
    return ResponseAggregator()


class TestSummarize:
    def test_five_point_scenario(self, aggregator, five_point_questions, five_point_answers):
        summary = aggregator.summarize(five_point_questions, five_point_answers)
        assert summary.total_responses == 5
        assert summary.positive_responses == 3
        assert summary.positive_percentage == 60

    def test_no_answers_is_zeroed(self, aggregator, five_point_questions):
        summary = aggregator.summarize(five_point_questions[:3], {})
        assert summary.total_responses == 0
        assert summary.positive_responses == 0
        assert summary.positive_percentage == 0
        assert summary.is_empty
        assert summary.grouped_by_section == {}

    def test_empty_question_list(self, aggregator):
        summary = aggregator.summarize([], {"q1": "5"})
        assert summary.is_empty

    def test_unknown_question_ids_are_ignored(self, aggregator, five_point_questions):
        summary = aggregator.summarize(five_point_questions, {"q1": "5", "ghost": "5"})
        assert summary.total_responses == 1
        assert summary.positive_responses == 1
        assert summary.positive_percentage == 100

    def test_unanswered_questions_excluded_from_denominator(self, aggregator, five_point_questions):
        summary = aggregator.summarize(five_point_questions, {"q1": "4", "q2": "2"})
        assert summary.total_responses == 2
        assert summary.positive_percentage == 50

    def test_invalid_values_excluded(self, aggregator, five_point_questions):
        summary = aggregator.summarize(five_point_questions, {"q1": "4", "q2": "", "q3": "abc"})
        assert summary.total_responses == 1
        assert summary.positive_responses == 1

    def test_rounds_half_up_to_integer(self, aggregator):
        questions = [Question(id=f"q{i}", scale=ScaleType.FIVE_POINT) for i in range(8)]
        # 5 of 8 positive = 62.5%
        answers = {f"q{i}": "5" if i < 5 else "1" for i in range(8)}
        assert aggregator.summarize(questions, answers).positive_percentage == 63

    def test_mixed_scales_use_their_own_threshold(self, aggregator, driver_questions):
        answers = {"e1": "7", "e2": "6", "e3": "4", "e4": "10"}
        summary = aggregator.summarize(driver_questions, answers)
        assert summary.total_responses == 4
        assert summary.positive_responses == 3

    def test_grouped_by_section_preserves_first_seen_order(self, aggregator, five_point_questions, five_point_answers):
        summary = aggregator.summarize(five_point_questions, five_point_answers)
        assert list(summary.grouped_by_section) == ["Strategy", "Skills"]
        assert [q.id for q in summary.grouped_by_section["Strategy"]] == ["q1", "q2", "q5"]

    def test_sections_without_answers_are_omitted(self, aggregator, five_point_questions):
        summary = aggregator.summarize(five_point_questions, {"q3": "5"})
        assert list(summary.grouped_by_section) == ["Skills"]

    def test_idempotent(self, aggregator, five_point_questions, five_point_answers):
        first = aggregator.summarize(five_point_questions, five_point_answers)
        second = aggregator.summarize(five_point_questions, five_point_answers)
        assert first == second

    def test_does_not_mutate_inputs(self, aggregator, five_point_questions, five_point_answers):
        answers = dict(five_point_answers)
        aggregator.summarize(five_point_questions, answers)
        assert answers == five_point_answers


class TestGroupBy:
    def test_group_by_section(self, aggregator, five_point_questions, five_point_answers):
        groups = aggregator.group_by(five_point_questions, five_point_answers, GroupingDimension.SECTION)
        assert [g.driver for g in groups] == ["Strategy", "Skills"]
        strategy, skills = groups
        assert (strategy.positive_count, strategy.total_count) == (2, 3)
        assert strategy.positive_percentage == 66.7
        assert (skills.positive_count, skills.total_count) == (1, 2)
        assert skills.positive_percentage == 50.0

    def test_missing_driver_goes_to_general(self, aggregator, driver_questions):
        answers = {"e1": "8", "e2": "3", "e3": "5", "e4": "9"}
        groups = aggregator.group_by(driver_questions, answers, GroupingDimension.DRIVER)
        assert [g.driver for g in groups] == ["Physical Workspace", "Development Opportunities", "General"]
        assert groups[0].positive_count == 2
        assert groups[2].total_count == 1

    def test_group_by_category(self, aggregator, driver_questions):
        answers = {"e1": "8", "e2": "3", "e4": "9"}
        groups = aggregator.group_by(driver_questions, answers, "category")
        assert [(g.driver, g.positive_count, g.total_count) for g in groups] == [
            ("Work Environment", 1, 1),
            ("Career Growth", 1, 2),
        ]

    def test_unanswered_groups_are_not_reported(self, aggregator, driver_questions):
        groups = aggregator.group_by(driver_questions, {"e1": "8"}, GroupingDimension.CATEGORY)
        assert [g.driver for g in groups] == ["Work Environment"]

    def test_group_totals_sum_to_module_total(self, aggregator, driver_questions):
        answers = {"e1": "8", "e2": "3", "e3": "5", "e4": "9"}
        groups = aggregator.group_by(driver_questions, answers, GroupingDimension.DRIVER)
        summary = aggregator.summarize(driver_questions, answers)
        assert sum(g.total_count for g in groups) == summary.total_responses
        assert sum(g.positive_count for g in groups) == summary.positive_responses

    def test_one_decimal_precision(self, aggregator):
        questions = [Question(id=f"q{i}", section="S") for i in range(3)]
        groups = aggregator.group_by(questions, {"q0": "5", "q1": "1", "q2": "1"})
        assert groups[0].positive_percentage == 33.3


class TestAggregate:
    def test_without_dimension_has_no_groups(self, aggregator, five_point_questions, five_point_answers):
        result = aggregator.aggregate(five_point_questions, five_point_answers)
        assert result.groups is None
        assert result.dimension is None
        assert result.summary.positive_percentage == 60

    def test_with_dimension(self, aggregator, five_point_questions, five_point_answers):
        result = aggregator.aggregate(five_point_questions, five_point_answers, GroupingDimension.SECTION)
        assert result.dimension is GroupingDimension.SECTION
        assert len(result.groups) == 2


class TestRecordsAndRanking:
    def test_summarize_records_accumulates_rows(self, aggregator):
        records = [
            ResponseRecord(id="1", question_id="x", response=9, driver="Flexibility", scale=ScaleType.ZERO_TO_TEN),
            ResponseRecord(id="2", question_id="x", response=6, driver="Flexibility", scale=ScaleType.ZERO_TO_TEN),
            ResponseRecord(id="3", question_id="y", response=4, driver="Coaching", scale=ScaleType.FIVE_POINT),
            ResponseRecord(id="4", question_id="z", response=5, scale=ScaleType.FIVE_POINT),
        ]
        results = aggregator.summarize_records(records, GroupingDimension.DRIVER)
        assert [(r.driver, r.positive_count, r.total_count) for r in results] == [
            ("Flexibility", 1, 2),
            ("Coaching", 1, 1),
            ("General", 1, 1),
        ]

    def test_rank_descending_with_limit(self):
        results = [
            DriverResult(driver="a", positive_count=1, total_count=4, positive_percentage=25.0),
            DriverResult(driver="b", positive_count=3, total_count=4, positive_percentage=75.0),
            DriverResult(driver="c", positive_count=2, total_count=4, positive_percentage=50.0),
        ]
        assert [r.driver for r in ResponseAggregator.rank(results, limit=2)] == ["b", "c"]
        assert [r.driver for r in ResponseAggregator.rank(results, descending=False)] == ["a", "c", "b"]

    def test_rank_is_stable_for_ties(self):
        results = [
            DriverResult(driver=name, positive_count=1, total_count=2, positive_percentage=50.0)
            for name in ("x", "y", "z")
        ]
        assert [r.driver for r in ResponseAggregator.rank(results)] == ["x", "y", "z"]


class TestAnswersToMapping:
    def test_last_write_wins(self):
        answers = [
            Answer(question_id="q1", raw_value="2"),
            Answer(question_id="q2", raw_value="5"),
            Answer(question_id="q1", raw_value="4"),
        ]
        assert answers_to_mapping(answers) == {"q1": "4", "q2": "5"}
