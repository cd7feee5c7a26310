"""Tests for the offline data sources and the overview figures."""
from datetime import datetime, timezone

import pytest

from survey_analytics.models import Question, ScaleType, SurveyModule
from survey_analytics.pipelines.overview import overall_score, response_rate
from survey_analytics.scoring.aggregator import ResponseAggregator
from survey_analytics.services import (
    generate_mock_data,
    get_question_bank,
    mock_answers,
    synthesize_answers,
)


class TestMockData:
    def test_row_counts(self):
        data = generate_mock_data()
        assert len(data.ai_readiness) == 6
        assert len(data.leadership) == 8
        assert len(data.employee_experience) == 16

    def test_deterministic_responses(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert generate_mock_data(now=now) == generate_mock_data(now=now)

    def test_survey_id_tags_every_row(self):
        data = generate_mock_data(survey_id="s-1")
        rows = data.ai_readiness + data.leadership + data.employee_experience
        assert {r.survey_id for r in rows} == {"s-1"}

    def test_employee_experience_is_ten_point(self):
        rows = generate_mock_data().employee_experience
        assert {r.scale for r in rows} == {ScaleType.ZERO_TO_TEN}
        assert {int(r.response) for r in rows} <= set(range(6, 11))

    def test_mock_answers_only_for_known_questions(self):
        questions = [Question(id="ai-q-1"), Question(id="ai-q-5"), Question(id="other")]
        assert mock_answers(SurveyModule.AI_READINESS, questions) == {"ai-q-1": "4", "ai-q-5": "2"}


class TestSynthesizeAnswers:
    def test_every_question_answered(self):
        questions = get_question_bank(SurveyModule.EMPLOYEE_EXPERIENCE)
        answers = synthesize_answers(questions)
        assert set(answers) == {q.id for q in questions}

    def test_cycles_per_scale(self):
        questions = [Question(id=f"f{i}") for i in range(6)]
        assert list(synthesize_answers(questions).values()) == ["1", "2", "3", "4", "5", "1"]
        ten = [Question(id=f"t{i}", scale=ScaleType.ONE_TO_TEN) for i in range(5)]
        assert list(synthesize_answers(ten).values()) == ["7", "8", "9", "10", "7"]

    def test_synthetic_ten_point_answers_are_all_positive(self):
        questions = [Question(id=f"t{i}", scale=ScaleType.ZERO_TO_TEN) for i in range(4)]
        summary = ResponseAggregator().summarize(questions, synthesize_answers(questions))
        assert summary.positive_percentage == 100


class TestQuestionBank:
    @pytest.mark.parametrize("module,count", [
        (SurveyModule.AI_READINESS, 6),
        (SurveyModule.LEADERSHIP, 8),
        (SurveyModule.EMPLOYEE_EXPERIENCE, 16),
    ])
    def test_sizes(self, module, count):
        assert len(get_question_bank(module)) == count

    def test_returns_a_copy(self):
        bank = get_question_bank(SurveyModule.LEADERSHIP)
        bank.clear()
        assert len(get_question_bank(SurveyModule.LEADERSHIP)) == 8

    def test_bank_covers_mock_rows(self):
        data = generate_mock_data()
        for module in SurveyModule:
            ids = {q.id for q in get_question_bank(module)}
            assert {r.question_id for r in data.for_module(module)} == ids


class TestOverview:
    def test_mean_of_available_modules(self):
        averages = {"ai-readiness": 60, "leadership": 75, "employee-experience": 80}
        assert overall_score(averages) == 72

    def test_missing_modules_skipped(self):
        assert overall_score({SurveyModule.LEADERSHIP: 73.6}) == 74

    def test_restricted_to_available_modules(self):
        averages = {"ai-readiness": 10, "leadership": 90}
        assert overall_score(averages, available_modules=["leadership"]) == 90

    def test_no_modules(self):
        assert overall_score({}) == 0
        assert overall_score({"leadership": 50}, available_modules=[]) == 0

    def test_rounds_half_up(self):
        assert overall_score({"ai-readiness": 50, "leadership": 51}) == 51

    def test_response_rate(self):
        assert response_rate(45, 60) == 75
        assert response_rate(1, 3) == 33
        assert response_rate(5, 0) == 0
