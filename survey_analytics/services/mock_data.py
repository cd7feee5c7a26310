"""Deterministic mock responses used when the survey backend is unavailable.

The values are placeholders that keep the dashboard populated; nothing
downstream depends on the exact numbers.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from survey_analytics.models.enums import ScaleType, SurveyModule
from survey_analytics.models.survey import Question, ResponseRecord

_AI_READINESS_ROWS = [
    # (question id, section, response)
    ("ai-q-1", "Strategy & Leadership", 4),
    ("ai-q-2", "Strategy & Leadership", 3),
    ("ai-q-3", "Infrastructure & Skills", 5),
    ("ai-q-4", "Infrastructure & Skills", 4),
    ("ai-q-5", "Data & Culture", 2),
    ("ai-q-6", "Data & Culture", 4),
]

_LEADERSHIP_ROWS = [
    # (question id, lens, configuration, driver, response)
    ("l-q-1", "Strategic Vision", "Centralized", "Vision Clarity", 4),
    ("l-q-2", "Strategic Vision", "Centralized", "Vision Clarity", 3),
    ("l-q-3", "Team Development", "Decentralized", "Coaching", 5),
    ("l-q-4", "Team Development", "Decentralized", "Coaching", 4),
    ("l-q-5", "Communication Excellence", "Centralized", "Listening", 4),
    ("l-q-6", "Decision Making", "Centralized", "Accountability", 2),
    ("l-q-7", "Decision Making", "Centralized", "Accountability", 3),
    ("l-q-8", "Communication Excellence", "Decentralized", "Transparency", 5),
]

EMPLOYEE_EXPERIENCE_DRIVERS = [
    ("Work Environment", "Physical Workspace"),
    ("Career Growth", "Development Opportunities"),
    ("Recognition & Rewards", "Compensation"),
    ("Work-Life Balance", "Flexibility"),
]
EMPLOYEE_EXPERIENCE_QUESTION_COUNT = 16


@dataclass
class MockDataSet:
    """Mock responses for all three modules."""

    ai_readiness: list[ResponseRecord] = field(default_factory=list)
    leadership: list[ResponseRecord] = field(default_factory=list)
    employee_experience: list[ResponseRecord] = field(default_factory=list)

    def for_module(self, module: SurveyModule) -> list[ResponseRecord]:
        module = SurveyModule(module)
        if module is SurveyModule.AI_READINESS:
            return self.ai_readiness
        if module is SurveyModule.LEADERSHIP:
            return self.leadership
        return self.employee_experience


def generate_mock_data(
    survey_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> MockDataSet:
    """Build the mock dataset, optionally tagging every row with ``survey_id``."""
    now = now or datetime.now(timezone.utc)

    def submitted(minutes_ago: int) -> datetime:
        return now - timedelta(minutes=minutes_ago)

    ai_readiness = [
        ResponseRecord(
            id=f"ai-{i}",
            survey_id=survey_id,
            question_id=qid,
            section=section,
            response=value,
            scale=ScaleType.FIVE_POINT,
            submitted_at=submitted(60 - 2 * i),
        )
        for i, (qid, section, value) in enumerate(_AI_READINESS_ROWS, start=1)
    ]

    leadership = [
        ResponseRecord(
            id=f"l-{i}",
            survey_id=survey_id,
            question_id=qid,
            section=lens,
            category=lens,
            lens=lens,
            configuration=configuration,
            driver=driver,
            response=value,
            scale=ScaleType.FIVE_POINT,
            submitted_at=submitted(46 - i),
        )
        for i, (qid, lens, configuration, driver, value) in enumerate(_LEADERSHIP_ROWS, start=1)
    ]

    employee_experience = []
    for i in range(EMPLOYEE_EXPERIENCE_QUESTION_COUNT):
        category, driver = EMPLOYEE_EXPERIENCE_DRIVERS[i % len(EMPLOYEE_EXPERIENCE_DRIVERS)]
        employee_experience.append(
            ResponseRecord(
                id=f"ee-{i + 1}",
                survey_id=survey_id,
                question_id=f"ee-q-{i + 1}",
                section=category,
                category=category,
                driver=driver,
                scale=ScaleType.ZERO_TO_TEN,
                response=6 + (i % 5),  # 6..10
                submitted_at=submitted(30 - i),
            )
        )

    return MockDataSet(
        ai_readiness=ai_readiness,
        leadership=leadership,
        employee_experience=employee_experience,
    )


def mock_answers(
    module: SurveyModule,
    questions: Sequence[Question],
    dataset: Optional[MockDataSet] = None,
) -> dict[str, str]:
    """Mock answers for the questions that exist in ``questions``; other rows are dropped."""
    dataset = dataset or generate_mock_data()
    known = {q.id for q in questions}
    answers: dict[str, str] = {}
    for record in dataset.for_module(module):
        if record.question_id in known:
            answers[record.question_id] = str(int(record.response))
    return answers


def synthesize_answers(questions: Sequence[Question]) -> dict[str, str]:
    """A complete, plausible answer set: every question answered, some positive.

    Five-point questions cycle 1..5; ten-point questions cycle 7..10.
    """
    answers: dict[str, str] = {}
    for i, question in enumerate(questions):
        if question.scale is ScaleType.FIVE_POINT:
            answers[question.id] = str((i % 5) + 1)
        else:
            answers[question.id] = str(7 + (i % 4))
    return answers
