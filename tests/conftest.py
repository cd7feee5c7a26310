"""Pytest fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, AsyncMock, patch

from survey_analytics.models import AuthoritativeScore, Question, RealtimeStats, ScaleType


@pytest.fixture
def five_point_questions():
    """Five Likert questions across two sections."""
    return [
        Question(id="q1", text="Q1", section="Strategy", scale=ScaleType.FIVE_POINT),
        Question(id="q2", text="Q2", section="Strategy", scale=ScaleType.FIVE_POINT),
        Question(id="q3", text="Q3", section="Skills", scale=ScaleType.FIVE_POINT),
        Question(id="q4", text="Q4", section="Skills", scale=ScaleType.FIVE_POINT),
        Question(id="q5", text="Q5", section="Strategy", scale=ScaleType.FIVE_POINT),
    ]


@pytest.fixture
def five_point_answers():
    """Answers [4, 3, 5, 2, 4] for q1..q5."""
    return {"q1": "4", "q2": "3", "q3": "5", "q4": "2", "q5": "4"}


@pytest.fixture
def driver_questions():
    """Employee-experience style questions with categories, drivers and mixed scales."""
    return [
        Question(id="e1", section="Work Environment", category="Work Environment",
                 driver="Physical Workspace", scale=ScaleType.ZERO_TO_TEN),
        Question(id="e2", section="Career Growth", category="Career Growth",
                 driver="Development Opportunities", scale=ScaleType.ZERO_TO_TEN),
        Question(id="e3", section="Work Environment", category="Work Environment",
                 driver="Physical Workspace", scale=ScaleType.FIVE_POINT),
        Question(id="e4", section="Career Growth", category="Career Growth",
                 driver=None, scale=ScaleType.ZERO_TO_TEN),
    ]


@pytest.fixture
def mock_survey_api():
    """Mock survey backend client."""
    mock = MagicMock()
    mock.health_check = AsyncMock(return_value=(True, None))
    mock.aclose = AsyncMock(return_value=None)
    mock.fetch_answers_and_questions = AsyncMock(return_value=([], {}))
    mock.fetch_module_analytics = AsyncMock(return_value=AuthoritativeScore(positive_score=None))
    mock.fetch_realtime_stats = AsyncMock(return_value=RealtimeStats())
    return mock


@pytest.fixture
def client(mock_survey_api):
    """Create test client with a mocked survey backend."""
    with patch("survey_analytics.routers.health.get_survey_api_client", return_value=mock_survey_api):
        from survey_analytics.main import app
        yield TestClient(app)
