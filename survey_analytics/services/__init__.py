"""Services package - survey backend client and offline data sources."""
from .survey_api import SurveyApiClient
from .mock_data import MockDataSet, generate_mock_data, mock_answers, synthesize_answers
from .question_bank import get_question_bank

__all__ = [
    "SurveyApiClient",
    "MockDataSet",
    "generate_mock_data",
    "mock_answers",
    "synthesize_answers",
    "get_question_bank",
]
