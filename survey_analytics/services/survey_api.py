"""Async HTTP client for the survey backend (responses, module analytics, realtime stats)."""
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from survey_analytics.config import get_settings
from survey_analytics.exceptions import FetchFailure, ParseFailure
from survey_analytics.models.enums import SurveyModule
from survey_analytics.models.survey import AuthoritativeScore, Question, RealtimeStats

logger = logging.getLogger(__name__)


class SurveyApiClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Transport errors, timeouts and non-2xx statuses raise ``FetchFailure``;
    bodies that are not JSON or do not match the expected shape raise
    ``ParseFailure``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.survey_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.survey_api_timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SurveyApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        try:
            r = await self._client.get(path, params=params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchFailure(
                f"GET {path} returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise FetchFailure(f"GET {path} failed: {e!r}") from e
        try:
            return r.json()
        except ValueError as e:
            raise ParseFailure(f"GET {path} returned invalid JSON") from e

    async def fetch_answers_and_questions(
        self,
        module: SurveyModule,
        user_id: str,
    ) -> tuple[list[Question], dict[str, str]]:
        """GET /api/surveys/responses/{module}/{user_id}.

        Returns the module's questions and the user's ``question_id -> answer``
        mapping. Answer values are coerced to strings.
        """
        module = SurveyModule(module)
        payload = await self._get_json(f"/api/surveys/responses/{module.value}/{user_id}")
        if not isinstance(payload, dict):
            raise ParseFailure("responses payload must be an object")
        raw_questions = payload.get("questions") or []
        raw_answers = payload.get("answers", payload.get("responses")) or {}
        if not isinstance(raw_questions, list) or not isinstance(raw_answers, dict):
            raise ParseFailure("responses payload has unexpected shape")
        try:
            questions = [Question.model_validate(q) for q in raw_questions]
        except ValidationError as e:
            raise ParseFailure(f"invalid question in payload: {e}") from e
        answers = {
            str(qid): str(value)
            for qid, value in raw_answers.items()
            if value is not None
        }
        return questions, answers

    async def fetch_module_analytics(self, module: SurveyModule) -> AuthoritativeScore:
        """GET /api/analytics/{module}. A body without a numeric positiveScore yields ``positive_score=None``."""
        module = SurveyModule(module)
        payload = await self._get_json(f"/api/analytics/{module.value}")
        if payload is None:
            return AuthoritativeScore()
        if not isinstance(payload, dict):
            raise ParseFailure("analytics payload must be an object")
        return AuthoritativeScore.model_validate(payload)

    async def fetch_realtime_stats(self, survey_id: Optional[str] = None) -> RealtimeStats:
        """GET /api/realtime/stats, optionally scoped to one survey."""
        params = {"surveyId": survey_id} if survey_id else None
        payload = await self._get_json("/api/realtime/stats", params=params)
        if not isinstance(payload, dict):
            raise ParseFailure("realtime stats payload must be an object")
        try:
            return RealtimeStats.model_validate(payload)
        except ValidationError as e:
            raise ParseFailure(f"invalid realtime stats: {e}") from e

    async def health_check(self) -> tuple[bool, Optional[str]]:
        """Check that the survey backend answers."""
        try:
            await self.fetch_realtime_stats()
            return True, None
        except Exception as e:
            return False, str(e)
