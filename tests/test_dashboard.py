"""Tests for the module dashboard wiring."""
import asyncio
from unittest.mock import AsyncMock

from survey_analytics.exceptions import FetchFailure
from survey_analytics.models import AuthoritativeScore, RealtimeStats, ReconcilerState, SurveyModule
from survey_analytics.pipelines.dashboard import ModuleDashboard


class TestModuleDashboard:
    def test_view_before_server_analytics(self, mock_survey_api, five_point_questions, five_point_answers):
        mock_survey_api.fetch_answers_and_questions = AsyncMock(
            return_value=(five_point_questions, five_point_answers)
        )
        dashboard = ModuleDashboard(SurveyModule.AI_READINESS, "u1", mock_survey_api)

        async def _run():
            await dashboard.session.load()
            return dashboard.view()

        view = asyncio.run(_run())
        assert view["module"] == "ai-readiness"
        assert view["summary"]["positive_percentage"] == 60
        assert view["sections"] == {"Strategy": ["q1", "q2", "q5"], "Skills": ["q3", "q4"]}
        assert [g["driver"] for g in view["groups"]] == ["Strategy", "Skills"]
        assert view["module_average"] == 60
        assert view["analytics"]["state"] == "local_only"
        assert view["realtime"] is None
        assert view["realtime_loading"] is True

    def test_run_and_stop(self, mock_survey_api, five_point_questions, five_point_answers):
        mock_survey_api.fetch_answers_and_questions = AsyncMock(
            return_value=(five_point_questions, five_point_answers)
        )
        mock_survey_api.fetch_module_analytics = AsyncMock(return_value=AuthoritativeScore(positive_score=81.5))
        mock_survey_api.fetch_realtime_stats = AsyncMock(return_value=RealtimeStats(active_responses=5))

        async def _run():
            async with ModuleDashboard(
                SurveyModule.AI_READINESS, "u1", mock_survey_api,
                survey_id="s-1", module_interval=0.01, realtime_interval=0.01,
            ) as dashboard:
                await asyncio.sleep(0.03)
            return dashboard

        dashboard = asyncio.run(_run())
        view = dashboard.view()
        assert view["module_average"] == 82
        assert view["analytics"]["state"] == "authoritative"
        assert view["realtime"]["active_responses"] == 5
        assert dashboard.token.cancelled
        assert not dashboard.reconciler.running
        assert not dashboard.live_stats.running
        mock_survey_api.fetch_realtime_stats.assert_awaited_with("s-1")

    def test_backend_down_uses_fallback(self, mock_survey_api):
        mock_survey_api.fetch_answers_and_questions = AsyncMock(side_effect=FetchFailure("down"))
        mock_survey_api.fetch_module_analytics = AsyncMock(side_effect=FetchFailure("down"))

        async def _run():
            dashboard = ModuleDashboard(SurveyModule.LEADERSHIP, "u1", mock_survey_api)
            await dashboard.session.load()
            await dashboard.reconciler.refresh()
            return dashboard

        dashboard = asyncio.run(_run())
        view = dashboard.view()
        # mock leadership answers 4,3,5,4,4,2,3,5
        assert view["summary"]["positive_percentage"] == 63
        assert view["module_average"] == 63
        assert dashboard.reconciler.state is ReconcilerState.STALE_FALLBACK

    def test_submission_triggers_reload(self, mock_survey_api, five_point_questions):
        mock_survey_api.fetch_answers_and_questions = AsyncMock(side_effect=[
            (five_point_questions, {}),
            (five_point_questions, {"q1": "5"}),
        ])

        async def _run():
            dashboard = ModuleDashboard(SurveyModule.AI_READINESS, "u1", mock_survey_api)
            await dashboard.session.load()
            dashboard.channel.notify_submitted(SurveyModule.AI_READINESS, "u1")
            await dashboard.session.wait_for_reloads()
            return dashboard

        dashboard = asyncio.run(_run())
        assert dashboard.view()["module_average"] == 100
