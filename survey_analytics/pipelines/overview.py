"""Cross-module figures for the overview dashboard."""
from typing import Iterable, Mapping, Optional, Union

from survey_analytics.models.enums import SurveyModule
from survey_analytics.scoring.utils import mean, percentage, round_percentage


def overall_score(
    module_averages: Mapping[Union[SurveyModule, str], float],
    available_modules: Optional[Iterable[Union[SurveyModule, str]]] = None,
) -> int:
    """Mean of the available modules' positive percentages, rounded to a whole percent.

    Modules without an entry in ``module_averages`` are skipped. Returns 0
    when no module contributes.
    """
    averages = {SurveyModule(k): v for k, v in module_averages.items()}
    modules = (
        [SurveyModule(m) for m in available_modules]
        if available_modules is not None
        else list(SurveyModule)
    )
    scores = [averages[m] for m in modules if m in averages]
    if not scores:
        return 0
    return round_percentage(mean(scores))


def response_rate(completed: int, participants: int) -> int:
    """Completed surveys as a whole-percent share of participants."""
    return int(percentage(completed, participants))
