"""Built-in, read-only question banks used when the backend cannot supply questions."""
from survey_analytics.models.enums import ScaleType, SurveyModule
from survey_analytics.models.survey import Question

_AI_READINESS = [
    Question(id="ai-q-1", text="Our leadership has a clear AI strategy.", section="Strategy & Leadership"),
    Question(id="ai-q-2", text="AI initiatives are funded adequately.", section="Strategy & Leadership"),
    Question(id="ai-q-3", text="We have the infrastructure to deploy AI tools.", section="Infrastructure & Skills"),
    Question(id="ai-q-4", text="I have the skills to use AI in my role.", section="Infrastructure & Skills"),
    Question(id="ai-q-5", text="Our data is accessible and well governed.", section="Data & Culture"),
    Question(id="ai-q-6", text="Experimenting with AI is encouraged here.", section="Data & Culture"),
]

_LEADERSHIP = [
    Question(id="l-q-1", text="My leader communicates a clear vision.", section="Strategic Vision",
             category="Strategic Vision", driver="Vision Clarity"),
    Question(id="l-q-2", text="I understand how my work supports our goals.", section="Strategic Vision",
             category="Strategic Vision", driver="Vision Clarity"),
    Question(id="l-q-3", text="My leader coaches me to improve.", section="Team Development",
             category="Team Development", driver="Coaching"),
    Question(id="l-q-4", text="I receive useful feedback regularly.", section="Team Development",
             category="Team Development", driver="Coaching"),
    Question(id="l-q-5", text="My leader listens to concerns.", section="Communication Excellence",
             category="Communication Excellence", driver="Listening"),
    Question(id="l-q-6", text="Decisions are owned and followed through.", section="Decision Making",
             category="Decision Making", driver="Accountability"),
    Question(id="l-q-7", text="Leaders take responsibility for outcomes.", section="Decision Making",
             category="Decision Making", driver="Accountability"),
    Question(id="l-q-8", text="Information is shared openly.", section="Communication Excellence",
             category="Communication Excellence", driver="Transparency"),
]

_EE_ITEMS = [
    ("Work Environment", "Physical Workspace", "How likely are you to recommend your workspace?"),
    ("Career Growth", "Development Opportunities", "How satisfied are you with your growth opportunities?"),
    ("Recognition & Rewards", "Compensation", "How fairly are you rewarded for your work?"),
    ("Work-Life Balance", "Flexibility", "How well can you balance work and personal life?"),
]

_EMPLOYEE_EXPERIENCE = [
    Question(
        id=f"ee-q-{i + 1}",
        text=_EE_ITEMS[i % 4][2],
        section=_EE_ITEMS[i % 4][0],
        category=_EE_ITEMS[i % 4][0],
        driver=_EE_ITEMS[i % 4][1],
        scale=ScaleType.ZERO_TO_TEN,
    )
    for i in range(16)
]

QUESTION_BANKS: dict[SurveyModule, list[Question]] = {
    SurveyModule.AI_READINESS: _AI_READINESS,
    SurveyModule.LEADERSHIP: _LEADERSHIP,
    SurveyModule.EMPLOYEE_EXPERIENCE: _EMPLOYEE_EXPERIENCE,
}


def get_question_bank(module: SurveyModule) -> list[Question]:
    """Return a copy of the built-in questions for ``module``."""
    return list(QUESTION_BANKS[SurveyModule(module)])
