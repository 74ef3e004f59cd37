from datetime import date
from types import SimpleNamespace

import httpx
import openai
import pytest

from career_guidance.config.settings import settings
from career_guidance.core.errors import UpstreamUnavailable
from career_guidance.services.ai import (
    DEFAULT_ASSESSMENT_ANALYSIS,
    DEFAULT_CAREER_RECOMMENDATIONS,
    DEFAULT_LEARNING_PATH,
    DEFAULT_MARKET_INSIGHTS,
    DEFAULT_SKILLS_GAP,
    AIService,
    calculate_age,
    parse_json_object,
)


class FakeCompletions:
    """Stands in for client.chat.completions, replaying canned replies."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(*replies):
    completions = FakeCompletions(replies)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


PROFILE = {
    "name": "Asha Verma",
    "date_of_birth": "2005-04-12",
    "education": {"current_level": "12th", "stream": "science"},
    "location": {"city": "Bengaluru", "state": "Karnataka"},
    "skills": [{"name": "Python", "level": "beginner"}],
    "interests": [{"category": "technology"}],
}

RESULTS = {
    "personality_type": "Analytical",
    "learning_style": {"primary": "Logical"},
    "work_style": {"preferred": "Independent"},
    "strengths": ["Programming"],
    "areas_for_improvement": ["Leadership"],
}


# ---------- TESTS FOR JSON EXTRACTION ----------

def test_parse_json_object_from_fenced_reply():
    """The first {...} span is extracted from surrounding prose."""
    text = 'Here you go:\n```json\n{"summary": "ok", "items": [1, 2]}\n```'
    assert parse_json_object(text) == {"summary": "ok", "items": [1, 2]}


@pytest.mark.parametrize("text", [None, "", "no json here", "{not valid json}", "[1, 2, 3]"])
def test_parse_json_object_rejects_non_objects(text):
    assert parse_json_object(text) is None


def test_calculate_age_before_and_after_birthday():
    assert calculate_age("2005-04-12", today=date(2026, 4, 11)) == 20
    assert calculate_age("2005-04-12", today=date(2026, 4, 12)) == 21
    assert calculate_age(None) is None


# ---------- TESTS FOR UNCONFIGURED MODEL ----------

def test_service_without_project_is_disabled():
    assert AIService().enabled is False


def test_service_without_api_key_is_disabled(monkeypatch):
    """A project alone is not enough to build a client."""
    monkeypatch.setattr(settings, "AI_PROJECT_ID", "career-guidance-dev")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)

    assert AIService().enabled is False


async def test_disabled_completion_raises_upstream_unavailable():
    with pytest.raises(UpstreamUnavailable) as exc_info:
        await AIService()._complete("Suggest a career")

    assert exc_info.value.status_code == 503


async def test_every_operation_returns_defaults_when_disabled():
    """All five operations degrade to their static payloads."""
    ai = AIService()

    analysis = await ai.analyze_assessment_results({"type": "skills", "questions": [], "responses": []})
    recommendations = await ai.generate_career_recommendations(PROFILE, RESULTS)
    gap = await ai.analyze_skills_gap(PROFILE["skills"], {"technical": []})
    path = await ai.generate_learning_path(PROFILE, "Software Engineer", {})
    insights = await ai.generate_market_insights("technology", "Bengaluru, Karnataka")

    assert analysis == {**DEFAULT_ASSESSMENT_ANALYSIS, "degraded": True}
    assert recommendations == {**DEFAULT_CAREER_RECOMMENDATIONS, "degraded": True}
    assert gap == {**DEFAULT_SKILLS_GAP, "degraded": True}
    assert path == {**DEFAULT_LEARNING_PATH, "degraded": True}
    assert insights == {**DEFAULT_MARKET_INSIGHTS, "degraded": True}


async def test_defaults_are_not_shared_between_calls():
    ai = AIService()

    first = await ai.generate_learning_path(PROFILE, "Data Scientist", {})
    first["phases"].clear()
    second = await ai.generate_learning_path(PROFILE, "Data Scientist", {})

    assert len(second["phases"]) == 2


# ---------- TESTS FOR CONFIGURED MODEL ----------

async def test_model_reply_is_parsed():
    """A JSON reply is returned as-is with degraded unset."""
    client, completions = fake_client('{"recommendations": [{"career": "Actuary"}], "summary": "fit"}')
    ai = AIService(client=client, model="test-model")

    result = await ai.generate_career_recommendations(PROFILE, RESULTS)

    assert result == {"recommendations": [{"career": "Actuary"}], "summary": "fit", "degraded": False}
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert "Personality Type: Analytical" in call["messages"][1]["content"]


async def test_unparseable_reply_returns_default():
    client, _ = fake_client("I would suggest becoming an actuary.")
    ai = AIService(client=client)

    result = await ai.generate_market_insights("finance", "Mumbai, Maharashtra")

    assert result == {**DEFAULT_MARKET_INSIGHTS, "degraded": True}


async def test_unexpected_error_returns_default_without_retry():
    """Errors outside the client's own exceptions are not retried."""
    client, completions = fake_client(RuntimeError("boom"))
    ai = AIService(client=client)

    result = await ai.analyze_skills_gap([], {"technical": []})

    assert result["degraded"] is True
    assert result["learning_priorities"] == DEFAULT_SKILLS_GAP["learning_priorities"]
    assert len(completions.calls) == 1


async def test_client_errors_are_retried_then_degrade():
    """Connection errors are retried up to the attempt limit."""
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client, completions = fake_client(openai.APIConnectionError(request=request))
    ai = AIService(client=client)

    result = await ai.analyze_assessment_results({"type": "skills", "questions": [], "responses": []})

    assert result == {**DEFAULT_ASSESSMENT_ANALYSIS, "degraded": True}
    assert len(completions.calls) == settings.AI_MAX_ATTEMPTS


async def test_retry_recovers_after_transient_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client, completions = fake_client(
        openai.APIConnectionError(request=request),
        '{"personality_analysis": "Curious and methodical"}',
    )
    ai = AIService(client=client)

    result = await ai.analyze_assessment_results({"type": "skills", "questions": [], "responses": []})

    assert result == {"personality_analysis": "Curious and methodical", "degraded": False}
    assert len(completions.calls) == 2
