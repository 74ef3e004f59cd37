import asyncio
from unittest.mock import AsyncMock

import pytest

from career_guidance.core.errors import (
    IncompleteResponses,
    InvalidAssessmentType,
    InvalidQuestion,
    NotCompleted,
    NotFound,
)
from career_guidance.models.assessment import Assessment, AssessmentResponse, AssessmentStatus
from career_guidance.repositories.assessment_repository import AssessmentRepository
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.services.assessment import AssessmentService


@pytest.fixture
def service(db_session, ai_service, cache):
    return AssessmentService(db_session, ai_service, cache)


async def answer_all(service, assessment, profile_id, answer=4):
    for question_id in assessment.question_ids:
        await service.submit_response(assessment.id, profile_id, question_id, answer)


# ---------- TESTS FOR START / RESUME ----------

@pytest.mark.parametrize("assessment_type", ["personality", "skills", "interests", "aptitude", "comprehensive"])
async def test_start_twice_resumes_same_assessment(service, profile, assessment_type):
    """A second start of the same type returns the in-progress attempt."""
    first, resumed_first = await service.start_assessment(profile.id, assessment_type)
    second, resumed_second = await service.start_assessment(profile.id, assessment_type)

    assert resumed_first is False
    assert resumed_second is True
    assert second.id == first.id
    assert first.status == AssessmentStatus.IN_PROGRESS


async def test_different_types_run_side_by_side(service, profile):
    skills, _ = await service.start_assessment(profile.id, "skills")
    aptitude, _ = await service.start_assessment(profile.id, "aptitude")

    assert skills.id != aptitude.id


async def test_start_after_completion_creates_new_attempt(service, profile):
    """Completed attempts are never resumed."""
    first, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, first, profile.id)
    await service.complete_assessment(first.id, profile.id)

    second, resumed = await service.start_assessment(profile.id, "skills")

    assert resumed is False
    assert second.id != first.id


async def test_start_unknown_type_fails(service, profile):
    with pytest.raises(InvalidAssessmentType):
        await service.start_assessment(profile.id, "astrology")


# ---------- TESTS FOR RESPONSES ----------

async def test_progress_rounds_half_up(service, profile):
    """One of three answered is 33, two of three is 67."""
    assessment, _ = await service.start_assessment(profile.id, "personality")

    assert await service.submit_response(assessment.id, profile.id, "p1", 4) == 33
    assert await service.submit_response(assessment.id, profile.id, "p2", 4) == 67
    assert await service.submit_response(assessment.id, profile.id, "p3", 4) == 100


def test_completion_percentage_exact_half():
    """12.5 percent rounds up to 13."""
    assessment = Assessment(
        questions=[{"question_id": f"q{i}"} for i in range(8)],
        responses=[AssessmentResponse(question_id="q0", answer=3)],
    )
    assert assessment.completion_percentage == 13


def test_completion_percentage_without_questions():
    assessment = Assessment(questions=[], responses=[])
    assert assessment.completion_percentage == 0


async def test_resubmitting_replaces_answer(service, profile, db_session):
    """Answering the same question twice keeps one response with the newest answer."""
    assessment, _ = await service.start_assessment(profile.id, "skills")

    await service.submit_response(assessment.id, profile.id, "s1", 2)
    progress = await service.submit_response(assessment.id, profile.id, "s1", 5)

    assert progress == 50
    reloaded = await AssessmentRepository(db_session).get_owned(assessment.id, profile.id)
    assert [(r.question_id, r.answer) for r in reloaded.responses] == [("s1", 5)]


async def test_unknown_question_rejected(service, profile):
    assessment, _ = await service.start_assessment(profile.id, "skills")

    with pytest.raises(InvalidQuestion):
        await service.submit_response(assessment.id, profile.id, "p1", 4)


async def test_response_to_other_profiles_assessment_not_found(service, profile, other_profile):
    assessment, _ = await service.start_assessment(profile.id, "skills")

    with pytest.raises(NotFound):
        await service.submit_response(assessment.id, other_profile.id, "s1", 4)


async def test_response_to_completed_assessment_not_found(service, profile):
    """Completed assessments are frozen."""
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, assessment, profile.id)
    await service.complete_assessment(assessment.id, profile.id)

    with pytest.raises(NotFound):
        await service.submit_response(assessment.id, profile.id, "s1", 1)


# ---------- TESTS FOR COMPLETION ----------

async def test_complete_requires_every_answer(service, profile):
    """Completion reports the current progress when answers are missing."""
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await service.submit_response(assessment.id, profile.id, "s1", 4)

    with pytest.raises(IncompleteResponses) as exc_info:
        await service.complete_assessment(assessment.id, profile.id)

    assert exc_info.value.progress == 50
    assert exc_info.value.payload["error"]["details"] == {"progress": 50}


async def test_complete_updates_assessment_and_profile(service, profile, db_session):
    """Results, timestamp and profile summary are written together."""
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, assessment, profile.id, answer=5)

    completed = await service.complete_assessment(assessment.id, profile.id)

    assert completed.status == AssessmentStatus.COMPLETED
    assert completed.completed_at is not None
    assert completed.results["personality_type"] == "Analytical"
    assert completed.ai_analysis["degraded"] is True
    assert {r.question_id: r.score for r in completed.responses} == {"s1": 100.0, "s2": 100.0}

    refreshed = await ProfileRepository(db_session).get_by_id(profile.id)
    summary = refreshed.assessment_results
    assert summary["personality_type"] == "Analytical"
    assert summary["strengths"] == completed.results["strengths"]
    assert summary["last_assessment_date"] == completed.completed_at.isoformat()


async def test_failed_profile_write_rolls_back_completion(service, profile, db_session):
    """If the profile summary cannot be written the assessment stays in progress."""
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, assessment, profile.id)
    service.profiles.set_assessment_summary = AsyncMock(side_effect=RuntimeError("disk full"))

    with pytest.raises(RuntimeError):
        await service.complete_assessment(assessment.id, profile.id)

    reloaded = await AssessmentRepository(db_session).get_owned(assessment.id, profile.id)
    assert reloaded.status == AssessmentStatus.IN_PROGRESS
    assert reloaded.completed_at is None
    assert reloaded.results is None


# ---------- TESTS FOR RESULTS AND HISTORY ----------

async def test_results_before_completion(service, profile):
    assessment, _ = await service.start_assessment(profile.id, "skills")

    with pytest.raises(NotCompleted):
        await service.get_results(assessment.id, profile.id)


async def test_results_of_other_profile_not_found(service, profile, other_profile):
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, assessment, profile.id)
    await service.complete_assessment(assessment.id, profile.id)

    with pytest.raises(NotFound):
        await service.get_results(assessment.id, other_profile.id)


async def test_results_served_from_cache(db_session, ai_service, profile):
    """A cached payload is returned without touching the database."""
    cached = {"assessment": {"id": "cached"}, "results": {}, "ai_analysis": {}}
    cache = AsyncMock()
    cache.get.return_value = cached
    service = AssessmentService(db_session, ai_service, cache)
    assessment, _ = await service.start_assessment(profile.id, "skills")

    assert await service.get_results(assessment.id, profile.id) == cached


async def test_history_newest_first_without_questions(service, profile):
    first, _ = await service.start_assessment(profile.id, "skills")
    second, _ = await service.start_assessment(profile.id, "aptitude")

    history = await service.get_history(profile.id)

    assert [h["id"] for h in history] == [second.id, first.id]
    assert all("questions" not in h and "responses" not in h for h in history)
    assert history[0]["has_results"] is False


# ---------- TESTS FOR CONCURRENT REQUESTS ----------

class SlowAnalysis:
    """Analysis stub that answers after a delay, tagged with a label."""

    def __init__(self, label, delay):
        self.label = label
        self.delay = delay

    async def analyze_assessment_results(self, assessment_data):
        await asyncio.sleep(self.delay)
        return {"summary": self.label, "degraded": False}


async def test_concurrent_completion_has_one_winner(service, profile, session_factory, cache):
    """Two completions racing on one assessment: the first commit wins, the second is refused."""
    assessment, _ = await service.start_assessment(profile.id, "skills")
    await answer_all(service, assessment, profile.id)

    async with session_factory() as first_session, session_factory() as second_session:
        first = AssessmentService(first_session, SlowAnalysis("first", 0.01), cache)
        second = AssessmentService(second_session, SlowAnalysis("second", 0.2), cache)

        outcomes = await asyncio.gather(
            first.complete_assessment(assessment.id, profile.id),
            second.complete_assessment(assessment.id, profile.id),
            return_exceptions=True,
        )

    assert isinstance(outcomes[0], Assessment)
    assert isinstance(outcomes[1], NotFound)

    async with session_factory() as session:
        stored = await AssessmentRepository(session).get_owned(assessment.id, profile.id)
        assert stored.status == AssessmentStatus.COMPLETED
        assert stored.ai_analysis["summary"] == "first"
        refreshed = await ProfileRepository(session).get_by_id(profile.id)
        assert refreshed.assessment_results["last_assessment_date"] == stored.completed_at.isoformat()


async def test_concurrent_start_resumes_committed_attempt(service, profile, session_factory, ai_service, cache):
    """A start that loses the insert race resumes the attempt the other request created."""
    async with session_factory() as session:
        late = AssessmentService(session, ai_service, cache)
        real_lookup = late.assessments.get_in_progress
        lookups = []

        async def stale_then_real(profile_id, assessment_type):
            lookups.append(assessment_type)
            if len(lookups) == 1:
                return None
            return await real_lookup(profile_id, assessment_type)

        late.assessments.get_in_progress = stale_then_real

        created, _ = await service.start_assessment(profile.id, "aptitude")
        resumed, was_resumed = await late.start_assessment(profile.id, "aptitude")

    assert was_resumed is True
    assert resumed.id == created.id
    assert len(lookups) == 2


async def test_concurrent_answer_to_same_question_keeps_latest(service, profile, session_factory, ai_service, cache):
    """An answer that collides with one committed meanwhile overwrites it instead of failing."""
    assessment, _ = await service.start_assessment(profile.id, "skills")

    async with session_factory() as session:
        # Loaded before the other answer lands, so its responses are stale
        await AssessmentRepository(session).get_owned(assessment.id, profile.id)
        late = AssessmentService(session, ai_service, cache)

        await service.submit_response(assessment.id, profile.id, "s1", 2)
        progress = await late.submit_response(assessment.id, profile.id, "s1", 5)

    assert progress == 50

    async with session_factory() as session:
        stored = await AssessmentRepository(session).get_owned(assessment.id, profile.id)
        assert [(r.question_id, r.answer) for r in stored.responses] == [("s1", 5)]
