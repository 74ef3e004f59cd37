from typing import Any, Dict, List, Tuple
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.core.errors import (
    IncompleteResponses,
    InvalidAssessmentType,
    InvalidQuestion,
    NotCompleted,
    NotFound,
)
from career_guidance.models.assessment import Assessment, AssessmentStatus
from career_guidance.repositories.assessment_repository import AssessmentRepository
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.services.ai import AIService
from career_guidance.services.assessment_catalog import generate_questions, is_valid_type
from career_guidance.services.cache import CacheService
from career_guidance.services.result_projector import project_results

# Fields of a completed assessment copied onto the profile
PROFILE_SUMMARY_FIELDS = (
    "personality_type",
    "learning_style",
    "work_style",
    "strengths",
    "areas_for_improvement",
)


class AssessmentService:
    """Assessment lifecycle: start, answer, complete, read back."""

    def __init__(self, db: AsyncSession, ai_service: AIService, cache: CacheService):
        self.db = db
        self.assessments = AssessmentRepository(db)
        self.profiles = ProfileRepository(db)
        self.ai_service = ai_service
        self.cache = cache

    @staticmethod
    def _results_key(profile_id: UUID, assessment_id: UUID) -> str:
        return f"assessment:{profile_id}:{assessment_id}:results"

    async def start_assessment(self, profile_id: UUID, assessment_type: str) -> Tuple[Assessment, bool]:
        """Returns (assessment, resumed). An in-progress attempt of the same type is resumed."""
        if not is_valid_type(assessment_type):
            raise InvalidAssessmentType()

        existing = await self.assessments.get_in_progress(profile_id, assessment_type)
        if existing:
            logger.info(f"Resuming {assessment_type} assessment {existing.id} for profile {profile_id}")
            return existing, True

        try:
            assessment = await self.assessments.create(
                profile_id, assessment_type, generate_questions(assessment_type)
            )
            await self.db.commit()
        except IntegrityError:
            # Another request created the in-progress attempt first
            await self.db.rollback()
            existing = await self.assessments.get_in_progress(profile_id, assessment_type)
            if existing is None:
                raise
            logger.info(f"Resuming concurrently created assessment {existing.id}")
            return existing, True

        logger.info(f"Created {assessment_type} assessment {assessment.id} for profile {profile_id}")
        return assessment, False

    async def _get_in_progress(self, assessment_id: UUID, profile_id: UUID) -> Assessment:
        assessment = await self.assessments.get_owned(
            assessment_id, profile_id, status=AssessmentStatus.IN_PROGRESS
        )
        if not assessment:
            raise NotFound("Assessment not found or already completed")
        return assessment

    async def submit_response(
        self, assessment_id: UUID, profile_id: UUID, question_id: str, answer: Any
    ) -> int:
        """Store the answer for a question and return the completion percentage."""
        assessment = await self._get_in_progress(assessment_id, profile_id)

        if question_id not in assessment.question_ids:
            raise InvalidQuestion()

        try:
            await self.assessments.upsert_response(assessment, question_id, answer)
            await self.db.commit()
        except IntegrityError:
            # Another request inserted this question first, overwrite its answer
            await self.db.rollback()
            logger.info(f"Concurrent answer to {question_id} on assessment {assessment_id}, retrying")
            assessment = await self._get_in_progress(assessment_id, profile_id)
            await self.assessments.upsert_response(assessment, question_id, answer)
            await self.db.commit()

        return assessment.completion_percentage

    async def complete_assessment(self, assessment_id: UUID, profile_id: UUID) -> Assessment:
        """Score a fully answered assessment and copy its summary onto the profile.

        The assessment and the profile are written in one transaction.
        """
        assessment = await self._get_in_progress(assessment_id, profile_id)

        if len(assessment.responses) < len(assessment.questions):
            raise IncompleteResponses(assessment.completion_percentage)

        responses = [
            {"question_id": r.question_id, "answer": r.answer} for r in assessment.responses
        ]
        ai_analysis = await self.ai_service.analyze_assessment_results(
            {
                "type": assessment.type,
                "questions": assessment.questions,
                "responses": responses,
            }
        )
        results, scores = project_results(assessment.type, assessment.questions, responses)

        profile = await self.profiles.get_by_id(profile_id)
        if profile is None:
            raise NotFound("Profile not found")

        try:
            completed = await self.assessments.mark_completed(assessment, results, ai_analysis, scores)
            if completed:
                summary = {field: results.get(field) for field in PROFILE_SUMMARY_FIELDS}
                summary["last_assessment_date"] = assessment.completed_at.isoformat()
                await self.profiles.set_assessment_summary(profile, summary)
                await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception(f"Error completing assessment {assessment_id}")
            raise

        if not completed:
            # Another request completed it while the analysis was running
            await self.db.rollback()
            logger.info(f"Assessment {assessment_id} was already completed")
            raise NotFound("Assessment not found or already completed")

        logger.info(f"Completed {assessment.type} assessment {assessment.id} for profile {profile_id}")

        await self.cache.set(
            self._results_key(profile_id, assessment.id), self._results_payload(assessment)
        )
        return assessment

    @staticmethod
    def _results_payload(assessment: Assessment) -> Dict[str, Any]:
        return {
            "assessment": assessment.summary(),
            "results": assessment.results,
            "ai_analysis": assessment.ai_analysis,
        }

    async def get_results(self, assessment_id: UUID, profile_id: UUID) -> Dict[str, Any]:
        cached = await self.cache.get(self._results_key(profile_id, assessment_id))
        if cached:
            return cached

        assessment = await self.assessments.get_owned(assessment_id, profile_id)
        if not assessment:
            raise NotFound("Assessment not found")
        if assessment.status != AssessmentStatus.COMPLETED:
            raise NotCompleted()

        payload = self._results_payload(assessment)
        await self.cache.set(self._results_key(profile_id, assessment_id), payload)
        return payload

    async def get_history(self, profile_id: UUID) -> List[Dict[str, Any]]:
        assessments = await self.assessments.list_for_profile(profile_id)
        return [assessment.summary() for assessment in assessments]
