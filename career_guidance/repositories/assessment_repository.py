"""
Assessment repository - database operations for Assessment and its responses.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.models.assessment import Assessment, AssessmentResponse, AssessmentStatus
from career_guidance.utils.time import utc_now


class AssessmentRepository:
    """Repository for Assessment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_in_progress(self, profile_id: UUID, assessment_type: str) -> Optional[Assessment]:
        result = await self.db.execute(
            select(Assessment).where(
                Assessment.profile_id == profile_id,
                Assessment.type == assessment_type,
                Assessment.status == AssessmentStatus.IN_PROGRESS,
            )
        )
        return result.scalar_one_or_none()

    async def get_owned(
        self,
        assessment_id: UUID,
        profile_id: UUID,
        status: Optional[str] = None,
    ) -> Optional[Assessment]:
        """Get an assessment by id, only if it belongs to the profile."""
        query = select(Assessment).where(
            Assessment.id == assessment_id,
            Assessment.profile_id == profile_id,
        )
        if status is not None:
            query = query.where(Assessment.status == status)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self, profile_id: UUID, assessment_type: str, questions: List[Dict[str, Any]]
    ) -> Assessment:
        now = utc_now()
        assessment = Assessment(
            profile_id=profile_id,
            type=assessment_type,
            questions=questions,
            # Initialized here so the collection never needs a lazy load
            responses=[],
            status=AssessmentStatus.IN_PROGRESS,
            created_at=now,
            updated_at=now,
        )
        self.db.add(assessment)
        await self.db.flush()
        return assessment

    async def upsert_response(
        self, assessment: Assessment, question_id: str, answer: Any
    ) -> AssessmentResponse:
        """Replace the answer for question_id, or add it if it is new."""
        now = utc_now()
        for response in assessment.responses:
            if response.question_id == question_id:
                response.answer = answer
                response.score = None
                response.timestamp = now
                break
        else:
            response = AssessmentResponse(question_id=question_id, answer=answer, timestamp=now)
            assessment.responses.append(response)

        assessment.updated_at = now
        await self.db.flush()
        return response

    async def mark_completed(
        self,
        assessment: Assessment,
        results: Dict[str, Any],
        ai_analysis: Dict[str, Any],
        scores: Dict[str, float],
    ) -> bool:
        """Move an in-progress assessment to completed.

        The status change is a conditional UPDATE, so only one of several
        concurrent completions wins. Returns False when the assessment had
        already left in-progress.
        """
        now = utc_now()
        result = await self.db.execute(
            update(Assessment)
            .where(
                Assessment.id == assessment.id,
                Assessment.status == AssessmentStatus.IN_PROGRESS,
            )
            .values(
                status=AssessmentStatus.COMPLETED,
                results=results,
                ai_analysis=ai_analysis,
                completed_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        for response in assessment.responses:
            response.score = scores.get(response.question_id)
        assessment.results = results
        assessment.ai_analysis = ai_analysis
        assessment.status = AssessmentStatus.COMPLETED
        assessment.completed_at = now
        assessment.updated_at = now
        await self.db.flush()
        return True

    async def list_for_profile(self, profile_id: UUID) -> List[Assessment]:
        """All assessments of a profile, newest first."""
        result = await self.db.execute(
            select(Assessment)
            .where(Assessment.profile_id == profile_id)
            .order_by(Assessment.created_at.desc())
        )
        return list(result.scalars().all())
