import math
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.core.errors import NotFound, StateConflict, ValidationFailed
from career_guidance.models.career_path import CareerPath
from career_guidance.models.profile import Profile
from career_guidance.repositories.career_path_repository import CareerPathRepository
from career_guidance.services.ai import AIService
from career_guidance.services.profile import public_profile


def pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    return {"current": page, "pages": math.ceil(total / limit) if limit else 0, "total": total}


def common_skills(careers: Sequence[CareerPath]) -> List[Dict[str, Any]]:
    """Technical skills required by more than one of the careers, most shared first."""
    counts: Dict[str, int] = {}
    for career in careers:
        for skill in career.technical_skills:
            counts[skill["skill"]] = counts.get(skill["skill"], 0) + 1
    shared = [(skill, count) for skill, count in counts.items() if count > 1]
    shared.sort(key=lambda item: item[1], reverse=True)
    return [{"skill": skill, "frequency": count} for skill, count in shared]


def _salary_bounds(careers: Sequence[CareerPath]) -> Dict[str, Optional[float]]:
    mins = [c.entry_salary_min for c in careers if c.entry_salary_min is not None]
    maxes = [c.entry_salary_max for c in careers if c.entry_salary_max is not None]
    return {"min": min(mins) if mins else None, "max": max(maxes) if maxes else None}


class CareerService:
    def __init__(self, db: AsyncSession, ai_service: AIService):
        self.db = db
        self.careers = CareerPathRepository(db)
        self.ai_service = ai_service

    async def list_paths(self, page: int, limit: int, **filters) -> Dict[str, Any]:
        items, total = await self.careers.list(page=page, limit=limit, **filters)
        return {
            "career_paths": [c.summary() for c in items],
            "pagination": pagination(page, limit, total),
        }

    async def get_path(self, career_id: UUID) -> CareerPath:
        career = await self.careers.get_active(career_id)
        if not career:
            raise NotFound("Career path not found")
        return career

    async def search(self, q: str, page: int, limit: int) -> Dict[str, Any]:
        query = (q or "").strip()
        if len(query) < 2:
            raise ValidationFailed("Search query must be at least 2 characters")

        items, total = await self.careers.search(query, page=page, limit=limit)
        return {
            "career_paths": [c.summary() for c in items],
            "pagination": pagination(page, limit, total),
            "query": query,
        }

    async def stats(self) -> Dict[str, Any]:
        return await self.careers.stats()

    async def compare(self, career_ids: List[UUID]) -> Dict[str, Any]:
        careers = await self.careers.get_many_active(career_ids)
        if len(careers) != len(career_ids):
            raise ValidationFailed("One or more career paths not found")

        # Keep the order the caller asked for
        by_id = {c.id: c for c in careers}
        careers = [by_id[career_id] for career_id in career_ids]

        return {
            "careers": [
                {
                    **career.summary(),
                    "work_environment": career.work_environment or {},
                    "growth_rate": (career.growth_prospects or {}).get("growth_rate"),
                    "certifications": [c.get("name") for c in (career.certifications or [])[:3]],
                }
                for career in careers
            ],
            "comparison": {
                "salary_range": _salary_bounds(careers),
                "common_skills": common_skills(careers),
                "market_demand": [
                    {"career": c.title, "demand": c.market_demand} for c in careers
                ],
            },
        }

    async def recommendations(self, profile: Profile) -> Dict[str, Any]:
        if not profile.has_assessment_results:
            raise StateConflict(
                "Please complete an assessment first to get personalized recommendations"
            )

        results = profile.assessment_results
        recommendations = await self.ai_service.generate_career_recommendations(
            public_profile(profile), results
        )
        return {
            "recommendations": recommendations.get("recommendations") or [],
            "summary": recommendations.get("summary"),
            "degraded": recommendations.get("degraded", False),
            "profile_summary": {
                "personality_type": results.get("personality_type"),
                "learning_style": results.get("learning_style"),
                "strengths": results.get("strengths") or [],
            },
        }

    async def market_insights(
        self, profile: Profile, industry: str, location: Optional[str] = None
    ) -> Dict[str, Any]:
        if not location:
            place = profile.location or {}
            location = f"{place.get('city', '')}, {place.get('state', '')}".strip(", ")
        insights = await self.ai_service.generate_market_insights(industry, location)
        return {"industry": industry, "location": location, "insights": insights}

    async def learning_for_path(self, profile: Profile, career_id: UUID) -> Dict[str, Any]:
        career = await self.get_path(career_id)
        learning_path = await self.ai_service.generate_learning_path(
            public_profile(profile),
            career.title,
            {
                "required_skills": [s["skill"] for s in career.technical_skills],
                "current_skills": [s["name"] for s in profile.skills or []],
            },
        )
        return {
            "career_path": career.title,
            "learning_path": learning_path,
            "career_details": {
                "required_skills": career.technical_skills,
                "certifications": career.certifications or [],
                "learning_path": career.learning_path or [],
            },
        }
