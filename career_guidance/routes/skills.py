from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from career_guidance.core.deps import get_current_profile, get_skills_service
from career_guidance.models.profile import Profile
from career_guidance.schemas.skills import (
    LearningPathRequest,
    SkillGapResponse,
    SkillLearningPathResponse,
    SkillProgressRequest,
    SkillProgressResponse,
    SkillQuizResponse,
    SkillQuizResult,
    SkillQuizSubmission,
    SkillRecommendationsResponse,
    SkillRoadmapResponse,
    TrendingSkillsResponse,
)
from career_guidance.services.skills import (
    SkillsService,
    generate_skill_assessment_questions,
    get_trending_skills,
)

router = APIRouter()


@router.get("/gap-analysis", response_model=SkillGapResponse)
async def get_gap_analysis(
    career_path: UUID = Query(...),
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    return await skills_service.gap_analysis(profile, career_path)


@router.post("/learning-path", response_model=SkillLearningPathResponse)
async def get_learning_path(
    data: LearningPathRequest,
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    return await skills_service.learning_path(profile, data)


@router.get("/recommendations", response_model=SkillRecommendationsResponse)
async def get_skill_recommendations(
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    """Skills common to careers in the caller's interest areas"""
    return await skills_service.recommendations(profile)


@router.post("/progress", response_model=SkillProgressResponse)
async def update_skill_progress(
    data: SkillProgressRequest,
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    skill = await skills_service.update_progress(
        profile, data.skill_name, data.new_level, data.evidence
    )
    return {"message": "Skill progress updated successfully", "skill": skill}


@router.get("/roadmap/{skill_name}", response_model=SkillRoadmapResponse)
async def get_skill_roadmap(
    skill_name: str,
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    return skills_service.roadmap(profile, skill_name)


@router.get("/trending", response_model=TrendingSkillsResponse)
async def get_trending(industry: Optional[str] = None, timeframe: str = "6months") -> Any:
    return {
        "industry": industry or "all",
        "timeframe": timeframe,
        "trending_skills": get_trending_skills(industry, timeframe),
    }


@router.get("/assessment/{skill_name}", response_model=SkillQuizResponse)
async def get_skill_quiz(skill_name: str, profile: Profile = Depends(get_current_profile)) -> Any:
    return {"skill": skill_name, "questions": generate_skill_assessment_questions(skill_name)}


@router.post("/assessment/{skill_name}", response_model=SkillQuizResult)
async def submit_skill_quiz(
    skill_name: str,
    data: SkillQuizSubmission,
    profile: Profile = Depends(get_current_profile),
    skills_service: SkillsService = Depends(get_skills_service),
) -> Any:
    """Score the quiz and store the resulting level on the profile"""
    return await skills_service.submit_quiz(profile, skill_name, data.answers)
