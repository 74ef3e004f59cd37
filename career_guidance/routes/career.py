from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from career_guidance.core.deps import get_career_service, get_current_profile
from career_guidance.models.profile import Profile
from career_guidance.schemas.career import (
    CareerCompareRequest,
    CareerLearningResponse,
    CareerPathDetailResponse,
    CareerPathListResponse,
    CareerRecommendationsResponse,
    CareerSearchResponse,
    CareerStatsResponse,
    MarketInsightsResponse,
)
from career_guidance.services.career import CareerService

router = APIRouter()


@router.get("/recommendations", response_model=CareerRecommendationsResponse)
async def get_recommendations(
    profile: Profile = Depends(get_current_profile),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    """AI career recommendations, needs a completed assessment"""
    return await career_service.recommendations(profile)


@router.get("/paths", response_model=CareerPathListResponse)
async def list_career_paths(
    industry: Optional[str] = None,
    category: Optional[str] = None,
    education_level: Optional[str] = None,
    market_demand: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    return await career_service.list_paths(
        page,
        limit,
        industry=industry,
        category=category,
        education_level=education_level,
        market_demand=market_demand,
    )


@router.get("/paths/{career_id}", response_model=CareerPathDetailResponse)
async def get_career_path(
    career_id: UUID,
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    return {"career_path": await career_service.get_path(career_id)}


@router.get("/search", response_model=CareerSearchResponse)
async def search_career_paths(
    q: str = "",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    """Free-text search over title and description"""
    return await career_service.search(q, page, limit)


@router.get("/market-insights", response_model=MarketInsightsResponse)
async def get_market_insights(
    industry: str = Query(..., min_length=1),
    location: Optional[str] = None,
    profile: Profile = Depends(get_current_profile),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    return await career_service.market_insights(profile, industry, location)


@router.post("/compare")
async def compare_career_paths(
    data: CareerCompareRequest,
    profile: Profile = Depends(get_current_profile),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    return {"comparison": await career_service.compare(data.career_ids)}


@router.get("/paths/{career_id}/learning", response_model=CareerLearningResponse)
async def get_career_learning(
    career_id: UUID,
    profile: Profile = Depends(get_current_profile),
    career_service: CareerService = Depends(get_career_service),
) -> Any:
    return await career_service.learning_for_path(profile, career_id)


@router.get("/stats", response_model=CareerStatsResponse)
async def get_career_stats(career_service: CareerService = Depends(get_career_service)) -> Any:
    return await career_service.stats()
