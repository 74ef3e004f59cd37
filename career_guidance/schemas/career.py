from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SalaryRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = "INR"


class CareerPathSummary(BaseModel):
    id: UUID
    title: str
    industry: str
    category: str
    market_demand: str
    entry_level_salary: Optional[SalaryRange] = None
    education_required: str
    top_skills: List[str] = Field(default_factory=list)


class CareerPathDetail(BaseModel):
    id: UUID
    title: str
    description: str
    industry: str
    category: str
    education_requirements: Dict[str, Any] = Field(default_factory=dict)
    skills: Dict[str, Any] = Field(default_factory=dict)
    experience: Dict[str, Any] = Field(default_factory=dict)
    growth_prospects: Dict[str, Any] = Field(default_factory=dict)
    work_environment: Dict[str, Any] = Field(default_factory=dict)
    personality_traits: List[Any] = Field(default_factory=list)
    related_careers: List[Any] = Field(default_factory=list)
    certifications: List[Any] = Field(default_factory=list)
    learning_path: List[Any] = Field(default_factory=list)
    regional_context: Dict[str, Any] = Field(default_factory=dict)
    ai_insights: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CareerPathDetailResponse(BaseModel):
    career_path: CareerPathDetail


class Pagination(BaseModel):
    current: int
    pages: int
    total: int


class CareerPathListResponse(BaseModel):
    career_paths: List[CareerPathSummary]
    pagination: Pagination


class CareerSearchResponse(CareerPathListResponse):
    query: str


class IndustryStat(BaseModel):
    industry: str
    count: int
    avg_salary: Optional[float] = None


class DemandStat(BaseModel):
    market_demand: str
    count: int


class CareerStatsResponse(BaseModel):
    industry_stats: List[IndustryStat]
    market_demand_stats: List[DemandStat]
    total_careers: int


class CareerCompareRequest(BaseModel):
    career_ids: List[UUID] = Field(min_length=2, max_length=4)


class CareerRecommendationsResponse(BaseModel):
    recommendations: List[Dict[str, Any]]
    summary: Optional[str] = None
    degraded: bool
    profile_summary: Dict[str, Any]


class MarketInsightsResponse(BaseModel):
    industry: str
    location: str
    insights: Dict[str, Any]


class CareerLearningResponse(BaseModel):
    career_path: str
    learning_path: Dict[str, Any]
    career_details: Dict[str, Any]
