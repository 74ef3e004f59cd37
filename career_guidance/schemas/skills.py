from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from career_guidance.schemas.profile import NonEmpty, SkillLevel

TimeCommitment = Literal["1-2 hours", "3-5 hours", "6-8 hours", "full-time"]
Budget = Literal["free", "low", "medium", "high"]


class LearningPathRequest(BaseModel):
    career_goal: NonEmpty
    time_commitment: TimeCommitment = "3-5 hours"
    budget: Budget = "low"


class SkillProgressRequest(BaseModel):
    skill_name: NonEmpty
    new_level: SkillLevel
    evidence: List[str] = Field(default_factory=list)


class SkillQuizAnswer(BaseModel):
    question_id: NonEmpty
    answer: NonEmpty


class SkillQuizSubmission(BaseModel):
    answers: List[SkillQuizAnswer]


class SkillQuizQuestion(BaseModel):
    question_id: str
    question: str
    type: str
    options: List[str]


class SkillQuizResponse(BaseModel):
    skill: str
    questions: List[SkillQuizQuestion]


class SkillQuizResult(BaseModel):
    message: str
    skill: str
    assessed_level: SkillLevel
    recommendations: List[str]


class RoadmapStep(BaseModel):
    step: int
    title: str
    description: str
    duration: str


class SkillRoadmap(BaseModel):
    current_level: str
    next_level: Optional[str] = None
    steps: List[RoadmapStep] = Field(default_factory=list)


class SkillRoadmapResponse(BaseModel):
    skill: str
    current_level: str
    roadmap: SkillRoadmap


class TrendingSkill(BaseModel):
    name: str
    trend: str
    growth: int


class TrendingSkillsResponse(BaseModel):
    industry: str
    timeframe: str
    trending_skills: List[TrendingSkill]


class SkillProgressResponse(BaseModel):
    message: str
    skill: Dict[str, Any]


class SkillGapResponse(BaseModel):
    career_path: str
    gap_analysis: Dict[str, Any]
    user_skills: List[Dict[str, Any]]
    required_skills: Dict[str, Any]


class SkillLearningPathResponse(BaseModel):
    career_goal: str
    learning_path: Dict[str, Any]
    profile_summary: Dict[str, Any]


class SkillRecommendation(BaseModel):
    name: str
    frequency: int
    importance: Optional[str] = None
    level: Optional[str] = None


class SkillRecommendationsResponse(BaseModel):
    skill_recommendations: List[SkillRecommendation]
    based_on_interests: List[Dict[str, Any]]
    matching_careers: List[Dict[str, Any]]
