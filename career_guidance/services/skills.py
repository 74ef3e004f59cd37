from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.core.errors import NotFound, StateConflict
from career_guidance.models.career_path import CareerPath
from career_guidance.models.profile import Profile
from career_guidance.repositories.career_path_repository import CareerPathRepository
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.schemas.skills import LearningPathRequest, SkillQuizAnswer
from career_guidance.services.ai import AIService
from career_guidance.services.profile import public_profile

SKILL_LEVELS = ["beginner", "intermediate", "advanced", "expert"]

EXPERIENCE_OPTIONS = ["No experience", "Beginner", "Intermediate", "Advanced", "Expert"]
PROJECT_OPTIONS = ["No", "1-2 projects", "3-5 projects", "More than 5 projects"]

TRENDING_SKILLS = [
    {"name": "Python", "trend": "up", "growth": 25},
    {"name": "Machine Learning", "trend": "up", "growth": 30},
    {"name": "Cloud Computing", "trend": "up", "growth": 20},
    {"name": "Data Science", "trend": "up", "growth": 28},
    {"name": "React", "trend": "up", "growth": 15},
    {"name": "DevOps", "trend": "up", "growth": 22},
]

LEVEL_RECOMMENDATIONS = {
    "beginner": ["Take online courses", "Practice with tutorials", "Join beginner communities"],
    "intermediate": ["Work on real projects", "Contribute to open source", "Attend workshops"],
    "advanced": ["Mentor others", "Speak at conferences", "Build complex applications"],
    "expert": ["Lead technical teams", "Create educational content", "Consult for companies"],
}


def analyze_skills_from_careers(
    careers: Iterable[CareerPath], user_skills: Iterable[Dict[str, Any]], limit: int = 10
) -> List[Dict[str, Any]]:
    """Technical skills most often required by the careers, minus those the user has."""
    known = {s["name"].lower() for s in user_skills if s.get("name")}
    frequency: Dict[str, Dict[str, Any]] = {}

    for career in careers:
        for skill in career.technical_skills:
            key = skill["skill"].lower()
            if key not in frequency:
                frequency[key] = {
                    "name": skill["skill"],
                    "frequency": 0,
                    "importance": skill.get("importance"),
                    "level": skill.get("level"),
                }
            frequency[key]["frequency"] += 1

    candidates = [s for key, s in frequency.items() if key not in known]
    candidates.sort(key=lambda s: s["frequency"], reverse=True)
    return candidates[:limit]


def generate_skill_roadmap(skill_name: str, current_level: str) -> Dict[str, Any]:
    index = SKILL_LEVELS.index(current_level) if current_level in SKILL_LEVELS else 0
    next_level = SKILL_LEVELS[index + 1] if index < len(SKILL_LEVELS) - 1 else None

    roadmap = {"current_level": current_level, "next_level": next_level, "steps": []}
    if next_level:
        roadmap["steps"] = [
            {
                "step": 1,
                "title": f"Master {current_level} concepts",
                "description": f"Ensure you have a solid foundation in {current_level} level {skill_name}",
                "duration": "2-4 weeks",
            },
            {
                "step": 2,
                "title": f"Learn {next_level} fundamentals",
                "description": f"Start learning {next_level} level concepts",
                "duration": "4-6 weeks",
            },
            {
                "step": 3,
                "title": "Practice with projects",
                "description": "Apply your knowledge through practical projects",
                "duration": "6-8 weeks",
            },
        ]
    return roadmap


def get_trending_skills(industry: Optional[str] = None, timeframe: str = "6months") -> List[Dict[str, Any]]:
    # Static list, industry and timeframe are echoed back but not applied
    return [dict(skill) for skill in TRENDING_SKILLS]


def generate_skill_assessment_questions(skill_name: str) -> List[Dict[str, Any]]:
    return [
        {
            "question_id": "q1",
            "question": f"How would you rate your experience with {skill_name}?",
            "type": "multiple-choice",
            "options": list(EXPERIENCE_OPTIONS),
        },
        {
            "question_id": "q2",
            "question": f"Have you completed any projects using {skill_name}?",
            "type": "multiple-choice",
            "options": list(PROJECT_OPTIONS),
        },
    ]


def calculate_skill_level(answers: Iterable[SkillQuizAnswer]) -> str:
    """Sum the option positions of the quiz answers and bucket the total."""
    score = 0
    for answer in answers:
        if answer.question_id == "q1" and answer.answer in EXPERIENCE_OPTIONS:
            score += EXPERIENCE_OPTIONS.index(answer.answer)
        elif answer.question_id == "q2" and answer.answer in PROJECT_OPTIONS:
            score += PROJECT_OPTIONS.index(answer.answer)

    if score <= 2:
        return "beginner"
    if score <= 4:
        return "intermediate"
    if score <= 6:
        return "advanced"
    return "expert"


def get_skill_recommendations(level: str) -> List[str]:
    return list(LEVEL_RECOMMENDATIONS.get(level, []))


def upsert_skill(skills: List[Dict[str, Any]], name: str, level: str, **extra) -> List[Dict[str, Any]]:
    """New skills list with name set to level (matched case-insensitively)."""
    updated = [dict(s) for s in skills or []]
    for skill in updated:
        if skill.get("name", "").lower() == name.lower():
            skill["level"] = level
            skill.update(extra)
            return updated
    updated.append({"name": name, "level": level, "category": "technical", **extra})
    return updated


class SkillsService:
    def __init__(self, db: AsyncSession, ai_service: AIService):
        self.db = db
        self.careers = CareerPathRepository(db)
        self.profiles = ProfileRepository(db)
        self.ai_service = ai_service

    async def gap_analysis(self, profile: Profile, career_path_id: UUID) -> Dict[str, Any]:
        career = await self.careers.get_active(career_path_id)
        if not career:
            raise NotFound("Career path not found")

        gap = await self.ai_service.analyze_skills_gap(profile.skills or [], career.skills or {})
        return {
            "career_path": career.title,
            "gap_analysis": gap,
            "user_skills": profile.skills or [],
            "required_skills": career.skills or {},
        }

    async def learning_path(self, profile: Profile, request: LearningPathRequest) -> Dict[str, Any]:
        career = await self.careers.find_by_title(request.career_goal)
        if not career:
            raise NotFound("Career path not found")

        learning_path = await self.ai_service.generate_learning_path(
            public_profile(profile),
            request.career_goal,
            {
                "required_skills": [s["skill"] for s in career.technical_skills],
                "current_skills": [s["name"] for s in profile.skills or []],
                "time_commitment": request.time_commitment,
                "budget": request.budget,
            },
        )
        return {
            "career_goal": request.career_goal,
            "learning_path": learning_path,
            "profile_summary": {
                "current_skills": profile.skills or [],
                "education_level": (profile.education or {}).get("current_level"),
                "learning_style": (profile.assessment_results or {}).get("learning_style"),
            },
        }

    async def recommendations(self, profile: Profile) -> Dict[str, Any]:
        if not profile.interests:
            raise StateConflict("Please add your interests to get skill recommendations")

        industries = [i["category"] for i in profile.interests]
        careers = await self.careers.list_by_industries(industries, limit=10)
        return {
            "skill_recommendations": analyze_skills_from_careers(careers, profile.skills or []),
            "based_on_interests": profile.interests,
            "matching_careers": [
                {
                    "title": c.title,
                    "industry": c.industry,
                    "top_skills": [s["skill"] for s in c.technical_skills[:3]],
                }
                for c in careers
            ],
        }

    async def update_progress(
        self, profile: Profile, skill_name: str, level: str, evidence: List[str]
    ) -> Dict[str, Any]:
        skills = upsert_skill(profile.skills, skill_name, level, evidence=evidence)
        await self.profiles.update(profile, {"skills": skills})
        await self.db.commit()
        logger.info(f"Profile {profile.id} set {skill_name} to {level}")
        return {"name": skill_name, "level": level, "evidence": evidence}

    def roadmap(self, profile: Profile, skill_name: str) -> Dict[str, Any]:
        current = next(
            (s for s in profile.skills or [] if s.get("name", "").lower() == skill_name.lower()),
            None,
        )
        if current is None:
            raise NotFound("Skill not found in your profile")
        return {
            "skill": skill_name,
            "current_level": current["level"],
            "roadmap": generate_skill_roadmap(skill_name, current["level"]),
        }

    async def submit_quiz(
        self, profile: Profile, skill_name: str, answers: List[SkillQuizAnswer]
    ) -> Dict[str, Any]:
        level = calculate_skill_level(answers)
        await self.profiles.update(profile, {"skills": upsert_skill(profile.skills, skill_name, level)})
        await self.db.commit()
        return {
            "message": "Skill assessment completed",
            "skill": skill_name,
            "assessed_level": level,
            "recommendations": get_skill_recommendations(level),
        }
