import copy
import json
import re
from datetime import date
from typing import Any, Dict, List, Optional

import openai
from loguru import logger
from openai import AsyncOpenAI
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)

from career_guidance.config.settings import settings
from career_guidance.core.errors import UpstreamUnavailable

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

SYSTEM_PROMPT = (
    "You are an expert career advisor for students in India. "
    "Always answer with a single JSON object and nothing else."
)

DEFAULT_ASSESSMENT_ANALYSIS = {
    "personality_analysis": "Unable to analyze personality",
    "skills_analysis": "Unable to analyze skills",
    "interest_analysis": "Unable to analyze interests",
    "aptitude_analysis": "Unable to analyze aptitudes",
    "learning_recommendations": [],
    "work_style_insights": "Unable to analyze work style",
    "career_compatibility": "Unable to analyze compatibility",
}

DEFAULT_CAREER_RECOMMENDATIONS = {
    "recommendations": [
        {
            "career": "Software Developer",
            "match_score": 85,
            "reasoning": "Based on your technical interests and problem-solving skills",
            "required_skills": ["Programming skills", "Problem solving", "Team collaboration"],
            "growth_potential": "High",
            "salary_range": {"min": 400000, "max": 1200000},
            "next_steps": ["Learn a programming language", "Build small projects"],
        },
        {
            "career": "Data Analyst",
            "match_score": 80,
            "reasoning": "Suitable for analytical and detail-oriented individuals",
            "required_skills": ["Analytical skills", "Statistical knowledge", "Communication"],
            "growth_potential": "High",
            "salary_range": {"min": 300000, "max": 800000},
            "next_steps": ["Learn spreadsheet analysis", "Practice with public datasets"],
        },
    ],
    "summary": "Basic recommendations based on common career paths for students with your profile.",
}

DEFAULT_SKILLS_GAP = {
    "current_skills": [],
    "missing_skills": [
        {"skill": "Programming", "priority": "high", "time_to_learn": "3-6 months"}
    ],
    "skills_to_improve": [
        {"skill": "Programming", "current_level": "beginner", "target_level": "intermediate"}
    ],
    "learning_priorities": ["Programming"],
    "timeline": "Focus on building practical projects and gaining hands-on experience",
}

DEFAULT_LEARNING_PATH = {
    "phases": [
        {
            "name": "Foundation",
            "duration": "3-6 months",
            "skills": ["Programming basics", "Mathematics"],
            "courses": [
                {"name": "Basic Programming", "platform": "NPTEL", "cost": "free"},
                {"name": "Mathematics for CS", "platform": "SWAYAM", "cost": "free"},
            ],
            "projects": ["Simple calculator", "Basic web page"],
            "milestones": ["Write small programs confidently"],
        },
        {
            "name": "Intermediate",
            "duration": "6-12 months",
            "skills": ["Data Structures", "Web Development"],
            "courses": [
                {"name": "Data Structures", "platform": "NPTEL", "cost": "free"},
                {"name": "Web Development", "platform": "freeCodeCamp", "cost": "free"},
            ],
            "projects": ["Personal portfolio", "Small web application"],
            "milestones": ["Publish a working web application"],
        },
    ],
    "total_duration": "12-18 months",
    "estimated_cost": "Low",
    "certifications": [],
}

DEFAULT_MARKET_INSIGHTS = {
    "market_trends": [],
    "salary_benchmarks": {},
    "skill_demands": [],
    "growth_opportunities": [],
    "challenges": [],
    "future_outlook": "Unable to determine outlook",
    "top_companies": [],
    "emerging_roles": [],
}


def parse_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Extract the first {...} span of a model reply, None if it is not a JSON object."""
    if not text:
        return None
    match = JSON_OBJECT.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def calculate_age(date_of_birth: Any, today: Optional[date] = None) -> Optional[int]:
    if not date_of_birth:
        return None
    if isinstance(date_of_birth, str):
        date_of_birth = date.fromisoformat(date_of_birth[:10])
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


class AIService:
    """Adapter over the generative model.

    Every public operation returns a dict carrying a ``degraded`` flag. When
    the model is not configured, fails after retries, or replies with
    something that is not a JSON object, the operation's default payload is
    returned with ``degraded`` set to True.
    """

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.model = model or settings.AI_MODEL_NAME
        self.temperature = settings.AI_TEMPERATURE
        self.client = client

        if self.client is not None:
            return
        if not settings.ai_enabled:
            logger.warning("AI_PROJECT_ID not set. AI features will use static fallbacks.")
            return
        if not settings.OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY not set. AI features will use static fallbacks.")
            return

        self.client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.AI_BASE_URL,
            timeout=settings.AI_TIMEOUT_SECONDS,
            max_retries=0,
        )
        logger.info(
            f"AI service initialized (project={settings.AI_PROJECT_ID}, "
            f"location={settings.AI_LOCATION}, model={self.model})"
        )

    @property
    def enabled(self) -> bool:
        return self.client is not None

    @retry(
        stop=stop_after_attempt(settings.AI_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(openai.OpenAIError),
        reraise=True
    )
    async def _complete(self, prompt: str) -> str:
        if not self.enabled:
            raise UpstreamUnavailable("Generative model is not configured")
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt}
            ],
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""

    async def _generate(self, operation: str, prompt: str, default: Dict[str, Any]) -> Dict[str, Any]:
        try:
            text = await self._complete(prompt)
        except UpstreamUnavailable:
            logger.warning(f"AI disabled, returning default {operation}")
            return {**copy.deepcopy(default), "degraded": True}
        except Exception as e:
            logger.error(f"Error generating {operation}: {str(e)}")
            return {**copy.deepcopy(default), "degraded": True}

        parsed = parse_json_object(text)
        if parsed is None:
            logger.error(f"Error parsing {operation}: no valid JSON object in model reply")
            return {**copy.deepcopy(default), "degraded": True}

        parsed["degraded"] = False
        return parsed

    async def analyze_assessment_results(self, assessment_data: Dict[str, Any]) -> Dict[str, Any]:
        """Narrative analysis of a finished assessment ({type, questions, responses})."""
        return await self._generate(
            "assessment analysis",
            self.build_assessment_analysis_prompt(assessment_data),
            DEFAULT_ASSESSMENT_ANALYSIS,
        )

    async def generate_career_recommendations(
        self, profile: Dict[str, Any], assessment_results: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._generate(
            "career recommendations",
            self.build_career_recommendation_prompt(profile, assessment_results),
            DEFAULT_CAREER_RECOMMENDATIONS,
        )

    async def analyze_skills_gap(
        self, user_skills: List[Dict[str, Any]], career_requirements: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._generate(
            "skills gap analysis",
            self.build_skills_gap_prompt(user_skills, career_requirements),
            DEFAULT_SKILLS_GAP,
        )

    async def generate_learning_path(
        self, profile: Dict[str, Any], career_goal: str, skills_gap: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._generate(
            "learning path",
            self.build_learning_path_prompt(profile, career_goal, skills_gap),
            DEFAULT_LEARNING_PATH,
        )

    async def generate_market_insights(self, industry: str, location: str) -> Dict[str, Any]:
        return await self._generate(
            "market insights",
            self.build_market_insights_prompt(industry, location),
            DEFAULT_MARKET_INSIGHTS,
        )

    # Prompt templates
    def build_career_recommendation_prompt(
        self, profile: Dict[str, Any], assessment_results: Dict[str, Any]
    ) -> str:
        education = profile.get("education") or {}
        location = profile.get("location") or {}
        interests = ", ".join(i.get("category", "") for i in profile.get("interests") or [])
        skills = ", ".join(
            f"{s.get('name')} ({s.get('level')})" for s in profile.get("skills") or []
        )
        return f"""
        Analyze the following user profile and assessment results to provide personalized
        career recommendations for the Indian job market.

        User Profile:
        - Name: {profile.get("name")}
        - Age: {calculate_age(profile.get("date_of_birth"))}
        - Education: {education.get("current_level")} in {education.get("stream")}
        - Location: {location.get("city")}, {location.get("state")}
        - Interests: {interests or "not specified"}
        - Current Skills: {skills or "not specified"}

        Assessment Results:
        - Personality Type: {assessment_results.get("personality_type")}
        - Learning Style: {json.dumps(assessment_results.get("learning_style"))}
        - Work Style: {json.dumps(assessment_results.get("work_style"))}
        - Strengths: {", ".join(assessment_results.get("strengths") or [])}
        - Areas for Improvement: {", ".join(assessment_results.get("areas_for_improvement") or [])}

        Please provide:
        1. Top 5 career recommendations with match scores (1-100)
        2. Reasoning for each recommendation
        3. Required skills for each career
        4. Growth potential in Indian market
        5. Salary expectations
        6. Next steps for each career path

        Format your response as JSON with the following structure:
        {{
          "recommendations": [
            {{
              "career": "Career Name",
              "match_score": 85,
              "reasoning": "Detailed reasoning",
              "required_skills": ["skill1", "skill2"],
              "growth_potential": "High/Medium/Low",
              "salary_range": {{"min": 300000, "max": 800000}},
              "next_steps": ["step1", "step2"]
            }}
          ],
          "summary": "Overall career guidance summary"
        }}
        """

    def build_skills_gap_prompt(
        self, user_skills: List[Dict[str, Any]], career_requirements: Dict[str, Any]
    ) -> str:
        return f"""
        Analyze the skills gap between the user's current skills and career requirements.

        User Skills:
        {json.dumps(user_skills, indent=2, default=str)}

        Career Requirements:
        {json.dumps(career_requirements, indent=2, default=str)}

        Provide:
        1. Skills the user already has (with proficiency levels)
        2. Critical skills missing
        3. Skills that need improvement
        4. Learning priorities
        5. Estimated time to acquire missing skills

        Format as JSON:
        {{
          "current_skills": [{{"skill": "name", "level": "proficiency"}}],
          "missing_skills": [{{"skill": "name", "priority": "high/medium/low", "time_to_learn": "estimate"}}],
          "skills_to_improve": [{{"skill": "name", "current_level": "level", "target_level": "level"}}],
          "learning_priorities": ["skill1", "skill2"],
          "timeline": "Overall timeline estimate"
        }}
        """

    def build_learning_path_prompt(
        self, profile: Dict[str, Any], career_goal: str, skills_gap: Dict[str, Any]
    ) -> str:
        education = profile.get("education") or {}
        learning_style = (profile.get("assessment_results") or {}).get("learning_style")
        time_commitment = skills_gap.get("time_commitment", "2-3 hours daily")
        budget = skills_gap.get("budget", "free/low-cost options")
        return f"""
        Create a personalized learning path for an Indian student to achieve their career goal.

        User Profile:
        - Education Level: {education.get("current_level")}
        - Learning Style: {json.dumps(learning_style)}
        - Available Time: {time_commitment}
        - Budget: {budget}

        Career Goal: {career_goal}
        Skills Gap: {json.dumps(skills_gap, indent=2, default=str)}

        Create a structured learning path with:
        1. Phase-wise approach (Beginner, Intermediate, Advanced)
        2. Specific courses/resources (preferably Indian platforms)
        3. Practical projects
        4. Certifications
        5. Timeline for each phase
        6. Milestones and assessments

        Format as JSON:
        {{
          "phases": [
            {{
              "name": "Phase Name",
              "duration": "X months",
              "skills": ["skill1", "skill2"],
              "courses": [{{"name": "course", "platform": "platform", "cost": "free/paid"}}],
              "projects": ["project1", "project2"],
              "milestones": ["milestone1", "milestone2"]
            }}
          ],
          "total_duration": "X months",
          "estimated_cost": "amount",
          "certifications": [{{"name": "cert", "provider": "provider"}}]
        }}
        """

    def build_assessment_analysis_prompt(self, assessment_data: Dict[str, Any]) -> str:
        return f"""
        Analyze the assessment results and provide detailed insights.

        Assessment Data:
        {json.dumps(assessment_data, indent=2, default=str)}

        Provide analysis for:
        1. Personality profile interpretation
        2. Skills assessment results
        3. Interest alignment with careers
        4. Aptitude strengths and weaknesses
        5. Learning style recommendations
        6. Work environment preferences
        7. Career compatibility insights

        Format as JSON:
        {{
          "personality_analysis": "Detailed analysis",
          "skills_analysis": "Skills assessment insights",
          "interest_analysis": "Interest-based insights",
          "aptitude_analysis": "Aptitude insights",
          "learning_recommendations": ["rec1", "rec2"],
          "work_style_insights": "Work style analysis",
          "career_compatibility": "Overall compatibility analysis"
        }}
        """

    def build_market_insights_prompt(self, industry: str, location: str) -> str:
        return f"""
        Provide current market insights for the {industry} industry in {location}, India.

        Include:
        1. Current job market trends
        2. Salary benchmarks
        3. Skill demands
        4. Growth opportunities
        5. Challenges and risks
        6. Future outlook (next 2-3 years)
        7. Top companies hiring
        8. Emerging roles

        Format as JSON:
        {{
          "market_trends": ["trend1", "trend2"],
          "salary_benchmarks": {{"entry": "range", "mid": "range", "senior": "range"}},
          "skill_demands": ["skill1", "skill2"],
          "growth_opportunities": ["opp1", "opp2"],
          "challenges": ["challenge1", "challenge2"],
          "future_outlook": "outlook description",
          "top_companies": ["company1", "company2"],
          "emerging_roles": ["role1", "role2"]
        }}
        """
