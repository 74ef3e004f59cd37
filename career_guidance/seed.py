"""
Replace the career-path catalog with the sample set.

    python -m career_guidance.seed
"""

import asyncio
import copy
from typing import Any, Dict, List

from loguru import logger

from career_guidance.config.database import AsyncSessionLocal, close_db, init_db
from career_guidance.core.logging import configure_logging
from career_guidance.models.career_path import CareerPath
from career_guidance.repositories.career_path_repository import CareerPathRepository

ENGLISH_HINDI = [
    {"language": "English", "proficiency": "intermediate", "required": True},
    {"language": "Hindi", "proficiency": "basic", "required": False},
]

SAMPLE_CAREER_PATHS: List[Dict[str, Any]] = [
    {
        "title": "Software Engineer",
        "description": (
            "Design, develop, and maintain software applications and systems. Work with programming "
            "languages, frameworks, and development tools to create innovative solutions."
        ),
        "industry": "technology",
        "category": "technical",
        "education_requirements": {
            "minimum": "bachelor",
            "preferred": ["bachelor", "master"],
            "specific_degrees": ["Computer Science", "Information Technology", "Software Engineering"],
        },
        "skills": {
            "technical": [
                {"skill": "Programming Languages", "importance": "essential", "level": "intermediate"},
                {"skill": "Data Structures & Algorithms", "importance": "essential", "level": "intermediate"},
                {"skill": "Database Management", "importance": "important", "level": "beginner"},
                {"skill": "Version Control (Git)", "importance": "important", "level": "beginner"},
                {"skill": "Software Testing", "importance": "important", "level": "beginner"},
                {"skill": "Cloud Computing", "importance": "nice-to-have", "level": "beginner"},
            ],
            "soft": [
                {"skill": "Problem Solving", "importance": "essential"},
                {"skill": "Communication", "importance": "important"},
                {"skill": "Teamwork", "importance": "important"},
                {"skill": "Time Management", "importance": "important"},
            ],
            "languages": ENGLISH_HINDI,
        },
        "experience": {
            "entry_level": {
                "description": "Junior developer roles with basic programming tasks",
                "typical_roles": ["Junior Software Developer", "Software Engineer Trainee", "Associate Developer"],
                "salary_range": {"min": 300000, "max": 600000, "currency": "INR"},
            },
            "mid_level": {
                "description": "Mid-level developer with 2-5 years experience",
                "typical_roles": ["Software Engineer", "Senior Developer", "Tech Lead"],
                "salary_range": {"min": 600000, "max": 1200000, "currency": "INR"},
            },
            "senior_level": {
                "description": "Senior developer with 5+ years experience",
                "typical_roles": ["Senior Software Engineer", "Principal Engineer", "Engineering Manager"],
                "salary_range": {"min": 1200000, "max": 2500000, "currency": "INR"},
            },
        },
        "growth_prospects": {
            "market_demand": "high",
            "growth_rate": "fast",
            "future_outlook": "Excellent growth prospects with increasing digitalization",
            "emerging_trends": ["AI/ML Integration", "Cloud-Native Development", "DevOps Practices"],
        },
        "work_environment": {"location": "hybrid", "schedule": "flexible", "team_size": "medium", "travel": "none"},
        "personality_traits": [
            {"trait": "Analytical Thinking", "importance": "essential"},
            {"trait": "Attention to Detail", "importance": "essential"},
            {"trait": "Creativity", "importance": "important"},
            {"trait": "Persistence", "importance": "important"},
        ],
        "certifications": [
            {"name": "AWS Certified Developer", "provider": "Amazon", "importance": "important", "cost": 15000, "duration": "3 months"},
            {"name": "Google Cloud Professional Developer", "provider": "Google", "importance": "important", "cost": 12000, "duration": "2 months"},
            {"name": "Microsoft Azure Developer Associate", "provider": "Microsoft", "importance": "nice-to-have", "cost": 10000, "duration": "2 months"},
        ],
        "learning_path": [
            {
                "step": 1,
                "title": "Learn Programming Fundamentals",
                "description": "Master basic programming concepts and syntax",
                "duration": "3-4 months",
                "resources": ["Online courses", "Coding bootcamps", "Practice platforms"],
                "prerequisites": ["Basic computer knowledge"],
            },
            {
                "step": 2,
                "title": "Choose a Specialization",
                "description": "Focus on web development, mobile apps, or backend systems",
                "duration": "2-3 months",
                "resources": ["Specialized courses", "Project-based learning"],
                "prerequisites": ["Programming fundamentals"],
            },
            {
                "step": 3,
                "title": "Build Real Projects",
                "description": "Create portfolio projects to showcase skills",
                "duration": "2-4 months",
                "resources": ["GitHub", "Portfolio websites", "Open source contributions"],
                "prerequisites": ["Specialization knowledge"],
            },
        ],
        "regional_context": {
            "top_companies": ["TCS", "Infosys", "Wipro", "HCL", "Accenture", "Microsoft", "Google", "Amazon"],
            "major_cities": ["Bangalore", "Hyderabad", "Pune", "Chennai", "Mumbai", "Delhi"],
            "government_opportunities": ["Digital India initiatives", "Government IT projects", "Public sector undertakings"],
            "startup_ecosystem": True,
            "skill_gap": "High demand for skilled developers",
            "regional_variations": [
                {"region": "Tier 1 Cities", "opportunities": "High-paying roles in MNCs", "salary_adjustment": 1.2},
                {"region": "Tier 2 Cities", "opportunities": "Growing IT hubs", "salary_adjustment": 0.8},
                {"region": "Tier 3 Cities", "opportunities": "Remote work options", "salary_adjustment": 0.6},
            ],
        },
        "ai_insights": {
            "automation_risk": "low",
            "future_skills": ["AI/ML Integration", "Cloud Architecture", "DevOps", "Cybersecurity"],
            "market_trends": ["Remote work adoption", "Digital transformation", "Startup ecosystem growth"],
            "recommendations": ["Focus on cloud technologies", "Learn AI/ML basics", "Develop soft skills"],
        },
    },
    {
        "title": "Data Scientist",
        "description": (
            "Analyze complex data to extract insights and build predictive models. Use statistical "
            "methods, machine learning, and programming to solve business problems."
        ),
        "industry": "technology",
        "category": "analytical",
        "education_requirements": {
            "minimum": "bachelor",
            "preferred": ["master", "phd"],
            "specific_degrees": ["Data Science", "Statistics", "Mathematics", "Computer Science"],
        },
        "skills": {
            "technical": [
                {"skill": "Python Programming", "importance": "essential", "level": "intermediate"},
                {"skill": "R Programming", "importance": "important", "level": "intermediate"},
                {"skill": "Machine Learning", "importance": "essential", "level": "intermediate"},
                {"skill": "Statistics", "importance": "essential", "level": "intermediate"},
                {"skill": "SQL", "importance": "essential", "level": "intermediate"},
                {"skill": "Data Visualization", "importance": "important", "level": "beginner"},
            ],
            "soft": [
                {"skill": "Critical Thinking", "importance": "essential"},
                {"skill": "Business Acumen", "importance": "important"},
                {"skill": "Communication", "importance": "important"},
                {"skill": "Problem Solving", "importance": "essential"},
            ],
            "languages": ENGLISH_HINDI,
        },
        "experience": {
            "entry_level": {
                "description": "Junior data scientist roles with basic analytics tasks",
                "typical_roles": ["Junior Data Scientist", "Data Analyst", "Business Analyst"],
                "salary_range": {"min": 400000, "max": 800000, "currency": "INR"},
            },
            "mid_level": {
                "description": "Mid-level data scientist with 2-5 years experience",
                "typical_roles": ["Data Scientist", "Senior Data Scientist", "ML Engineer"],
                "salary_range": {"min": 800000, "max": 1500000, "currency": "INR"},
            },
            "senior_level": {
                "description": "Senior data scientist with 5+ years experience",
                "typical_roles": ["Principal Data Scientist", "Data Science Manager", "Chief Data Officer"],
                "salary_range": {"min": 1500000, "max": 3000000, "currency": "INR"},
            },
        },
        "growth_prospects": {
            "market_demand": "high",
            "growth_rate": "fast",
            "future_outlook": "Excellent growth with increasing data-driven decision making",
            "emerging_trends": ["AI/ML Automation", "Real-time Analytics", "Edge Computing"],
        },
        "work_environment": {"location": "hybrid", "schedule": "flexible", "team_size": "small", "travel": "occasional"},
        "personality_traits": [
            {"trait": "Analytical Thinking", "importance": "essential"},
            {"trait": "Curiosity", "importance": "essential"},
            {"trait": "Attention to Detail", "importance": "important"},
            {"trait": "Patience", "importance": "important"},
        ],
        "certifications": [
            {"name": "Google Data Analytics Certificate", "provider": "Google", "importance": "important", "cost": 8000, "duration": "2 months"},
            {"name": "IBM Data Science Professional Certificate", "provider": "IBM", "importance": "important", "cost": 10000, "duration": "3 months"},
            {"name": "Microsoft Azure Data Scientist Associate", "provider": "Microsoft", "importance": "nice-to-have", "cost": 12000, "duration": "2 months"},
        ],
        "learning_path": [
            {
                "step": 1,
                "title": "Learn Programming & Statistics",
                "description": "Master Python/R and statistical concepts",
                "duration": "4-6 months",
                "resources": ["Online courses", "Statistics textbooks", "Practice datasets"],
                "prerequisites": ["Basic mathematics"],
            },
            {
                "step": 2,
                "title": "Machine Learning Fundamentals",
                "description": "Learn ML algorithms and techniques",
                "duration": "3-4 months",
                "resources": ["ML courses", "Kaggle competitions", "Research papers"],
                "prerequisites": ["Programming and statistics"],
            },
            {
                "step": 3,
                "title": "Real-world Projects",
                "description": "Work on end-to-end data science projects",
                "duration": "3-6 months",
                "resources": ["Portfolio projects", "Open source contributions", "Industry datasets"],
                "prerequisites": ["ML fundamentals"],
            },
        ],
        "regional_context": {
            "top_companies": ["Flipkart", "Amazon", "Microsoft", "Google", "TCS", "Infosys", "Wipro", "Accenture"],
            "major_cities": ["Bangalore", "Hyderabad", "Mumbai", "Delhi", "Pune", "Chennai"],
            "government_opportunities": ["Digital India analytics", "Government data initiatives", "Public policy research"],
            "startup_ecosystem": True,
            "skill_gap": "High demand for skilled data scientists",
            "regional_variations": [
                {"region": "Tier 1 Cities", "opportunities": "High-paying roles in tech companies", "salary_adjustment": 1.3},
                {"region": "Tier 2 Cities", "opportunities": "Growing analytics hubs", "salary_adjustment": 0.9},
                {"region": "Tier 3 Cities", "opportunities": "Remote analytics roles", "salary_adjustment": 0.7},
            ],
        },
        "ai_insights": {
            "automation_risk": "medium",
            "future_skills": ["Deep Learning", "Natural Language Processing", "Computer Vision", "MLOps"],
            "market_trends": ["AI adoption", "Data privacy regulations", "Real-time analytics"],
            "recommendations": ["Focus on domain expertise", "Learn MLOps", "Develop business skills"],
        },
    },
    {
        "title": "Digital Marketing Specialist",
        "description": (
            "Develop and execute digital marketing strategies to promote products and services online. "
            "Use various digital channels to reach target audiences and drive engagement."
        ),
        "industry": "media",
        "category": "creative",
        "education_requirements": {
            "minimum": "bachelor",
            "preferred": ["bachelor", "master"],
            "specific_degrees": ["Marketing", "Business Administration", "Communications", "Journalism"],
        },
        "skills": {
            "technical": [
                {"skill": "Social Media Marketing", "importance": "essential", "level": "intermediate"},
                {"skill": "SEO/SEM", "importance": "essential", "level": "intermediate"},
                {"skill": "Content Creation", "importance": "essential", "level": "intermediate"},
                {"skill": "Analytics Tools", "importance": "important", "level": "beginner"},
                {"skill": "Email Marketing", "importance": "important", "level": "beginner"},
                {"skill": "Graphic Design", "importance": "nice-to-have", "level": "beginner"},
            ],
            "soft": [
                {"skill": "Creativity", "importance": "essential"},
                {"skill": "Communication", "importance": "essential"},
                {"skill": "Analytical Thinking", "importance": "important"},
                {"skill": "Adaptability", "importance": "important"},
            ],
            "languages": [
                {"language": "English", "proficiency": "intermediate", "required": True},
                {"language": "Hindi", "proficiency": "intermediate", "required": True},
                {"language": "Regional Languages", "proficiency": "basic", "required": False},
            ],
        },
        "experience": {
            "entry_level": {
                "description": "Junior digital marketing roles with basic campaign management",
                "typical_roles": ["Digital Marketing Executive", "Social Media Coordinator", "Content Creator"],
                "salary_range": {"min": 250000, "max": 500000, "currency": "INR"},
            },
            "mid_level": {
                "description": "Mid-level digital marketing specialist with 2-5 years experience",
                "typical_roles": ["Digital Marketing Specialist", "Marketing Manager", "Brand Manager"],
                "salary_range": {"min": 500000, "max": 1000000, "currency": "INR"},
            },
            "senior_level": {
                "description": "Senior digital marketing professional with 5+ years experience",
                "typical_roles": ["Digital Marketing Manager", "Marketing Director", "Chief Marketing Officer"],
                "salary_range": {"min": 1000000, "max": 2000000, "currency": "INR"},
            },
        },
        "growth_prospects": {
            "market_demand": "high",
            "growth_rate": "fast",
            "future_outlook": "Strong growth with increasing digital adoption",
            "emerging_trends": ["AI-powered Marketing", "Video Marketing", "Influencer Marketing"],
        },
        "work_environment": {"location": "hybrid", "schedule": "flexible", "team_size": "medium", "travel": "occasional"},
        "personality_traits": [
            {"trait": "Creativity", "importance": "essential"},
            {"trait": "Communication", "importance": "essential"},
            {"trait": "Adaptability", "importance": "important"},
            {"trait": "Analytical Thinking", "importance": "important"},
        ],
        "certifications": [
            {"name": "Google Ads Certification", "provider": "Google", "importance": "important", "cost": 0, "duration": "1 month"},
            {"name": "Facebook Blueprint Certification", "provider": "Facebook", "importance": "important", "cost": 0, "duration": "1 month"},
            {"name": "HubSpot Content Marketing Certification", "provider": "HubSpot", "importance": "nice-to-have", "cost": 0, "duration": "2 weeks"},
        ],
        "learning_path": [
            {
                "step": 1,
                "title": "Learn Digital Marketing Fundamentals",
                "description": "Understand digital marketing concepts and channels",
                "duration": "2-3 months",
                "resources": ["Online courses", "Industry blogs", "Case studies"],
                "prerequisites": ["Basic marketing knowledge"],
            },
            {
                "step": 2,
                "title": "Master Key Tools and Platforms",
                "description": "Learn to use marketing tools and social media platforms",
                "duration": "2-3 months",
                "resources": ["Platform tutorials", "Tool certifications", "Practice accounts"],
                "prerequisites": ["Digital marketing fundamentals"],
            },
            {
                "step": 3,
                "title": "Build Campaign Experience",
                "description": "Create and manage real marketing campaigns",
                "duration": "3-6 months",
                "resources": ["Personal projects", "Freelance work", "Internships"],
                "prerequisites": ["Tool proficiency"],
            },
        ],
        "regional_context": {
            "top_companies": ["Flipkart", "Amazon", "Reliance", "Tata", "HDFC", "ICICI", "Startups"],
            "major_cities": ["Mumbai", "Delhi", "Bangalore", "Chennai", "Hyderabad", "Pune"],
            "government_opportunities": ["Digital India campaigns", "Government social media", "Public awareness campaigns"],
            "startup_ecosystem": True,
            "skill_gap": "High demand for digital marketing skills",
            "regional_variations": [
                {"region": "Tier 1 Cities", "opportunities": "High-paying roles in MNCs", "salary_adjustment": 1.2},
                {"region": "Tier 2 Cities", "opportunities": "Growing digital agencies", "salary_adjustment": 0.8},
                {"region": "Tier 3 Cities", "opportunities": "Remote marketing roles", "salary_adjustment": 0.6},
            ],
        },
        "ai_insights": {
            "automation_risk": "medium",
            "future_skills": ["AI Marketing Tools", "Marketing Automation", "Data Analytics", "Personalization"],
            "market_trends": ["Video content growth", "E-commerce expansion", "Mobile-first marketing"],
            "recommendations": ["Learn video marketing", "Develop analytics skills", "Stay updated with trends"],
        },
    },
]


def build_career_path(data: Dict[str, Any]) -> CareerPath:
    """CareerPath from catalog data, with the scalar columns filled in."""
    data = copy.deepcopy(data)
    salary = data["experience"]["entry_level"]["salary_range"]
    return CareerPath(
        **data,
        education_minimum=data["education_requirements"]["minimum"],
        market_demand=data["growth_prospects"]["market_demand"],
        entry_salary_min=salary.get("min"),
        entry_salary_max=salary.get("max"),
    )


async def seed_career_paths() -> int:
    await init_db()
    try:
        async with AsyncSessionLocal() as session:
            repository = CareerPathRepository(session)
            await repository.delete_all()
            logger.info("Cleared existing career paths")

            for data in SAMPLE_CAREER_PATHS:
                await repository.add(build_career_path(data))
            await session.commit()
            logger.info(f"Inserted {len(SAMPLE_CAREER_PATHS)} career paths")
    finally:
        await close_db()
    return len(SAMPLE_CAREER_PATHS)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_career_paths())
