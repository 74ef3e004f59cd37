"""Static assessment catalog: the available list and per-type question templates."""

import copy
from typing import Any, Dict, List

from career_guidance.models.assessment import AssessmentType

QUESTION_TEMPLATES: Dict[str, List[Dict[str, Any]]] = {
    AssessmentType.PERSONALITY: [
        {
            "question_id": "p1",
            "question": "I prefer working in a team rather than alone",
            "category": "social_preference",
            "weight": 1,
        },
        {
            "question_id": "p2",
            "question": "I enjoy taking on leadership roles",
            "category": "leadership",
            "weight": 1,
        },
        {
            "question_id": "p3",
            "question": "I prefer structured environments with clear rules",
            "category": "structure_preference",
            "weight": 1,
        },
    ],
    AssessmentType.SKILLS: [
        {
            "question_id": "s1",
            "question": "Rate your proficiency in programming",
            "category": "technical",
            "weight": 1,
        },
        {
            "question_id": "s2",
            "question": "How comfortable are you with data analysis?",
            "category": "analytical",
            "weight": 1,
        },
    ],
    AssessmentType.INTERESTS: [
        {
            "question_id": "i1",
            "question": "I enjoy solving complex problems",
            "category": "problem_solving",
            "weight": 1,
        },
        {
            "question_id": "i2",
            "question": "I like working with technology and digital tools",
            "category": "technology",
            "weight": 1,
        },
    ],
    AssessmentType.APTITUDE: [
        {
            "question_id": "a1",
            "question": "I can quickly understand new concepts",
            "category": "learning_ability",
            "weight": 1,
        },
        {
            "question_id": "a2",
            "question": "I have strong mathematical reasoning skills",
            "category": "mathematical",
            "weight": 1,
        },
    ],
}

# Comprehensive runs every other template in order
QUESTION_TEMPLATES[AssessmentType.COMPREHENSIVE] = [
    question
    for assessment_type in (
        AssessmentType.PERSONALITY,
        AssessmentType.SKILLS,
        AssessmentType.INTERESTS,
        AssessmentType.APTITUDE,
    )
    for question in QUESTION_TEMPLATES[assessment_type]
]

ASSESSMENT_INFO = [
    {
        "type": AssessmentType.PERSONALITY,
        "title": "Personality Assessment",
        "description": "Discover your personality traits and work style preferences",
        "duration": "10-15 minutes",
    },
    {
        "type": AssessmentType.SKILLS,
        "title": "Skills Assessment",
        "description": "Evaluate your current skills and identify areas for improvement",
        "duration": "15-20 minutes",
    },
    {
        "type": AssessmentType.INTERESTS,
        "title": "Interest Assessment",
        "description": "Explore your interests and find matching career paths",
        "duration": "10-12 minutes",
    },
    {
        "type": AssessmentType.APTITUDE,
        "title": "Aptitude Assessment",
        "description": "Test your natural abilities and cognitive strengths",
        "duration": "20-25 minutes",
    },
    {
        "type": AssessmentType.COMPREHENSIVE,
        "title": "Comprehensive Assessment",
        "description": "Complete evaluation combining all assessment types",
        "duration": "45-60 minutes",
    },
]


def is_valid_type(assessment_type: str) -> bool:
    return assessment_type in QUESTION_TEMPLATES


def generate_questions(assessment_type: str) -> List[Dict[str, Any]]:
    """Fresh copy of the fixed question list for a type (empty if unknown)."""
    return copy.deepcopy(QUESTION_TEMPLATES.get(assessment_type, []))


def available_assessments() -> List[Dict[str, Any]]:
    return [
        {**info, "question_count": len(QUESTION_TEMPLATES[info["type"]])}
        for info in ASSESSMENT_INFO
    ]
