"""
Turns the answered questions of an assessment into its structured results.

Every answer is normalized to a 0-100 score, scores are averaged per
question category (weighted), and the category scores drive each section
of the results. Sections the assessment type does not cover keep the
representative baseline below.
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, Tuple

NEUTRAL_SCORE = 50.0

BASELINE_RESULTS: Dict[str, Any] = {
    "personality_type": "Analytical",
    "personality_traits": [
        {"trait": "Analytical", "score": 85, "description": "Strong analytical thinking"},
        {"trait": "Creative", "score": 70, "description": "Good creative problem solving"},
    ],
    "skills_profile": [
        {
            "skill": "Programming",
            "current_level": "Intermediate",
            "potential_level": "Advanced",
            "gap": "Practice more projects",
        }
    ],
    "interests_profile": [
        {"category": "Technology", "score": 90, "related_careers": ["Software Engineer", "Data Scientist"]}
    ],
    "aptitudes": [{"area": "Logical Reasoning", "score": 85, "percentile": 90}],
    "learning_style": {
        "primary": "Visual",
        "secondary": "Kinesthetic",
        "characteristics": ["Prefers diagrams and charts", "Learns by doing"],
    },
    "work_style": {
        "preferred": "Collaborative",
        "characteristics": ["Works well in teams", "Enjoys brainstorming"],
        "environment": "Open office",
    },
    "career_recommendations": [
        {
            "career": "Software Engineer",
            "match_score": 88,
            "reasoning": "Strong technical aptitude and problem-solving skills",
            "required_skills": ["Programming", "Problem Solving"],
            "growth_potential": "High",
        }
    ],
    "strengths": ["Analytical thinking", "Problem solving", "Learning ability"],
    "areas_for_improvement": ["Communication", "Leadership"],
    "next_steps": ["Take programming courses", "Join coding communities"],
}

# label: how the category reads in strengths/gaps; type: personality type it suggests
CATEGORIES: Dict[str, Dict[str, str]] = {
    "social_preference": {"label": "Team collaboration", "type": "Collaborative"},
    "leadership": {"label": "Leadership", "type": "Leader"},
    "structure_preference": {"label": "Working with structure", "type": "Organized"},
    "technical": {"label": "Programming", "type": "Analytical"},
    "analytical": {"label": "Data analysis", "type": "Analytical"},
    "problem_solving": {"label": "Problem solving", "type": "Analytical"},
    "technology": {"label": "Technology", "type": "Innovator"},
    "learning_ability": {"label": "Learning ability", "type": "Explorer"},
    "mathematical": {"label": "Mathematical reasoning", "type": "Analytical"},
}

PERSONALITY_TRAITS = {
    "social_preference": "Collaborative",
    "leadership": "Leadership",
    "structure_preference": "Structured",
}
SKILL_CATEGORIES = {"technical": "Programming", "analytical": "Data Analysis"}
INTEREST_CATEGORIES = {
    "technology": ("Technology", ["Software Engineer", "Data Scientist"]),
    "problem_solving": ("Problem Solving", ["Data Scientist", "Business Analyst"]),
}
APTITUDE_CATEGORIES = {"learning_ability": "Learning Ability", "mathematical": "Mathematical Reasoning"}

CAREER_PROFILES = [
    {
        "career": "Software Engineer",
        "categories": ["technical", "problem_solving", "technology", "mathematical"],
        "required_skills": ["Programming", "Problem Solving"],
        "growth_potential": "High",
    },
    {
        "career": "Data Scientist",
        "categories": ["analytical", "mathematical", "problem_solving", "technical"],
        "required_skills": ["Statistics", "Python", "Machine Learning"],
        "growth_potential": "High",
    },
    {
        "career": "Product Manager",
        "categories": ["leadership", "social_preference", "problem_solving"],
        "required_skills": ["Communication", "Leadership", "Product Strategy"],
        "growth_potential": "High",
    },
    {
        "career": "Operations Manager",
        "categories": ["structure_preference", "leadership"],
        "required_skills": ["Planning", "Process Management"],
        "growth_potential": "Medium",
    },
    {
        "career": "Digital Marketing Specialist",
        "categories": ["social_preference", "technology", "learning_ability"],
        "required_skills": ["SEO", "Content Strategy", "Analytics"],
        "growth_potential": "High",
    },
]

LEVELS = ["Beginner", "Intermediate", "Advanced", "Expert"]

LIKERT_PHRASES = {
    "strongly disagree": 0.0,
    "disagree": 25.0,
    "neutral": 50.0,
    "agree": 75.0,
    "strongly agree": 100.0,
    "no experience": 0.0,
    "none": 0.0,
    "beginner": 25.0,
    "intermediate": 50.0,
    "advanced": 75.0,
    "expert": 100.0,
    "yes": 100.0,
    "no": 0.0,
    "true": 100.0,
    "false": 0.0,
}

LEARNING_STYLE_TRAITS = {
    "Visual": ["Prefers diagrams and charts", "Remembers what they see"],
    "Logical": ["Prefers reasoning through problems", "Likes patterns and systems"],
    "Kinesthetic": ["Learns by doing", "Prefers hands-on practice"],
    "Social": ["Learns well in groups", "Enjoys discussing ideas"],
    "Solitary": ["Prefers self-paced study", "Reflects before acting"],
}


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def normalize_answer(answer: Any) -> float:
    """Map an answer value to a 0-100 score.

    Numbers 1-5 are read as a Likert scale, other numbers as a percentage.
    Known phrases (agree/disagree, skill levels, yes/no) have fixed scores;
    anything unrecognized scores as neutral.
    """
    if isinstance(answer, bool):
        return 100.0 if answer else 0.0
    if isinstance(answer, (int, float)):
        if 1 <= answer <= 5:
            return (float(answer) - 1) * 25
        return _clamp(float(answer))
    if isinstance(answer, str):
        text = answer.strip().lower()
        if text in LIKERT_PHRASES:
            return LIKERT_PHRASES[text]
        try:
            return normalize_answer(float(text))
        except ValueError:
            return NEUTRAL_SCORE
    if isinstance(answer, Mapping) and "value" in answer:
        return normalize_answer(answer["value"])
    if isinstance(answer, (list, tuple)) and answer:
        return sum(normalize_answer(item) for item in answer) / len(answer)
    return NEUTRAL_SCORE


def score_responses(
    questions: Iterable[Mapping[str, Any]], responses: Iterable[Mapping[str, Any]]
) -> Tuple[Dict[str, float], Dict[str, int]]:
    """Returns (score per question id, weighted score per category)."""
    answers = {r["question_id"]: r["answer"] for r in responses}
    scores: Dict[str, float] = {}
    totals: Dict[str, float] = {}
    weights: Dict[str, float] = {}

    for question in questions:
        question_id = question["question_id"]
        if question_id not in answers:
            continue
        score = normalize_answer(answers[question_id])
        scores[question_id] = score

        weight = float(question.get("weight") or 1)
        category = question.get("category", "general")
        totals[category] = totals.get(category, 0.0) + score * weight
        weights[category] = weights.get(category, 0.0) + weight

    category_scores = {
        category: int(round(totals[category] / weights[category]))
        for category in totals
        if weights[category] > 0
    }
    return scores, category_scores


def _level(score: int) -> str:
    if score < 40:
        return LEVELS[0]
    if score < 70:
        return LEVELS[1]
    if score < 90:
        return LEVELS[2]
    return LEVELS[3]


def _describe(trait: str, score: int) -> str:
    if score >= 70:
        return f"Strong {trait.lower()} tendency"
    if score >= 40:
        return f"Moderate {trait.lower()} tendency"
    return f"Low {trait.lower()} tendency"


def _label(category: str) -> str:
    return CATEGORIES.get(category, {}).get("label", category.replace("_", " ").capitalize())


def _learning_style(category_scores: Dict[str, int]) -> Dict[str, Any]:
    def avg(*categories):
        values = [category_scores[c] for c in categories if c in category_scores]
        return sum(values) / len(values) if values else None

    logical = avg("mathematical", "analytical")
    hands_on = avg("technical", "technology")
    social = category_scores.get("social_preference")
    if logical is None and hands_on is None and social is None:
        return copy.deepcopy(BASELINE_RESULTS["learning_style"])

    if logical is not None and logical >= 70:
        primary = "Logical"
    elif hands_on is not None and hands_on >= 70:
        primary = "Kinesthetic"
    else:
        primary = "Visual"

    if social is None:
        secondary = "Kinesthetic" if primary != "Kinesthetic" else "Visual"
    else:
        secondary = "Social" if social >= 60 else "Solitary"

    return {
        "primary": primary,
        "secondary": secondary,
        "characteristics": LEARNING_STYLE_TRAITS[primary][:1] + LEARNING_STYLE_TRAITS[secondary][:1],
    }


def _work_style(category_scores: Dict[str, int]) -> Dict[str, Any]:
    social = category_scores.get("social_preference")
    if social is None:
        style = copy.deepcopy(BASELINE_RESULTS["work_style"])
    elif social >= 60:
        style = {
            "preferred": "Collaborative",
            "characteristics": ["Works well in teams", "Enjoys brainstorming"],
            "environment": "Open office",
        }
    else:
        style = {
            "preferred": "Independent",
            "characteristics": ["Works well autonomously", "Values focused time"],
            "environment": "Quiet workspace",
        }

    if category_scores.get("leadership", 0) >= 70:
        style["characteristics"].append("Takes initiative")
    if category_scores.get("structure_preference", 0) >= 70:
        style["environment"] = "Structured office"
    return style


def _career_recommendations(category_scores: Dict[str, int]) -> List[Dict[str, Any]]:
    matches = []
    for profile in CAREER_PROFILES:
        covered = [c for c in profile["categories"] if c in category_scores]
        if not covered:
            continue
        match_score = int(round(sum(category_scores[c] for c in covered) / len(covered)))
        best = sorted(covered, key=lambda c: category_scores[c], reverse=True)[:2]
        matches.append(
            {
                "career": profile["career"],
                "match_score": match_score,
                "reasoning": "Based on your " + " and ".join(_label(c).lower() for c in best) + " scores",
                "required_skills": list(profile["required_skills"]),
                "growth_potential": profile["growth_potential"],
            }
        )
    matches.sort(key=lambda m: m["match_score"], reverse=True)
    return matches[:3]


def project_results(
    assessment_type: str,
    questions: List[Mapping[str, Any]],
    responses: Iterable[Mapping[str, Any]],
) -> Tuple[Dict[str, Any], Dict[str, float]]:
    """Compute the results of an assessment from its questions and responses.

    Returns (results, score per question id). Pure: the same inputs always
    give the same output.
    """
    scores, category_scores = score_responses(questions, responses)
    results = copy.deepcopy(BASELINE_RESULTS)
    results["assessment_type"] = assessment_type
    results["category_scores"] = dict(category_scores)
    if not category_scores:
        return results, scores

    ranked = sorted(category_scores.items(), key=lambda item: (-item[1], item[0]))

    results["personality_type"] = CATEGORIES.get(ranked[0][0], {}).get("type", "Analytical")

    traits = [
        {"trait": trait, "score": category_scores[c], "description": _describe(trait, category_scores[c])}
        for c, trait in PERSONALITY_TRAITS.items()
        if c in category_scores
    ]
    if traits:
        results["personality_traits"] = traits

    skills = []
    for c, skill in SKILL_CATEGORIES.items():
        if c not in category_scores:
            continue
        current = _level(category_scores[c])
        potential = LEVELS[min(LEVELS.index(current) + 1, len(LEVELS) - 1)]
        skills.append(
            {
                "skill": skill,
                "current_level": current,
                "potential_level": potential,
                "gap": "Keep skills current by mentoring others" if current == potential else "Practice more projects",
            }
        )
    if skills:
        results["skills_profile"] = skills

    interests = [
        {"category": name, "score": category_scores[c], "related_careers": list(careers)}
        for c, (name, careers) in INTEREST_CATEGORIES.items()
        if c in category_scores
    ]
    if interests:
        results["interests_profile"] = interests

    aptitudes = [
        {"area": area, "score": category_scores[c], "percentile": max(1, min(99, category_scores[c]))}
        for c, area in APTITUDE_CATEGORIES.items()
        if c in category_scores
    ]
    if aptitudes:
        results["aptitudes"] = aptitudes

    results["learning_style"] = _learning_style(category_scores)
    results["work_style"] = _work_style(category_scores)

    careers = _career_recommendations(category_scores)
    if careers:
        results["career_recommendations"] = careers

    strengths = [_label(c) for c, score in ranked if score >= 70][:3]
    if not strengths and ranked[0][1] >= 60:
        strengths = [_label(ranked[0][0])]
    results["strengths"] = strengths

    gaps = [_label(c) for c, score in reversed(ranked) if score < 60][:3]
    results["areas_for_improvement"] = gaps

    next_steps = [f"Build your {gap.lower()} through guided practice" for gap in gaps]
    next_steps.append(f"Explore the {results['career_recommendations'][0]['career']} learning path")
    results["next_steps"] = next_steps

    return results, scores
