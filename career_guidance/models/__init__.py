from career_guidance.models.base import Base
from career_guidance.models.profile import Profile
from career_guidance.models.assessment import (
    Assessment,
    AssessmentResponse,
    AssessmentStatus,
    AssessmentType,
)
from career_guidance.models.career_path import CareerPath

__all__ = [
    "Base",
    "Profile",
    "Assessment",
    "AssessmentResponse",
    "AssessmentStatus",
    "AssessmentType",
    "CareerPath",
]
