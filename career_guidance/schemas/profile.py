from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints, field_validator

Gender = Literal["male", "female", "other", "prefer-not-to-say"]
EducationLevel = Literal["10th", "12th", "undergraduate", "postgraduate", "phd", "working"]
Stream = Literal["science", "commerce", "arts", "engineering", "medical", "other"]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]
SkillCategory = Literal["technical", "soft", "language", "domain-specific"]
InterestCategory = Literal[
    "technology", "business", "arts", "science", "healthcare",
    "education", "finance", "media", "sports", "other",
]
WorkEnvironment = Literal["remote", "office", "hybrid", "field-work"]
WorkSchedule = Literal["flexible", "fixed", "shift-based"]
TeamSize = Literal["small", "medium", "large", "no-preference"]

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
Phone = Annotated[str, StringConstraints(pattern=r"^[6-9]\d{9}$")]
Pincode = Annotated[str, StringConstraints(pattern=r"^\d{6}$")]
NonEmpty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
GoalText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


def normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


# Lower-cased and trimmed on every write path
Email = Annotated[EmailStr, BeforeValidator(normalize_email)]


# Location / education
class Location(BaseModel):
    state: NonEmpty
    city: NonEmpty
    pincode: Optional[Pincode] = None


class LocationUpdate(BaseModel):
    state: Optional[NonEmpty] = None
    city: Optional[NonEmpty] = None
    pincode: Optional[Pincode] = None


class EducationUpdate(BaseModel):
    current_level: Optional[EducationLevel] = None
    stream: Optional[Stream] = None
    specialization: Optional[str] = None
    institution: Optional[str] = None
    year_of_passing: Optional[int] = Field(default=None, ge=1950)

    @field_validator("specialization", "institution")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("year_of_passing")
    @classmethod
    def year_not_too_far(cls, v):
        if v is not None and v > date.today().year + 5:
            raise ValueError("Please enter a valid year")
        return v


class Education(EducationUpdate):
    current_level: EducationLevel


# Skills / interests / goals / preferences
class Skill(BaseModel):
    name: NonEmpty
    level: SkillLevel
    category: SkillCategory


class Interest(BaseModel):
    category: InterestCategory
    specific_interests: List[str] = Field(default_factory=list)


class SalaryExpectation(BaseModel):
    min: Optional[int] = Field(default=None, ge=0)
    max: Optional[int] = Field(default=None, ge=0)
    currency: str = "INR"


class CareerGoals(BaseModel):
    short_term: Optional[GoalText] = None
    long_term: Optional[GoalText] = None
    preferred_industries: Optional[List[str]] = None
    salary_expectation: Optional[SalaryExpectation] = None


class Preferences(BaseModel):
    work_environment: Optional[WorkEnvironment] = None
    work_schedule: Optional[WorkSchedule] = None
    team_size: Optional[TeamSize] = None


class SkillsUpdate(BaseModel):
    skills: List[Skill]


class InterestsUpdate(BaseModel):
    interests: List[Interest]


# Profile
class ProfileCreate(BaseModel):
    name: Name
    email: Email
    password: str = Field(min_length=6)
    phone: Optional[Phone] = None
    date_of_birth: date
    gender: Gender
    location: Location
    education: Education


class ProfileUpdate(BaseModel):
    """Fields a profile owner may change, anything else is ignored"""

    name: Optional[Name] = None
    phone: Optional[Phone] = None
    location: Optional[LocationUpdate] = None
    education: Optional[EducationUpdate] = None
    interests: Optional[List[Interest]] = None
    skills: Optional[List[Skill]] = None
    career_goals: Optional[CareerGoals] = None
    preferences: Optional[Preferences] = None


class ProfileResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: date
    gender: str
    location: Dict[str, Any] = Field(default_factory=dict)
    education: Dict[str, Any] = Field(default_factory=dict)
    skills: List[Dict[str, Any]] = Field(default_factory=list)
    interests: List[Dict[str, Any]] = Field(default_factory=list)
    career_goals: Dict[str, Any] = Field(default_factory=dict)
    preferences: Dict[str, Any] = Field(default_factory=dict)
    assessment_results: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator(
        "location", "education", "career_goals", "preferences", "assessment_results",
        mode="before",
    )
    @classmethod
    def empty_dict(cls, v):
        return v or {}

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def empty_list(cls, v):
        return v or []


class ProfileMessage(BaseModel):
    message: str
    profile: ProfileResponse
