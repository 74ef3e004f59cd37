from sqlalchemy import Column, String, DateTime, Date, JSON, Boolean, Uuid
from sqlalchemy.orm import relationship
import uuid

from career_guidance.models.base import Base
from career_guidance.utils.time import utc_now


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String(10), nullable=True)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(20), nullable=False)

    # {state, city, pincode}
    location = Column(JSON, default=dict)
    # {current_level, stream, specialization, institution, year_of_passing}
    education = Column(JSON, default=dict)

    # [{name, level, category}]
    skills = Column(JSON, default=list)
    # [{category, specific_interests}]
    interests = Column(JSON, default=list)
    # {short_term, long_term, preferred_industries, salary_expectation}
    career_goals = Column(JSON, default=dict)
    # {work_environment, work_schedule, team_size}
    preferences = Column(JSON, default=dict)

    # Copy of the latest completed assessment, never the source of truth
    assessment_results = Column(JSON, default=dict)

    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Relationships
    assessments = relationship("Assessment", back_populates="profile")

    @property
    def has_assessment_results(self) -> bool:
        return bool((self.assessment_results or {}).get("personality_type"))
