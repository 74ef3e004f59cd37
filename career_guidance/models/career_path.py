from sqlalchemy import Column, String, DateTime, Float, JSON, Text, Boolean, Index, Uuid
import uuid

from career_guidance.models.base import Base
from career_guidance.utils.time import utc_now


class CareerPath(Base):
    __tablename__ = "career_paths"
    __table_args__ = (
        Index("ix_career_paths_industry_category", "industry", "category"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    industry = Column(String(50), nullable=False)
    category = Column(String(50), nullable=False)

    # {minimum, preferred, specific_degrees}
    education_requirements = Column(JSON, default=dict)
    education_minimum = Column(String(20), nullable=False)

    # {technical: [{skill, importance, level}], soft: [...], languages: [...]}
    skills = Column(JSON, default=dict)

    # {entry_level, mid_level, senior_level}, each with salary_range
    experience = Column(JSON, default=dict)
    # Entry salary band is also kept as columns for aggregation
    entry_salary_min = Column(Float, nullable=True)
    entry_salary_max = Column(Float, nullable=True)

    # {market_demand, growth_rate, future_outlook, emerging_trends}
    growth_prospects = Column(JSON, default=dict)
    market_demand = Column(String(10), nullable=False, index=True)

    work_environment = Column(JSON, default=dict)
    personality_traits = Column(JSON, default=list)
    related_careers = Column(JSON, default=list)
    certifications = Column(JSON, default=list)
    learning_path = Column(JSON, default=list)
    # {top_companies, major_cities, government_opportunities, ...}
    regional_context = Column(JSON, default=dict)
    ai_insights = Column(JSON, default=dict)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    @property
    def technical_skills(self):
        return (self.skills or {}).get("technical", [])

    @property
    def entry_level_salary(self):
        return ((self.experience or {}).get("entry_level") or {}).get("salary_range")

    def summary(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "industry": self.industry,
            "category": self.category,
            "market_demand": self.market_demand,
            "entry_level_salary": self.entry_level_salary,
            "education_required": self.education_minimum,
            "top_skills": [s["skill"] for s in self.technical_skills[:5]],
        }
