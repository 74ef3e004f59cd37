from sqlalchemy import (
    Column, String, DateTime, Float, ForeignKey, JSON, Index, UniqueConstraint, Uuid, text
)
from sqlalchemy.orm import relationship
import uuid

from career_guidance.models.base import Base
from career_guidance.utils.time import utc_now


class AssessmentType:
    PERSONALITY = "personality"
    SKILLS = "skills"
    INTERESTS = "interests"
    APTITUDE = "aptitude"
    COMPREHENSIVE = "comprehensive"

    ALL = [PERSONALITY, SKILLS, INTERESTS, APTITUDE, COMPREHENSIVE]


class AssessmentStatus:
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    # Reserved for a manual review path, no transition reaches it yet
    PENDING_REVIEW = "pending-review"

    ALL = [IN_PROGRESS, COMPLETED, PENDING_REVIEW]


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (
        Index("ix_assessments_profile_type", "profile_id", "type"),
        Index("ix_assessments_profile_created", "profile_id", "created_at"),
        # One in-progress attempt per (profile, type)
        Index(
            "uq_assessments_in_progress",
            "profile_id",
            "type",
            unique=True,
            postgresql_where=text("status = 'in-progress'"),
            sqlite_where=text("status = 'in-progress'"),
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False)
    type = Column(String(20), nullable=False)

    # [{question_id, question, category, weight}], fixed at creation
    questions = Column(JSON, default=list, nullable=False)

    # Populated only once completed
    results = Column(JSON, nullable=True)
    ai_analysis = Column(JSON, nullable=True)

    status = Column(String(20), nullable=False, default=AssessmentStatus.IN_PROGRESS, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Relationships
    profile = relationship("Profile", back_populates="assessments")
    responses = relationship(
        "AssessmentResponse",
        back_populates="assessment",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def question_ids(self):
        return [q["question_id"] for q in self.questions or []]

    @property
    def completion_percentage(self) -> int:
        """Answered share of the questions, rounded half up"""
        total = len(self.questions or [])
        if total == 0:
            return 0
        answered = len(self.responses)
        return (200 * answered + total) // (2 * total)

    @property
    def is_completed(self) -> bool:
        return self.status == AssessmentStatus.COMPLETED

    def summary(self) -> dict:
        """Projection without questions or responses"""
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status,
            "completion_percentage": self.completion_percentage,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
            "has_results": self.results is not None,
        }


class AssessmentResponse(Base):
    __tablename__ = "assessment_responses"
    __table_args__ = (
        UniqueConstraint("assessment_id", "question_id", name="uq_response_question"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    assessment_id = Column(Uuid, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False)
    question_id = Column(String(50), nullable=False)
    answer = Column(JSON, nullable=False)
    score = Column(Float, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    assessment = relationship("Assessment", back_populates="responses")
