from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Question(BaseModel):
    question_id: str
    question: str
    category: str
    weight: float = 1


class AvailableAssessment(BaseModel):
    type: str
    title: str
    description: str
    duration: str
    question_count: int


class AvailableAssessmentsResponse(BaseModel):
    assessments: List[AvailableAssessment]


class AssessmentStartRequest(BaseModel):
    # Checked against the catalog by the service so an unknown type maps to invalid_type
    type: str


class ResponseSubmitRequest(BaseModel):
    question_id: str = Field(min_length=1)
    answer: Any

    @field_validator("answer")
    @classmethod
    def answer_not_empty(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()) or v == [] or v == {}:
            raise ValueError("Answer is required")
        return v


class AnswerRecord(BaseModel):
    question_id: str
    answer: Any
    score: Optional[float] = None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class AssessmentSummary(BaseModel):
    id: UUID
    type: str
    status: str
    completion_percentage: int
    created_at: datetime
    completed_at: Optional[datetime] = None
    has_results: bool


class AssessmentDetail(AssessmentSummary):
    """Summary plus the question set and answers given so far"""

    questions: List[Question]
    responses: List[AnswerRecord]


class AssessmentStartResponse(BaseModel):
    message: str
    resumed: bool
    assessment: AssessmentDetail


class ProgressResponse(BaseModel):
    message: str
    progress: int


class CompletionResponse(BaseModel):
    message: str
    results: Dict[str, Any]
    ai_analysis: Dict[str, Any]


class AssessmentResultsResponse(BaseModel):
    assessment: AssessmentSummary
    results: Dict[str, Any]
    ai_analysis: Dict[str, Any]


class AssessmentHistoryResponse(BaseModel):
    assessments: List[AssessmentSummary]
