from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from career_guidance.core.deps import get_assessment_service, get_current_profile
from career_guidance.models.assessment import Assessment
from career_guidance.models.profile import Profile
from career_guidance.schemas.assessment import (
    AssessmentHistoryResponse,
    AssessmentResultsResponse,
    AssessmentStartRequest,
    AssessmentStartResponse,
    AvailableAssessmentsResponse,
    CompletionResponse,
    ProgressResponse,
    ResponseSubmitRequest,
)
from career_guidance.services.assessment import AssessmentService
from career_guidance.services.assessment_catalog import available_assessments

router = APIRouter()


def assessment_detail(assessment: Assessment) -> Dict[str, Any]:
    return {
        **assessment.summary(),
        "questions": assessment.questions,
        "responses": assessment.responses,
    }


@router.get("/available", response_model=AvailableAssessmentsResponse)
async def list_available(profile: Profile = Depends(get_current_profile)) -> Any:
    return {"assessments": available_assessments()}


@router.post("/start", response_model=AssessmentStartResponse, status_code=status.HTTP_201_CREATED)
async def start_assessment(
    data: AssessmentStartRequest,
    response: Response,
    profile: Profile = Depends(get_current_profile),
    assessment_service: AssessmentService = Depends(get_assessment_service),
) -> Any:
    """Start an assessment, or resume the one of this type already in progress"""
    assessment, resumed = await assessment_service.start_assessment(profile.id, data.type)
    if resumed:
        response.status_code = status.HTTP_200_OK
    return {
        "message": "Resuming existing assessment" if resumed else "Assessment started successfully",
        "resumed": resumed,
        "assessment": assessment_detail(assessment),
    }


@router.post("/{assessment_id}/response", response_model=ProgressResponse)
async def submit_response(
    assessment_id: UUID,
    data: ResponseSubmitRequest,
    profile: Profile = Depends(get_current_profile),
    assessment_service: AssessmentService = Depends(get_assessment_service),
) -> Any:
    progress = await assessment_service.submit_response(
        assessment_id, profile.id, data.question_id, data.answer
    )
    return {"message": "Response saved successfully", "progress": progress}


@router.post("/{assessment_id}/complete", response_model=CompletionResponse)
async def complete_assessment(
    assessment_id: UUID,
    profile: Profile = Depends(get_current_profile),
    assessment_service: AssessmentService = Depends(get_assessment_service),
) -> Any:
    assessment = await assessment_service.complete_assessment(assessment_id, profile.id)
    return {
        "message": "Assessment completed successfully",
        "results": assessment.results,
        "ai_analysis": assessment.ai_analysis,
    }


@router.get("/{assessment_id}/results", response_model=AssessmentResultsResponse)
async def get_results(
    assessment_id: UUID,
    profile: Profile = Depends(get_current_profile),
    assessment_service: AssessmentService = Depends(get_assessment_service),
) -> Any:
    return await assessment_service.get_results(assessment_id, profile.id)


@router.get("/history", response_model=AssessmentHistoryResponse)
async def get_history(
    profile: Profile = Depends(get_current_profile),
    assessment_service: AssessmentService = Depends(get_assessment_service),
) -> Any:
    """All assessments of the caller, newest first"""
    return {"assessments": await assessment_service.get_history(profile.id)}
