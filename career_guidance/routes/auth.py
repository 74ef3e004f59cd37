from typing import Any

from fastapi import APIRouter, Depends, status

from career_guidance.core.deps import get_current_profile, get_profile_service
from career_guidance.models.profile import Profile
from career_guidance.schemas.auth import AuthResponse, LoginRequest
from career_guidance.schemas.profile import ProfileCreate, ProfileResponse
from career_guidance.services.profile import ProfileService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: ProfileCreate,
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    """Register a student and return an access token"""
    profile, token = await profile_service.register(data)
    return {
        "message": "User registered successfully",
        "access_token": token,
        "token_type": "bearer",
        "profile": profile,
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile, token = await profile_service.login(credentials.email, credentials.password)
    return {
        "message": "Login successful",
        "access_token": token,
        "token_type": "bearer",
        "profile": profile,
    }


@router.get("/me", response_model=ProfileResponse)
async def me(profile: Profile = Depends(get_current_profile)) -> Profile:
    return profile
