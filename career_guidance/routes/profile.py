from typing import Any

from fastapi import APIRouter, Depends

from career_guidance.core.deps import get_current_profile, get_profile_service
from career_guidance.models.profile import Profile
from career_guidance.schemas.profile import (
    CareerGoals,
    InterestsUpdate,
    Preferences,
    ProfileMessage,
    ProfileResponse,
    ProfileUpdate,
    SkillsUpdate,
)
from career_guidance.services.profile import ProfileService

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(profile: Profile = Depends(get_current_profile)) -> Profile:
    return profile


@router.put("", response_model=ProfileMessage)
async def update_profile(
    data: ProfileUpdate,
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    """Partial update of the allow-listed profile fields"""
    profile = await profile_service.update(profile, data)
    return {"message": "Profile updated successfully", "profile": profile}


@router.post("/skills")
async def update_skills(
    data: SkillsUpdate,
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await profile_service.set_skills(profile, data.skills)
    return {"message": "Skills updated successfully", "skills": profile.skills}


@router.post("/interests")
async def update_interests(
    data: InterestsUpdate,
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await profile_service.set_interests(profile, data.interests)
    return {"message": "Interests updated successfully", "interests": profile.interests}


@router.post("/career-goals")
async def update_career_goals(
    data: CareerGoals,
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await profile_service.set_career_goals(profile, data)
    return {"message": "Career goals updated successfully", "career_goals": profile.career_goals}


@router.post("/preferences")
async def update_preferences(
    data: Preferences,
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await profile_service.set_preferences(profile, data)
    return {"message": "Preferences updated successfully", "preferences": profile.preferences}


@router.delete("")
async def delete_profile(
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    """Deactivate the account, the record is kept"""
    await profile_service.deactivate(profile)
    return {"message": "Account deactivated successfully"}
