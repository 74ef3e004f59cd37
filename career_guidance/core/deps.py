from functools import lru_cache
from uuid import UUID

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.config.database import get_db
from career_guidance.config.settings import settings
from career_guidance.core.errors import AuthenticationFailed, StateConflict
from career_guidance.core.security import decode_access_token
from career_guidance.models.profile import Profile
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.services.ai import AIService
from career_guidance.services.assessment import AssessmentService
from career_guidance.services.cache import CacheService
from career_guidance.services.career import CareerService
from career_guidance.services.profile import ProfileService
from career_guidance.services.skills import SkillsService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)


@lru_cache()
def get_ai_service() -> AIService:
    return AIService()


@lru_cache()
def get_cache() -> CacheService:
    return CacheService()


async def get_current_profile(
    db: AsyncSession = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> Profile:
    """Profile named by the bearer token subject."""
    if not token:
        raise AuthenticationFailed("No token, authorization denied")

    subject = decode_access_token(token)
    try:
        profile_id = UUID(subject)
    except ValueError:
        raise AuthenticationFailed()

    profile = await ProfileRepository(db).get_by_id(profile_id)
    if profile is None:
        raise AuthenticationFailed()
    if not profile.is_active:
        raise StateConflict("Account is deactivated")
    return profile


def get_profile_service(db: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


def get_assessment_service(
    db: AsyncSession = Depends(get_db),
    ai_service: AIService = Depends(get_ai_service),
    cache: CacheService = Depends(get_cache),
) -> AssessmentService:
    return AssessmentService(db, ai_service, cache)


def get_career_service(
    db: AsyncSession = Depends(get_db), ai_service: AIService = Depends(get_ai_service)
) -> CareerService:
    return CareerService(db, ai_service)


def get_skills_service(
    db: AsyncSession = Depends(get_db), ai_service: AIService = Depends(get_ai_service)
) -> SkillsService:
    return SkillsService(db, ai_service)
