from typing import Any, Dict, List, Tuple

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.core.errors import AuthenticationFailed, StateConflict, ValidationFailed
from career_guidance.core.security import create_access_token, verify_password
from career_guidance.models.profile import Profile
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.schemas.profile import (
    CareerGoals,
    Interest,
    Preferences,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
    Skill,
)

# Nested objects merged into the stored value rather than replacing it
MERGED_FIELDS = ("location", "education")


def public_profile(profile: Profile) -> Dict[str, Any]:
    """JSON-ready profile without the password hash."""
    return ProfileResponse.model_validate(profile).model_dump(mode="json")


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.profiles = ProfileRepository(db)

    async def register(self, data: ProfileCreate) -> Tuple[Profile, str]:
        """Create a profile and issue its first access token."""
        if await self.profiles.get_by_email(data.email):
            raise ValidationFailed("User already exists with this email")

        try:
            profile = await self.profiles.create(data)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ValidationFailed("User already exists with this email")

        logger.info(f"Registered profile {profile.id}")
        return profile, create_access_token(profile.id)

    async def login(self, email: str, password: str) -> Tuple[Profile, str]:
        profile = await self.profiles.get_by_email(email)
        if not profile or not verify_password(password, profile.hashed_password):
            raise AuthenticationFailed("Invalid email or password")
        if not profile.is_active:
            raise StateConflict("Account is deactivated")

        await self.profiles.record_login(profile)
        await self.db.commit()
        return profile, create_access_token(profile.id)

    async def update(self, profile: Profile, data: ProfileUpdate) -> Profile:
        """Apply the allow-listed fields that were sent."""
        changes: Dict[str, Any] = {}
        for field in data.model_fields_set:
            value = getattr(data, field)
            if value is None:
                continue
            if field in MERGED_FIELDS:
                changes[field] = {**(getattr(profile, field) or {}), **value.model_dump(exclude_none=True)}
            elif isinstance(value, list):
                changes[field] = [item.model_dump(exclude_none=True) for item in value]
            elif hasattr(value, "model_dump"):
                changes[field] = value.model_dump(exclude_none=True)
            else:
                changes[field] = value

        if changes:
            profile = await self.profiles.update(profile, changes)
            await self.db.commit()
        return profile

    async def set_skills(self, profile: Profile, skills: List[Skill]) -> Profile:
        profile = await self.profiles.update(profile, {"skills": [s.model_dump() for s in skills]})
        await self.db.commit()
        return profile

    async def set_interests(self, profile: Profile, interests: List[Interest]) -> Profile:
        profile = await self.profiles.update(
            profile, {"interests": [i.model_dump() for i in interests]}
        )
        await self.db.commit()
        return profile

    async def set_career_goals(self, profile: Profile, goals: CareerGoals) -> Profile:
        # Empty values are dropped, the stored goals are replaced as a whole
        values = {
            key: value
            for key, value in goals.model_dump(exclude_none=True).items()
            if value not in ("", [], {})
        }
        profile = await self.profiles.update(profile, {"career_goals": values})
        await self.db.commit()
        return profile

    async def set_preferences(self, profile: Profile, preferences: Preferences) -> Profile:
        profile = await self.profiles.update(
            profile, {"preferences": preferences.model_dump(exclude_none=True)}
        )
        await self.db.commit()
        return profile

    async def deactivate(self, profile: Profile) -> None:
        await self.profiles.deactivate(profile)
        await self.db.commit()
        logger.info(f"Deactivated profile {profile.id}")
