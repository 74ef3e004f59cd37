"""
Profile repository - database operations for Profile.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from career_guidance.core.security import get_password_hash
from career_guidance.models.profile import Profile
from career_guidance.schemas.profile import ProfileCreate
from career_guidance.utils.time import utc_now


class ProfileRepository:
    """Repository for Profile database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, profile_id: UUID) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.id == profile_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile).where(Profile.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def create(self, data: ProfileCreate) -> Profile:
        """Create a profile, hashing the password before it is stored."""
        now = utc_now()
        profile = Profile(
            name=data.name,
            email=data.email.strip().lower(),
            hashed_password=get_password_hash(data.password),
            phone=data.phone,
            date_of_birth=data.date_of_birth,
            gender=data.gender,
            location=data.location.model_dump(exclude_none=True),
            education=data.education.model_dump(exclude_none=True),
            skills=[],
            interests=[],
            career_goals={},
            preferences={},
            assessment_results={},
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.db.add(profile)
        await self.db.flush()
        await self.db.refresh(profile)
        return profile

    async def update(self, profile: Profile, changes: Dict[str, Any]) -> Profile:
        """Apply already-validated field changes and stamp updated_at."""
        for field, value in changes.items():
            setattr(profile, field, value)
        profile.updated_at = utc_now()
        await self.db.flush()
        await self.db.refresh(profile)
        return profile

    async def set_assessment_summary(self, profile: Profile, summary: Dict[str, Any]) -> Profile:
        # Reassign so the JSON column is marked dirty
        profile.assessment_results = {**(profile.assessment_results or {}), **summary}
        profile.updated_at = utc_now()
        await self.db.flush()
        return profile

    async def record_login(self, profile: Profile) -> Profile:
        profile.last_login = utc_now()
        await self.db.flush()
        return profile

    async def deactivate(self, profile: Profile) -> Profile:
        profile.is_active = False
        profile.updated_at = utc_now()
        await self.db.flush()
        return profile
