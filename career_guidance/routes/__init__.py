from fastapi import APIRouter

from career_guidance.routes import assessment, auth, career, profile, skills

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(assessment.router, prefix="/assessment", tags=["assessment"])
api_router.include_router(career.router, prefix="/career", tags=["career"])
api_router.include_router(skills.router, prefix="/skills", tags=["skills"])
