from pydantic import BaseModel, Field

from career_guidance.schemas.profile import Email, ProfileResponse


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    message: str
    profile: ProfileResponse
