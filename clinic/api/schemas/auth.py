from pydantic import BaseModel, EmailStr

from clinic.models.user import UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
