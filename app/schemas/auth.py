"""
Pydantic schemas for admin authentication.
"""
from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
