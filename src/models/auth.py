"""
Login Pydantic models
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., max_length=255)


class LoginResponse(BaseModel):
    username: str
    authenticated: bool
