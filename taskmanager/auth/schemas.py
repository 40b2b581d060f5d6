"""
Task Manager - Authentication Request/Response Schemas

Pydantic models for API request validation and response serialization.
Separates API contracts from database models.
"""

from uuid import UUID

from pydantic import BaseModel, Field, validator

from taskmanager.auth.credentials import MIN_PASSWORD_LENGTH, normalize_email
from taskmanager.errors import ValidationError


class LoginRequest(BaseModel):
    """
    Request body for POST /users/login.
    
    Fields are not format-checked here; every mismatch surfaces as the
    same bad-credentials error.
    """
    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class RegisterRequest(BaseModel):
    """Request body for POST /users."""
    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    
    @validator("email")
    def email_not_empty(cls, v):
        """Trimmed and non-empty."""
        try:
            return normalize_email(v)
        except ValidationError as e:
            raise ValueError(str(e))
    
    @validator("password")
    def password_length(cls, v):
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        return v


class UserResponse(BaseModel):
    """
    Public view of a user.
    
    Password hash and sessions are never included.
    """
    id: UUID = Field(..., alias="_id")
    email: str
    
    class Config:
        from_attributes = True
        populate_by_name = True


class AccessTokenResponse(BaseModel):
    """Response body for GET /users/me/access-token."""
    accessToken: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: dict
