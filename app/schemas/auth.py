"""
Pydantic schemas for admin authentication.

These schemas are used for request/response validation.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# bcrypt only hashes the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


class AdminOut(BaseModel):
    """Schema for admin response (excludes password)."""
    id: uuid.UUID
    username: str
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class AdminCreate(BaseModel):
    """Schema for creating a new admin."""
    username: str = Field(..., min_length=3, max_length=50, description="Admin username (unique)")
    password: str = Field(..., min_length=4, max_length=MAX_PASSWORD_BYTES, description="Plain text password (will be hashed)")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Schema for admin login request."""
    username: str = Field(..., min_length=1, description="Admin username", examples=["admin"])
    password: str = Field(..., min_length=4, description="Plain text password", examples=["admin"])


class LoginResponse(BaseModel):
    """Schema for admin login response."""
    access_token: str
    token_type: str = "bearer"
    user: AdminOut
