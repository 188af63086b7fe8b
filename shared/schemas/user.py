"""
User data schemas

Pydantic models for user data served by the user service.
"""

from pydantic import BaseModel, Field


class UserSchema(BaseModel):
    """User as returned by ``GET /users``"""
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=100)
