"""
User Management Routes
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from shared.schemas import UserSchema

router = APIRouter()

USERS: List[UserSchema] = [
    UserSchema(id=1, name="John Doe"),
    UserSchema(id=2, name="Jane Smith"),
]


@router.get("", response_model=List[UserSchema])
async def list_users():
    """List all users"""
    return USERS


@router.get("/{user_id}", response_model=UserSchema)
async def get_user(user_id: int):
    """Get a single user"""
    for user in USERS:
        if user.id == user_id:
            return user
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )
