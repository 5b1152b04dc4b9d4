"""
User Schemas - Pydantic models for user serialization.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from .models import UserRole


class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    The password hash is never exposed.

    Fields:
    - id: User ID
    - clinic_id: Clinic the user belongs to
    - email: Email address
    - full_name: Full name
    - role: Staff role
    - is_active: Whether the account may log in
    - invited_at: When the user's invitation was issued (None for owners)
    - created_at: Account creation timestamp
    """
    id: str
    clinic_id: str
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    invited_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
