"""
User service layer. Every query is scoped to a single clinic.
"""
from typing import List
from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundException
from .models import User


def get_clinic_user(db: Session, clinic_id: str, user_id: str) -> User:
    """
    Fetch a user inside a clinic.

    Raises:
        ResourceNotFoundException: If no such user exists in the clinic
    """
    user = (
        db.query(User)
        .filter(User.id == user_id, User.clinic_id == clinic_id)
        .first()
    )
    if user is None:
        raise ResourceNotFoundException("User")
    return user


def list_clinic_users(db: Session, clinic_id: str) -> List[User]:
    """List all users of a clinic, oldest first."""
    return (
        db.query(User)
        .filter(User.clinic_id == clinic_id)
        .order_by(User.created_at, User.email)
        .all()
    )
