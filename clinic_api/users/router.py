"""
User routes for the caller's own clinic.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import get_current_principal
from ..auth.schemas import Principal
from .schemas import UserResponse
from .service import get_clinic_user, list_clinic_users

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
def get_me(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Return the account behind the current session."""
    return get_clinic_user(db, principal.clinic_id, principal.sub)


@router.get("", response_model=List[UserResponse])
def get_clinic_users(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """List the staff of the caller's clinic."""
    return list_clinic_users(db, principal.clinic_id)
