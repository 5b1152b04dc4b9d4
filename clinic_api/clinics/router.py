"""
Clinic routes. Callers only ever see their own clinic.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import get_current_principal, require_owner_or_admin
from ..auth.schemas import Principal
from .schemas import ClinicResponse, ClinicUpdate
from .service import get_clinic, update_clinic

router = APIRouter(prefix="/api/v1/clinics", tags=["Clinics"])


@router.get("/me", response_model=ClinicResponse)
def get_my_clinic(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Return the caller's clinic."""
    return get_clinic(db, principal.clinic_id)


@router.patch("/me", response_model=ClinicResponse)
def update_my_clinic(
    data: ClinicUpdate,
    principal: Principal = Depends(require_owner_or_admin),
    db: Session = Depends(get_db),
):
    """Update name, locale or timezone of the caller's clinic. Owners and admins only."""
    return update_clinic(db, principal.clinic_id, data)
