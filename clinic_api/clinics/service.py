"""
Clinic service layer.
"""
import logging
from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundException
from .models import Clinic
from .schemas import ClinicUpdate

logger = logging.getLogger(__name__)


def get_clinic(db: Session, clinic_id: str) -> Clinic:
    """
    Fetch a clinic by ID.

    Raises:
        ResourceNotFoundException: If the clinic does not exist
    """
    clinic = db.query(Clinic).filter(Clinic.id == clinic_id).first()
    if clinic is None:
        raise ResourceNotFoundException("Clinic")
    return clinic


def update_clinic(db: Session, clinic_id: str, data: ClinicUpdate) -> Clinic:
    """
    Apply the provided fields to a clinic.

    Args:
        db: Database session
        clinic_id: Clinic to update
        data: Fields to change; unset fields are left alone

    Returns:
        Clinic: Updated clinic
    """
    clinic = get_clinic(db, clinic_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(clinic, field, value)
    db.commit()
    db.refresh(clinic)
    logger.info(f"Clinic {clinic_id} updated: {sorted(changes)}")
    return clinic
