"""
Bootstrap utilities for first clinic creation.
Creates a clinic and its owner from settings when the database is empty.
"""
import logging
from sqlalchemy.orm import Session

from ..config import Settings
from ..clinics.models import Clinic
from ..users.models import User, UserRole
from ..auth.schemas import normalize_email
from .security import hash_password

logger = logging.getLogger(__name__)


def clinic_exists(db: Session) -> bool:
    """
    Check if any clinic exists in the database.

    Args:
        db: Database session

    Returns:
        bool: True if at least one clinic exists, False otherwise
    """
    return db.query(Clinic.id).first() is not None


def create_bootstrap_clinic(db: Session, settings: Settings) -> bool:
    """
    Create the first clinic and its owner from settings.

    Args:
        db: Database session
        settings: Application settings with bootstrap credentials

    Returns:
        bool: True if the clinic was created, False otherwise
    """
    if not settings.bootstrap_owner_email or not settings.bootstrap_owner_password:
        logger.warning("Bootstrap owner credentials not provided in environment variables")
        return False

    email = normalize_email(settings.bootstrap_owner_email)
    existing_user = db.query(User.id).filter(User.email == email).first()
    if existing_user:
        logger.warning(f"Bootstrap failed: Email {email} already exists")
        return False

    clinic = Clinic(name=settings.bootstrap_clinic_name)
    owner = User(
        clinic=clinic,
        email=email,
        full_name=settings.bootstrap_owner_name,
        password_hash=hash_password(settings.bootstrap_owner_password),
        role=UserRole.OWNER,
    )
    db.add(clinic)
    db.add(owner)
    db.commit()
    db.refresh(owner)

    logger.info(f"✅ Bootstrap clinic created: {clinic.name} (owner: {owner.email})")
    return True


def bootstrap_clinic_if_needed(db: Session, settings: Settings) -> None:
    """
    Create the bootstrap clinic if the database has none.
    Called during application startup; failures are logged, not raised.

    Args:
        db: Database session
        settings: Application settings
    """
    if clinic_exists(db):
        logger.info("Clinics found. Bootstrap not needed.")
        return

    logger.info("🚀 No clinics found. Attempting bootstrap clinic creation...")
    try:
        if not create_bootstrap_clinic(db, settings):
            logger.info("💡 To create a first clinic, set BOOTSTRAP_OWNER_EMAIL and BOOTSTRAP_OWNER_PASSWORD.")
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Failed to create bootstrap clinic: {str(e)}")
