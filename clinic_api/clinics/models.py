"""
Clinic Model - The tenant root. Every user and invitation belongs to exactly one clinic.
"""
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


def generate_id() -> str:
    """Return a new random primary key."""
    return str(uuid.uuid4())


class Clinic(Base):
    """
    Clinic Model - Stores the tenant record

    Fields:
    - id: Primary key, also the tenant identifier carried in session tokens
    - name: Display name of the clinic
    - locale: UI language of the clinic
    - timezone: IANA timezone name used by scheduling features
    - created_at: Timestamp when the clinic was created
    - updated_at: Timestamp when the clinic was last updated
    """
    __tablename__ = "clinics"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    locale = Column(String, nullable=False, default="en")
    timezone = Column(String, nullable=False, default="UTC")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    users = relationship("User", back_populates="clinic")
    invitations = relationship("StaffInvitation", back_populates="clinic")

    def __repr__(self):
        return f"<Clinic(id={self.id}, name='{self.name}')>"
