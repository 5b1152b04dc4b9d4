"""
StaffInvitation Model - Single-use, expiring invitations for onboarding clinic staff.
"""
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ..clinics.models import generate_id
from ..users.models import UserRole


class StaffInvitation(Base):
    """
    StaffInvitation Model - One invitation per onboarding attempt

    Fields:
    - id: Primary key
    - clinic_id: Clinic the invitee will join
    - email: Address the invitation was issued for
    - role: Role the invitee receives on acceptance
    - token: Unguessable URL-safe token, unique across all invitations
    - expires_at: Acceptance must happen strictly before this instant
    - accepted_at: Set once when the invitation is used, null while unused
    - created_by_id: ID of the owner/admin who issued the invitation
    - created_at: Timestamp when the invitation was issued
    """
    __tablename__ = "staff_invitations"

    id = Column(String(36), primary_key=True, default=generate_id)
    clinic_id = Column(String(36), ForeignKey("clinics.id"), nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    role = Column(Enum(UserRole), nullable=False)
    token = Column(String(128), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    created_by_id = Column(String(36), nullable=False)  # User ID of the inviting owner/admin
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    clinic = relationship("Clinic", back_populates="invitations")
    user = relationship("User", back_populates="invitation", uselist=False)

    @property
    def is_used(self) -> bool:
        """Whether the invitation has already been accepted."""
        return self.accepted_at is not None

    def __repr__(self):
        return f"<StaffInvitation(id={self.id}, email='{self.email}', role='{self.role}')>"
