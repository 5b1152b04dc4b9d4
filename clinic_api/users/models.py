"""
User Model - Stores clinic staff accounts.

Email is unique across all clinics: one address can own at most one account.
"""
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ..clinics.models import generate_id


class UserRole(str, enum.Enum):
    """
    Enumeration for staff roles in the clinic system.

    Roles:
    - OWNER: Created at clinic signup, full control over the clinic
    - ADMIN: Manages the clinic and invites staff
    - DOCTOR: Medical practitioner
    - NURSE: Nursing staff
    - RECEPTIONIST: Front desk staff
    """
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    NURSE = "NURSE"
    RECEPTIONIST = "RECEPTIONIST"


class User(Base):
    """
    User Model - Stores all staff accounts in the system

    Fields:
    - id: Primary key for user identification
    - clinic_id: Clinic (tenant) the user belongs to
    - email: Unique email address for login, unique across all clinics
    - full_name: User's complete name
    - password_hash: Securely hashed password (never store raw passwords)
    - role: Staff role within the clinic
    - is_active: Whether the account may log in
    - invitation_id: Invitation the account was created from (null for owners)
    - invited_at: When the accepted invitation was issued
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    clinic_id = Column(String(36), ForeignKey("clinics.id"), nullable=False, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.RECEPTIONIST)
    is_active = Column(Boolean, nullable=False, default=True)
    invitation_id = Column(String(36), ForeignKey("staff_invitations.id"), unique=True, nullable=True)
    invited_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    clinic = relationship("Clinic", back_populates="users")
    invitation = relationship("StaffInvitation", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
