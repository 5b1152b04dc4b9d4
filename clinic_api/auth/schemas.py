"""
Auth Schemas - Pydantic models for authentication request validation and responses.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..users.models import UserRole

PASSWORD_MIN_LENGTH = 8


def normalize_email(value: str) -> str:
    """Emails are stored and looked up in lower case."""
    return value.strip().lower()


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class Principal(BaseModel):
    """
    Principal - The authenticated identity carried inside a session token

    Fields:
    - sub: User ID
    - clinic_id: Clinic (tenant) the user belongs to
    - role: Staff role
    - email: Email address
    - full_name: Display name
    """
    sub: str
    clinic_id: str
    role: UserRole
    email: str
    full_name: str


class SignupRequest(BaseModel):
    """
    Signup Schema - Creates a clinic together with its owner account

    Fields:
    - clinic_name: Display name of the new clinic
    - owner_email: Owner's email address, must not belong to any user
    - owner_name: Owner's full name
    - password: Owner's plain text password (hashed before storage)
    """
    clinic_name: str = Field(..., min_length=1)
    owner_email: EmailStr
    owner_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("clinic_name", "owner_name")
    @classmethod
    def names_not_blank(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("owner_email")
    @classmethod
    def owner_email_lower(cls, value: str) -> str:
        return normalize_email(value)

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "clinic_name": "Demo Clinic",
                "owner_email": "owner@example.com",
                "owner_name": "Clinic Owner",
                "password": "password1"
            }
        }


class LoginRequest(BaseModel):
    """
    Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def email_lower(cls, value: str) -> str:
        return normalize_email(value)


class InviteStaffRequest(BaseModel):
    """
    Invite Staff Schema - Issued by an owner or admin for a new staff member

    Fields:
    - email: Invitee's email address
    - role: Role the invitee receives on acceptance
    """
    email: EmailStr
    role: UserRole

    @field_validator("email")
    @classmethod
    def email_lower(cls, value: str) -> str:
        return normalize_email(value)


class AcceptInvitationRequest(BaseModel):
    """
    Accept Invitation Schema - Turns an invitation into a staff account

    Fields:
    - token: Invitation token received out of band
    - full_name: New user's full name
    - password: New user's plain text password
    """
    token: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        return _require_text(value)


class AuthResponse(BaseModel):
    """
    Auth Response Schema - Returned by signup, login and invitation acceptance

    Fields:
    - access_token: Signed session token
    - token_type: Type of token (always "bearer")
    - user: Principal claims embedded in the token
    """
    access_token: str
    token_type: str = "bearer"
    user: Principal


class InvitationResponse(BaseModel):
    """
    Invitation Response Schema - Returned to the inviter

    Delivering the token to the invitee is the caller's responsibility.
    """
    invitation_id: str
    token: str
    expires_at: datetime
