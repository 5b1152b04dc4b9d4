"""
Authentication routes for the clinic system.
"""
from fastapi import APIRouter, Depends, status

from .dependencies import get_auth_service, require_owner_or_admin
from .schemas import (
    SignupRequest,
    LoginRequest,
    InviteStaffRequest,
    AcceptInvitationRequest,
    AuthResponse,
    InvitationResponse,
    Principal,
)
from .service import AuthService

# Create API router
router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Clinic Signup")
def signup_route(
    data: SignupRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Create a new clinic and its owner account.

    The owner is logged in immediately: the response carries a session token.

    Raises:
        HTTPException: 400 if the email is already registered in any clinic
    """
    return service.signup(data)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login_route(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Exchange email and password for a session token.

    Raises:
        HTTPException: 401 with the same message for unknown email or wrong password
    """
    return service.login(data)


@router.post("/invite", response_model=InvitationResponse, status_code=status.HTTP_201_CREATED, summary="Invite Staff")
def invite_staff_route(
    data: InviteStaffRequest,
    principal: Principal = Depends(require_owner_or_admin),
    service: AuthService = Depends(get_auth_service),
):
    """
    Issue a staff invitation for the caller's clinic.

    Only owners and admins may invite. The returned token must be delivered
    to the invitee by the caller.
    """
    return service.invite_staff(principal.clinic_id, principal.sub, data)


@router.post("/accept-invite", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Accept Invitation")
def accept_invitation_route(
    data: AcceptInvitationRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Create a staff account from an invitation token.

    Raises:
        HTTPException: 400 for an unknown or already used token, 403 for an expired one
    """
    return service.accept_invitation(data)
