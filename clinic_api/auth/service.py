"""
Authentication service layer for business logic.

Signup, login, staff invitation and invitation acceptance. Every successful
signup, login or acceptance returns a fresh session token for the user.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..core.security import (
    hash_password,
    verify_password,
    dummy_verify_password,
    generate_invitation_token,
    utc_now,
    ensure_utc,
    TokenSigner,
)
from ..clinics.models import Clinic
from ..users.models import User, UserRole
from .models import StaffInvitation
from .schemas import (
    SignupRequest,
    LoginRequest,
    InviteStaffRequest,
    AcceptInvitationRequest,
    AuthResponse,
    InvitationResponse,
    Principal,
)
from .exceptions import (
    DuplicateEmailException,
    InvalidCredentialsException,
    InvalidInvitationTokenException,
    InvitationAlreadyUsedException,
    InvitationExpiredException,
    PermissionDeniedException,
)

# Set up logging
logger = logging.getLogger(__name__)


def principal_for(user: User) -> Principal:
    """Build the session principal claims for a user."""
    return Principal(
        sub=user.id,
        clinic_id=user.clinic_id,
        role=user.role,
        email=user.email,
        full_name=user.full_name,
    )


class AuthService:
    """
    Orchestrates account creation, credential checks and staff invitations.

    Args:
        db: Database session; each operation commits or rolls back its own transaction
        settings: Explicit configuration (signing secret and expiry windows)
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.signer = TokenSigner.from_settings(settings)

    def _email_taken(self, email: str) -> bool:
        # Global lookup: email uniqueness is not scoped to a clinic.
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def _issue_session(self, user: User) -> AuthResponse:
        principal = principal_for(user)
        return AuthResponse(access_token=self.signer.issue(principal), user=principal)

    def signup(self, data: SignupRequest) -> AuthResponse:
        """
        Create a clinic together with its owner account.

        Args:
            data: Validated signup request

        Returns:
            AuthResponse: Session token for the new owner

        Raises:
            DuplicateEmailException: If the email belongs to any existing user
        """
        email = str(data.owner_email)
        logger.info(f"Signup attempt for email: {email}")

        if self._email_taken(email):
            logger.warning(f"Signup failed: Email {email} already registered")
            raise DuplicateEmailException()

        clinic = Clinic(name=data.clinic_name)
        owner = User(
            clinic=clinic,
            email=email,
            full_name=data.owner_name,
            password_hash=hash_password(data.password),
            role=UserRole.OWNER,
        )
        self.db.add(clinic)
        self.db.add(owner)

        # Clinic and owner commit together; the unique email column settles concurrent signups
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Signup failed: Email {email} registered concurrently")
            raise DuplicateEmailException()

        self.db.refresh(owner)
        logger.info(f"Clinic {owner.clinic_id} created with owner {owner.id}")
        return self._issue_session(owner)

    def login(self, data: LoginRequest) -> AuthResponse:
        """
        Authenticate a user by email and password.

        Args:
            data: Validated login request

        Returns:
            AuthResponse: Session token for the user

        Raises:
            InvalidCredentialsException: If the email is unknown or the password is wrong
        """
        email = str(data.email)
        user = self.db.query(User).filter(User.email == email).first()

        if user is None:
            # Same hashing cost as a wrong password, so unknown emails cannot be told apart by timing
            dummy_verify_password()
            logger.warning(f"Login failed: Invalid credentials for {email}")
            raise InvalidCredentialsException()

        if not verify_password(data.password, user.password_hash):
            logger.warning(f"Login failed: Invalid credentials for {email}")
            raise InvalidCredentialsException()

        if not user.is_active:
            logger.warning(f"Login failed: Inactive account {user.id}")
            raise InvalidCredentialsException()

        logger.info(f"Login successful: User {user.id} ({email})")
        return self._issue_session(user)

    def invite_staff(self, clinic_id: str, creator_id: str, data: InviteStaffRequest) -> InvitationResponse:
        """
        Issue a single-use invitation for a new staff member.

        The caller's role is checked by the route; this only verifies that the
        creator belongs to the clinic the invitation is issued for.

        Args:
            clinic_id: Clinic the invitee will join
            creator_id: ID of the inviting user
            data: Validated invitation request

        Returns:
            InvitationResponse: Invitation ID, token and expiry

        Raises:
            PermissionDeniedException: If the creator is not a member of the clinic
            DuplicateEmailException: If the email belongs to any existing user
        """
        email = str(data.email)

        creator = (
            self.db.query(User.id)
            .filter(User.id == creator_id, User.clinic_id == clinic_id)
            .first()
        )
        if creator is None:
            logger.warning(f"Invitation refused: User {creator_id} is not a member of clinic {clinic_id}")
            raise PermissionDeniedException("Inviter does not belong to this clinic")

        if self._email_taken(email):
            logger.warning(f"Invitation failed: Email {email} already registered")
            raise DuplicateEmailException("User already exists")

        invitation = StaffInvitation(
            clinic_id=clinic_id,
            email=email,
            role=data.role,
            token=generate_invitation_token(),
            expires_at=utc_now() + self.settings.invite_ttl,
            created_by_id=creator_id,
        )
        self.db.add(invitation)
        self.db.commit()
        self.db.refresh(invitation)

        logger.info(
            f"Invitation {invitation.id} issued by {creator_id} for {email} "
            f"as {data.role.value} in clinic {clinic_id}"
        )
        return InvitationResponse(
            invitation_id=invitation.id,
            token=invitation.token,
            expires_at=ensure_utc(invitation.expires_at),
        )

    def accept_invitation(self, data: AcceptInvitationRequest) -> AuthResponse:
        """
        Create a staff account from an invitation and consume the invitation.

        Args:
            data: Validated acceptance request

        Returns:
            AuthResponse: Session token for the new user

        Raises:
            InvalidInvitationTokenException: If no invitation matches the token
            InvitationAlreadyUsedException: If the invitation was already accepted
            InvitationExpiredException: If the invitation expired
            DuplicateEmailException: If the invited email was registered in the meantime
        """
        invitation = (
            self.db.query(StaffInvitation)
            .filter(StaffInvitation.token == data.token)
            .first()
        )
        if invitation is None:
            logger.warning("Invitation acceptance failed: Unknown token")
            raise InvalidInvitationTokenException()

        invitation_id = invitation.id
        invitation_email = invitation.email

        if invitation.is_used:
            logger.warning(f"Invitation acceptance failed: Invitation {invitation.id} already used")
            raise InvitationAlreadyUsedException()

        now = utc_now()
        if now >= ensure_utc(invitation.expires_at):
            logger.warning(f"Invitation acceptance failed: Invitation {invitation.id} expired")
            raise InvitationExpiredException()

        # Hash before claiming so the write lock is not held for the bcrypt cost
        password_hash = hash_password(data.password)

        # Conditional claim: only one concurrent acceptance can flip accepted_at from NULL
        claimed = (
            self.db.query(StaffInvitation)
            .filter(StaffInvitation.id == invitation_id, StaffInvitation.accepted_at.is_(None))
            .update({StaffInvitation.accepted_at: now}, synchronize_session=False)
        )
        if claimed != 1:
            self.db.rollback()
            logger.warning(f"Invitation acceptance failed: Invitation {invitation_id} claimed concurrently")
            raise InvitationAlreadyUsedException()

        user = User(
            clinic_id=invitation.clinic_id,
            email=invitation_email,
            full_name=data.full_name,
            password_hash=password_hash,
            role=invitation.role,
            invitation_id=invitation_id,
            invited_at=invitation.created_at,
        )
        self.db.add(user)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Invitation acceptance failed: Email {invitation_email} already registered")
            raise DuplicateEmailException()

        self.db.refresh(user)
        logger.info(f"Invitation {user.invitation_id} accepted: User {user.id} joined clinic {user.clinic_id}")
        return self._issue_session(user)
