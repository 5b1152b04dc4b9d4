"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging
import secrets

from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from ..config import Settings
from ..auth.schemas import Principal

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 48 random bytes encode to exactly 64 URL-safe characters (384 bits of entropy)
INVITATION_TOKEN_BYTES = 48


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Salted hash, safe to store
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify_password() -> None:
    """
    Spend the cost of one password verification without a stored hash.

    Used when a login names an unknown email.
    """
    pwd_context.dummy_verify()


def generate_invitation_token() -> str:
    """
    Generate an unguessable, URL-safe invitation token.

    Returns:
        str: 64 character token drawn from a CSPRNG
    """
    return secrets.token_urlsafe(INVITATION_TOKEN_BYTES)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes read back from the database.

    SQLite drops timezone information, so stored instants come back naive.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TokenSigner:
    """
    Issues and verifies signed, time-bounded session tokens.

    The token carries the principal claims only; there is no server-side
    session store and no revocation list, so expiry is the only lifetime bound.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=1)):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=settings.session_ttl,
        )

    def issue(self, principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token for a principal.

        Args:
            principal: Identity claims to embed
            expires_delta: Override for the configured lifetime

        Returns:
            str: Encoded JWT token
        """
        issued_at = utc_now()
        to_encode: Dict[str, Any] = principal.model_dump(mode="json")
        to_encode.update({
            "iat": issued_at,
            "exp": issued_at + (expires_delta if expires_delta is not None else self.expires_in),
        })
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[Principal]:
        """
        Verify signature and expiry of a token and decode its principal.

        Args:
            token: JWT token string

        Returns:
            Principal if the token is valid, None otherwise
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Rejected session token: {str(e)}")
            return None

        try:
            return Principal.model_validate(payload)
        except ValidationError:
            logger.warning("Rejected session token: malformed principal claims")
            return None
