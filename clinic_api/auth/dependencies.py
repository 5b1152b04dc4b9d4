"""
FastAPI dependencies for authentication and authorization.

The session token alone identifies the caller: verification needs the signing
secret and nothing else, so no database lookup happens here.
"""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Collection, Optional

from ..config import Settings, get_settings
from ..core.security import TokenSigner
from ..database import get_db
from ..users.models import UserRole
from .exceptions import NotAuthenticatedException, RoleDeniedException
from .schemas import Principal
from .service import AuthService

# Bearer token scheme; missing tokens are reported by get_current_principal
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Build the auth service for the current request.

    Args:
        db: Database session
        settings: Application settings

    Returns:
        AuthService: Service bound to this request's session
    """
    return AuthService(db, settings)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """
    Get the authenticated principal from the bearer token.

    Args:
        credentials: Bearer credentials from the Authorization header
        settings: Application settings holding the signing secret

    Returns:
        Principal: Decoded identity claims

    Raises:
        NotAuthenticatedException: If the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedException("Not authenticated")

    principal = TokenSigner.from_settings(settings).verify(credentials.credentials)
    if principal is None:
        raise NotAuthenticatedException()
    return principal


def is_role_allowed(allowed_roles: Collection[UserRole], role: UserRole) -> bool:
    """
    Check a principal's role against a route's declared role set.

    Args:
        allowed_roles: Roles the route accepts
        role: The caller's role

    Returns:
        bool: True if the role is in the set
    """
    return role in allowed_roles


def require_roles(allowed_roles: Collection[UserRole]):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Roles that are allowed access

    Returns:
        Function that returns the principal if its role is allowed
    """
    allowed = frozenset(allowed_roles)

    def role_checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not is_role_allowed(allowed, principal.role):
            raise RoleDeniedException(allowed, principal.role.value)
        return principal
    return role_checker


# Clinic management routes (invitations, clinic settings)
require_owner_or_admin = require_roles([UserRole.OWNER, UserRole.ADMIN])
