"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status
from typing import Iterable


class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class DuplicateEmailException(AuthException):
    """Exception raised when an email already belongs to a user in any clinic."""
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidCredentialsException(AuthException):
    """Exception raised for an unknown email or a wrong password, indistinguishably."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidInvitationTokenException(AuthException):
    """Exception raised when no invitation matches a token."""
    def __init__(self, detail: str = "Invalid invitation token"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvitationAlreadyUsedException(AuthException):
    """Exception raised when an invitation has already been accepted."""
    def __init__(self, detail: str = "Invitation already used"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvitationExpiredException(AuthException):
    """Exception raised when an invitation is accepted at or after its expiry."""
    def __init__(self, detail: str = "Invitation expired"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotAuthenticatedException(AuthException):
    """Exception raised when a session token is missing, invalid or expired."""
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDeniedException(AuthException):
    """Exception raised when an action crosses clinic boundaries."""
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class RoleDeniedException(AuthException):
    """Exception raised when user doesn't have required role."""
    def __init__(self, required_roles: Iterable, user_role: str):
        required = sorted(getattr(role, "value", role) for role in required_roles)
        detail = f"Access denied. Required roles: {required}. Your role: {user_role}"
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
