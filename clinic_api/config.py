"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
import re
from datetime import timedelta
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as "45s", "30m", "1h" or "7d".

    A bare number is read as seconds.

    Args:
        value: Duration string

    Returns:
        timedelta: Parsed duration

    Raises:
        ValueError: If the string is not a recognised duration
    """
    match = _DURATION_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        jwt_secret: Secret key used to sign session tokens
        jwt_algorithm: Algorithm used for JWT encoding (HS256)
        jwt_expires_in: Session token lifetime as a duration string ("1h")
        invite_expiry_hours: Hours a staff invitation stays valid

        # CORS
        cors_origins: Allowed frontend origins

        # Bootstrap owner settings (optional)
        bootstrap_clinic_name: Name of the clinic created on an empty database
        bootstrap_owner_email: Email of the first owner account
        bootstrap_owner_password: Password of the first owner account
        bootstrap_owner_name: Display name of the first owner account
    """
    # Database settings
    database_url: str = "sqlite:///./clinic.db"

    # JWT settings
    jwt_secret: str = "dev-secret"
    jwt_algorithm: str = "HS256"
    jwt_expires_in: str = "1h"

    # Invitation settings
    invite_expiry_hours: int = 72

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000"]

    # Bootstrap settings (optional - only used when no clinic exists yet)
    bootstrap_clinic_name: str = "Demo Dental Center"
    bootstrap_owner_email: Optional[str] = None
    bootstrap_owner_password: Optional[str] = None
    bootstrap_owner_name: str = "Demo Owner"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("jwt_expires_in")
    @classmethod
    def validate_jwt_expires_in(cls, value: str) -> str:
        if parse_duration(value) <= timedelta(0):
            raise ValueError("jwt_expires_in must be a positive duration")
        return value

    @field_validator("invite_expiry_hours")
    @classmethod
    def validate_invite_expiry_hours(cls, value: int) -> int:
        if value < 0:
            raise ValueError("invite_expiry_hours cannot be negative")
        return value

    @property
    def session_ttl(self) -> timedelta:
        """Session token lifetime as a timedelta."""
        return parse_duration(self.jwt_expires_in)

    @property
    def invite_ttl(self) -> timedelta:
        """Invitation validity window as a timedelta."""
        return timedelta(hours=self.invite_expiry_hours)


# Create settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Settings dependency - returns the process-wide settings instance.

    Routes receive configuration through this dependency so tests can
    override it with an explicitly constructed Settings value.
    """
    return settings
