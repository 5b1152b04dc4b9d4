"""
Clinic Schemas - Pydantic models for clinic data validation and serialization.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ClinicResponse(BaseModel):
    """
    Clinic Response Schema - Used when returning clinic data

    Fields:
    - id: Clinic ID
    - name: Display name
    - locale: UI language
    - timezone: IANA timezone name
    - created_at: Creation timestamp
    """
    id: str
    name: str
    locale: str
    timezone: str
    created_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True


class ClinicUpdate(BaseModel):
    """
    Clinic Update Schema - Partial update of the caller's clinic
    """
    name: Optional[str] = Field(None, min_length=1)
    locale: Optional[str] = Field(None, min_length=1)
    timezone: Optional[str] = Field(None, min_length=1)
