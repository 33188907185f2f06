"""Internship role schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoleCreate(BaseModel):
    """Fields an admin supplies to open a role."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    requirements: str = ""
    location: str = "Remote"
    duration: int = Field(3, gt=0, description="Duration in months")
    stipend: Decimal = Field(Decimal("25000"), ge=0)
    application_deadline: Optional[date] = None
    is_active: bool = True


class RoleUpdate(BaseModel):
    """Partial role update; omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    department: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    stipend: Optional[Decimal] = Field(None, ge=0)
    application_deadline: Optional[date] = None
    is_active: Optional[bool] = None

    @field_validator(
        "title", "department", "description", "requirements",
        "location", "duration", "stipend", "is_active",
    )
    @classmethod
    def reject_null(cls, v):
        # Omit a field to keep it; these columns cannot be cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    department: str
    description: str
    requirements: str
    location: str
    duration: int
    stipend: Decimal
    application_deadline: Optional[date] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
