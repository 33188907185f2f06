"""Application schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from portal.models.application import ApplicationStatus
from portal.utils.constants import (
    MIN_MOTIVATION_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PHONE_LENGTH,
)
from portal.utils.validators import parse_cgpa, validate_phone


class ApplicationForm(BaseModel):
    """Applicant-provided fields of the public submission form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=MIN_NAME_LENGTH)
    email: EmailStr
    phone: str = Field(..., min_length=MIN_PHONE_LENGTH)
    university: str = Field(..., min_length=2)
    course: str = Field(..., min_length=2)
    year: str = Field(..., min_length=1, max_length=10)
    cgpa: float
    motivation: str = Field(..., min_length=MIN_MOTIVATION_LENGTH)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        if not validate_phone(v, MIN_PHONE_LENGTH):
            raise ValueError("Valid phone number is required")
        return v

    @field_validator("cgpa", mode="before")
    @classmethod
    def check_cgpa(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return float(v)
        parsed = parse_cgpa(v)
        if parsed is None:
            raise ValueError("CGPA is required")
        return parsed

    def resume_text(self) -> str:
        """Text sent to the scorer in place of a parsed resume."""
        return " ".join(
            [self.full_name, str(self.email), self.university, self.course, self.motivation]
        )


class ApplicationUpdate(BaseModel):
    """Admin edit of applicant data. Status, score and resume are not editable here."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    full_name: Optional[str] = Field(None, min_length=MIN_NAME_LENGTH)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=MIN_PHONE_LENGTH)
    university: Optional[str] = Field(None, min_length=2)
    course: Optional[str] = Field(None, min_length=2)
    year: Optional[str] = Field(None, min_length=1, max_length=10)
    cgpa: Optional[float] = None
    motivation: Optional[str] = None


class StatusTransitionRequest(BaseModel):
    status: ApplicationStatus
    message: Optional[str] = Field(None, max_length=2000)


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role_id: UUID
    role_title: str
    role_department: str
    full_name: str
    email: str
    phone: str
    university: str
    course: str
    year: str
    cgpa: float
    motivation: str
    resume_url: str
    ai_score: int
    ai_feedback: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class SubmissionResponse(BaseModel):
    """What the applicant sees after submitting."""

    id: UUID
    role_id: UUID
    status: ApplicationStatus
    message: str = "Application submitted successfully!"
