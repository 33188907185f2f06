"""Database models."""

from portal.models.user import User
from portal.models.role import InternshipRole
from portal.models.application import Application, ApplicationStatus
from portal.models.faq import Faq

__all__ = [
    "User",
    "InternshipRole",
    "Application",
    "ApplicationStatus",
    "Faq",
]
