"""Statistics schemas."""

from pydantic import BaseModel


class PublicStats(BaseModel):
    """Counts shown on the landing page."""

    total_roles: int
    active_roles: int
    total_applications: int


class DashboardStats(BaseModel):
    """Counts shown on the admin dashboard."""

    total_applications: int
    pending_applications: int
    shortlisted_applications: int
    rejected_applications: int
    accepted_applications: int
    active_roles: int
