"""Dashboard statistics and CSV export of applications."""

import csv
import io
from typing import List

from portal.core.security import AdminContext
from portal.models.application import Application
from portal.schemas.stats import DashboardStats, PublicStats
from portal.services.application_store import ApplicationStore
from portal.services.role_catalog import RoleCatalog

EXPORT_COLUMNS = [
    "id",
    "created_at",
    "status",
    "role_title",
    "role_department",
    "full_name",
    "email",
    "phone",
    "university",
    "course",
    "year",
    "cgpa",
    "ai_score",
    "ai_feedback",
    "resume_url",
    "motivation",
]


async def public_stats(catalog: RoleCatalog, store: ApplicationStore) -> PublicStats:
    roles = await catalog.count_roles()
    counts = await store.count_by_status()
    return PublicStats(
        total_roles=roles["total"],
        active_roles=roles["active"],
        total_applications=sum(counts.values()),
    )


async def dashboard_stats(admin: AdminContext, catalog: RoleCatalog, store: ApplicationStore) -> DashboardStats:
    roles = await catalog.count_roles()
    counts = await store.count_by_status()
    return DashboardStats(
        total_applications=sum(counts.values()),
        pending_applications=counts["pending"],
        shortlisted_applications=counts["shortlisted"],
        rejected_applications=counts["rejected"],
        accepted_applications=counts["accepted"],
        active_roles=roles["active"],
    )


def applications_to_csv(applications: List[Application]) -> str:
    """Render applications as CSV with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for application in applications:
        row = []
        for column in EXPORT_COLUMNS:
            value = getattr(application, column)
            row.append(value.isoformat() if hasattr(value, "isoformat") else value)
        writer.writerow(row)
    return buffer.getvalue()


async def export_applications(admin: AdminContext, store: ApplicationStore, status: str = None) -> str:
    return applications_to_csv(await store.list_applications(status))
