"""Admin dashboard endpoints - statistics and export."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_application_store, get_role_catalog
from portal.core.security import AdminContext, require_admin
from portal.schemas.stats import DashboardStats
from portal.services import report_service
from portal.services.application_store import ApplicationStore
from portal.services.role_catalog import RoleCatalog

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    admin: AdminContext = Depends(require_admin),
    catalog: RoleCatalog = Depends(get_role_catalog),
    store: ApplicationStore = Depends(get_application_store),
):
    return await report_service.dashboard_stats(admin, catalog, store)


@router.get("/applications/export")
async def export_applications(
    status_filter: Optional[str] = Query(None, alias="status"),
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
):
    """Download applications as CSV (newest first)."""
    content = await report_service.export_applications(admin, store, status_filter)
    filename = f"applications_{datetime.utcnow():%Y%m%d_%H%M%S}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
