"""Public statistics endpoint."""

from fastapi import APIRouter, Depends

from portal.api.deps import get_application_store, get_role_catalog
from portal.schemas.stats import PublicStats
from portal.services import report_service
from portal.services.application_store import ApplicationStore
from portal.services.role_catalog import RoleCatalog

router = APIRouter()


@router.get("/", response_model=PublicStats)
async def get_public_stats(
    catalog: RoleCatalog = Depends(get_role_catalog),
    store: ApplicationStore = Depends(get_application_store),
):
    return await report_service.public_stats(catalog, store)
