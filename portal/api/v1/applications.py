"""Application endpoints - admin review, edits and status lifecycle."""

import mimetypes
import posixpath
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from portal.api.deps import get_application_store, get_lifecycle, get_storage
from portal.core.security import AdminContext, require_admin
from portal.schemas.application import (
    ApplicationResponse,
    ApplicationUpdate,
    StatusTransitionRequest,
)
from portal.services.application_store import ApplicationStore
from portal.services.lifecycle import LifecycleController
from portal.services.storage_service import ResumeStorage

router = APIRouter()


@router.get("/", response_model=List[ApplicationResponse])
async def list_applications(
    status_filter: Optional[str] = Query(
        None, alias="status", description="all, pending, shortlisted, rejected or accepted"
    ),
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
):
    """List applications newest first, optionally by exact status."""
    return await store.list_applications(status_filter)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: UUID,
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
):
    return await store.get_application(application_id)


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: UUID,
    fields: ApplicationUpdate,
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
):
    """Edit applicant data. Use the status endpoint to change status."""
    return await store.update_application_fields(admin, application_id, fields)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: UUID,
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
):
    await store.delete_application(admin, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{application_id}/status", response_model=ApplicationResponse)
async def transition_application(
    application_id: UUID,
    request: StatusTransitionRequest,
    admin: AdminContext = Depends(require_admin),
    lifecycle: LifecycleController = Depends(get_lifecycle),
):
    """
    Move an application to a new status and email the applicant.

    Allowed: pending → shortlisted | rejected, shortlisted → accepted |
    rejected. Anything else returns 409. The optional message is included
    in the email and not stored.
    """
    return await lifecycle.transition(admin, application_id, request.status, request.message)


@router.get("/{application_id}/resume")
async def download_resume(
    application_id: UUID,
    admin: AdminContext = Depends(require_admin),
    store: ApplicationStore = Depends(get_application_store),
    storage: ResumeStorage = Depends(get_storage),
):
    application = await store.get_application(application_id)
    content = await storage.read(application.resume_url)
    filename = posixpath.basename(application.resume_url)
    media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
