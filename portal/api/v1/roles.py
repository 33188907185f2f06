"""Role endpoints - browse, search and manage internship roles."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from portal.api.deps import get_lifecycle, get_role_catalog
from portal.core.security import AdminContext, require_admin
from portal.schemas.application import SubmissionResponse
from portal.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from portal.services.lifecycle import LifecycleController
from portal.services.role_catalog import RoleCatalog

router = APIRouter()


@router.get("/", response_model=List[RoleResponse])
async def list_roles(
    search: Optional[str] = Query(None, description="Case-insensitive match on title, department or description"),
    catalog: RoleCatalog = Depends(get_role_catalog),
):
    """
    List every role, newest first.

    Inactive roles are included. `search` keeps roles whose title,
    department or description contains the term.
    """
    return await catalog.search_roles(search)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(role_id: UUID, catalog: RoleCatalog = Depends(get_role_catalog)):
    return await catalog.get_role(role_id)


@router.post("/", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    fields: RoleCreate,
    admin: AdminContext = Depends(require_admin),
    catalog: RoleCatalog = Depends(get_role_catalog),
):
    return await catalog.create_role(admin, fields)


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    fields: RoleUpdate,
    admin: AdminContext = Depends(require_admin),
    catalog: RoleCatalog = Depends(get_role_catalog),
):
    return await catalog.update_role(admin, role_id, fields)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: UUID,
    admin: AdminContext = Depends(require_admin),
    catalog: RoleCatalog = Depends(get_role_catalog),
):
    await catalog.delete_role(admin, role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{role_id}/applications",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_application(
    role_id: UUID,
    full_name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    university: Optional[str] = Form(None),
    course: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
    cgpa: Optional[str] = Form(None),
    motivation: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    lifecycle: LifecycleController = Depends(get_lifecycle),
):
    """
    Submit an application for a role (multipart form).

    Every field and the resume (PDF, DOC or DOCX) are required. The
    application is stored as `pending` with an AI score; a confirmation
    email is attempted afterwards.
    """
    form_data = {
        key: value
        for key, value in {
            "full_name": full_name,
            "email": email,
            "phone": phone,
            "university": university,
            "course": course,
            "year": year,
            "cgpa": cgpa,
            "motivation": motivation,
        }.items()
        if value is not None
    }
    filename = resume.filename if resume is not None else None
    content = await resume.read() if resume is not None else None

    application = await lifecycle.submit_application(role_id, form_data, filename, content)
    return SubmissionResponse(id=application.id, role_id=application.role_id, status=application.status)
