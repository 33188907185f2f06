"""Application record store."""

from typing import Dict, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.exceptions import NotFound, RemoteServiceFailure, ValidationFailure
from portal.core.security import AdminContext
from portal.models.application import Application, ApplicationStatus
from portal.schemas.application import ApplicationForm, ApplicationUpdate
from portal.services.scoring_service import clamp_score
from portal.utils.constants import MAX_AI_FEEDBACK_LENGTH

logger = structlog.get_logger(__name__)

ALL_STATUSES = "all"


def parse_status_filter(value: Optional[str]) -> Optional[ApplicationStatus]:
    """``None`` or ``"all"`` means unfiltered; anything else must be a status."""
    if value is None or value == ALL_STATUSES:
        return None
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join([ALL_STATUSES] + [s.value for s in ApplicationStatus])
        raise ValidationFailure(
            f"Unknown status filter '{value}'", {"status": f"Must be one of: {allowed}"}
        )


class ApplicationStore:
    """Persistence of applications. Status changes go through LifecycleController."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_application(
        self,
        role_id: UUID,
        form: ApplicationForm,
        resume_url: str,
        score: int,
        feedback: str,
    ) -> Application:
        """Insert a new application, always in ``pending``."""
        application = Application(
            role_id=role_id,
            full_name=form.full_name,
            email=str(form.email),
            phone=form.phone,
            university=form.university,
            course=form.course,
            year=form.year,
            cgpa=form.cgpa,
            motivation=form.motivation,
            resume_url=resume_url,
            ai_score=clamp_score(score),
            ai_feedback=(feedback or "")[:MAX_AI_FEEDBACK_LENGTH],
            status=ApplicationStatus.PENDING.value,
        )
        self.db.add(application)
        await self._flush("application_create_failed")
        application = await self.get_application(application.id)
        logger.info(
            "application_created",
            application_id=str(application.id),
            role_id=str(role_id),
            ai_score=application.ai_score,
        )
        return application

    async def list_applications(self, status: Optional[str] = None) -> List[Application]:
        """Applications newest first, optionally restricted to one status."""
        status_filter = parse_status_filter(status)
        query = select(Application).order_by(Application.created_at.desc())
        if status_filter is not None:
            query = query.where(Application.status == status_filter.value)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error("application_list_failed", error=str(e))
            raise RemoteServiceFailure("database", str(e))
        return list(result.unique().scalars().all())

    async def get_application(self, application_id: UUID) -> Application:
        result = await self.db.execute(
            select(Application)
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        application = result.unique().scalar_one_or_none()
        if application is None:
            raise NotFound("Application", application_id)
        return application

    async def update_application_fields(
        self, admin: AdminContext, application_id: UUID, fields: ApplicationUpdate
    ) -> Application:
        """Admin edit of applicant-provided data; never touches status."""
        application = await self.get_application(application_id)
        changes = fields.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in changes:
            changes["email"] = str(changes["email"])
        for key, value in changes.items():
            setattr(application, key, value)
        await self._flush("application_update_failed")
        application = await self.get_application(application.id)
        logger.info(
            "application_updated",
            application_id=str(application_id),
            fields=sorted(changes),
            admin=admin.email,
        )
        return application

    async def delete_application(self, admin: AdminContext, application_id: UUID) -> None:
        """Hard delete. The stored resume blob is left in place."""
        application = await self.get_application(application_id)
        await self.db.delete(application)
        await self._flush("application_delete_failed")
        logger.info("application_deleted", application_id=str(application_id), admin=admin.email)

    async def set_status(self, application: Application, status: ApplicationStatus) -> Application:
        """Persist and commit a status change. Callers validate the transition first."""
        application.status = status.value
        await self.commit("application_status_write_failed")
        application = await self.get_application(application.id)
        return application

    async def commit(self, event: str = "application_commit_failed") -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(event, error=str(e))
            raise RemoteServiceFailure("database", str(e))

    async def count_by_status(self) -> Dict[str, int]:
        """Number of applications per status, every status present."""
        result = await self.db.execute(
            select(Application.status, func.count(Application.id)).group_by(Application.status)
        )
        counts = {status.value: 0 for status in ApplicationStatus}
        for status, count in result.all():
            counts[status] = count
        return counts

    async def _flush(self, event: str) -> None:
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(event, error=str(e))
            raise RemoteServiceFailure("database", str(e))
