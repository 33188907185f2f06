"""
Application lifecycle: submission and administrator-driven status changes.

Every operation is split into a primary step and an effects step:

1. Primary step: validate, then write to the store and commit. Errors here
   propagate to the caller and the operation counts as not completed.
2. Effects step: send the notification email. This runs only after the
   commit, is never atomic with it, and swallows every failure after
   logging it. A lost notification is not retried automatically; the
   ``notify_*`` methods can be called again on their own to resend.

Status graph::

    pending -> shortlisted -> accepted
       |            |
       +-> rejected +-> rejected
"""
from typing import Dict, FrozenSet, Optional, Protocol, Union
from uuid import UUID

import structlog
from pydantic import ValidationError

from portal.config import settings
from portal.core.exceptions import InvalidTransition, ValidationFailure
from portal.core.security import AdminContext
from portal.models.application import Application, ApplicationStatus
from portal.schemas.application import ApplicationForm
from portal.services.application_store import ApplicationStore
from portal.services.email_service import EmailResult
from portal.services.role_catalog import RoleCatalog
from portal.services.scoring_service import ResumeScorer
from portal.services.storage_service import ResumeStorage
from portal.utils.validators import validate_file_extension

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED}),
    ApplicationStatus.SHORTLISTED: frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.ACCEPTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in ALLOWED_TRANSITIONS.items() if not targets)


class Notifier(Protocol):
    async def send_application_confirmation(self, email: str, name: str, role_title: str) -> EmailResult:
        ...

    async def send_status_update(
        self, email: str, name: str, role_title: str, status: str, message: str = ""
    ) -> EmailResult:
        ...


def coerce_status(value: Union[str, ApplicationStatus]) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationFailure(f"Unknown status '{value}'", {"status": "Unknown status"})


def check_transition(current: ApplicationStatus, target: ApplicationStatus) -> None:
    """Raise InvalidTransition unless ``current -> target`` is an edge of the graph."""
    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransition(current.value, target.value)


def _form_errors(exc: ValidationError) -> Dict[str, str]:
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "form"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def validate_submission(
    form_data: Dict, resume_filename: Optional[str], resume_content: Optional[bytes]
) -> ApplicationForm:
    """Validate the submission form and resume, collecting every field error."""
    errors: Dict[str, str] = {}
    form = None
    try:
        form = ApplicationForm(**form_data)
    except ValidationError as e:
        errors.update(_form_errors(e))

    if not resume_filename or not resume_content:
        errors["resume"] = "Resume is required"
    elif not validate_file_extension(resume_filename, settings.ALLOWED_RESUME_EXTENSIONS):
        allowed = ", ".join(ext.upper() for ext in settings.ALLOWED_RESUME_EXTENSIONS)
        errors["resume"] = f"Resume must be one of: {allowed}"
    elif len(resume_content) > settings.MAX_UPLOAD_SIZE:
        errors["resume"] = f"Resume exceeds {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"

    if errors:
        raise ValidationFailure("Application form is invalid", errors)
    return form


class LifecycleController:
    """Sole owner of application status changes."""

    def __init__(
        self,
        store: ApplicationStore,
        catalog: RoleCatalog,
        scorer: ResumeScorer,
        storage: ResumeStorage,
        notifier: Notifier,
    ):
        self.store = store
        self.catalog = catalog
        self.scorer = scorer
        self.storage = storage
        self.notifier = notifier

    async def submit_application(
        self,
        role_id: UUID,
        form_data: Dict,
        resume_filename: Optional[str],
        resume_content: Optional[bytes],
    ) -> Application:
        """Validate, upload, score and persist a new ``pending`` application."""
        form = validate_submission(form_data, resume_filename, resume_content)
        role = await self.catalog.get_role(role_id)

        # An upload followed by a failed insert leaves an orphaned blob
        resume_url = await self.storage.upload(resume_filename, resume_content)
        result = await self.scorer.score(form.resume_text(), role.description)

        application = await self.store.create_application(
            role_id=role.id,
            form=form,
            resume_url=resume_url,
            score=result.score,
            feedback=result.feedback,
        )
        await self.store.commit("application_create_failed")

        await self.notify_submission(application)
        return application

    async def transition(
        self,
        admin: AdminContext,
        application_id: UUID,
        target: Union[str, ApplicationStatus],
        message: Optional[str] = None,
    ) -> Application:
        """Move an application along the status graph, then notify the applicant."""
        target = coerce_status(target)
        application = await self.store.get_application(application_id)
        current = coerce_status(application.status)

        try:
            check_transition(current, target)
        except InvalidTransition:
            logger.warning(
                "status_transition_rejected",
                application_id=str(application_id),
                current=current.value,
                target=target.value,
                admin=admin.email,
            )
            raise

        application = await self.store.set_status(application, target)
        logger.info(
            "status_transition_applied",
            application_id=str(application_id),
            previous=current.value,
            status=target.value,
            admin=admin.email,
        )

        await self.notify_status_change(application, target, message)
        return application

    async def notify_submission(self, application: Application) -> Optional[EmailResult]:
        """Send the confirmation email. Never raises."""
        return await self._run_effect(
            "application_confirmation",
            application,
            lambda: self.notifier.send_application_confirmation(
                application.email, application.full_name, application.role_title
            ),
        )

    async def notify_status_change(
        self, application: Application, status: ApplicationStatus, message: Optional[str] = None
    ) -> Optional[EmailResult]:
        """Send the status-update email. Never raises; the message is not stored."""
        return await self._run_effect(
            "status_update",
            application,
            lambda: self.notifier.send_status_update(
                application.email,
                application.full_name,
                application.role_title,
                status.value,
                message or "",
            ),
        )

    async def _run_effect(self, effect: str, application: Application, send) -> Optional[EmailResult]:
        try:
            result = await send()
        except Exception as e:
            logger.error(
                "notification_failed",
                effect=effect,
                application_id=str(application.id),
                error=str(e),
            )
            return None

        if result is not None and not result.success:
            logger.error(
                "notification_failed",
                effect=effect,
                application_id=str(application.id),
                error=result.error,
            )
        return result
