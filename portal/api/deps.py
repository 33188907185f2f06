"""
API Dependencies
Services wired per request; tests replace the external collaborators
(AI provider, notifier, storage) through FastAPI dependency overrides.
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.db.session import get_db
from portal.services.ai import AIProvider, get_ai_provider
from portal.services.application_store import ApplicationStore
from portal.services.chat_service import ChatService
from portal.services.email_service import EmailService
from portal.services.lifecycle import LifecycleController, Notifier
from portal.services.role_catalog import RoleCatalog
from portal.services.scoring_service import ResumeScorer
from portal.services.storage_service import ResumeStorage, get_resume_storage


def get_ai() -> Optional[AIProvider]:
    return get_ai_provider()


def get_notifier() -> Notifier:
    return EmailService()


def get_storage() -> ResumeStorage:
    return get_resume_storage()


def get_role_catalog(db: AsyncSession = Depends(get_db)) -> RoleCatalog:
    return RoleCatalog(db)


def get_application_store(db: AsyncSession = Depends(get_db)) -> ApplicationStore:
    return ApplicationStore(db)


def get_lifecycle(
    store: ApplicationStore = Depends(get_application_store),
    catalog: RoleCatalog = Depends(get_role_catalog),
    provider: Optional[AIProvider] = Depends(get_ai),
    storage: ResumeStorage = Depends(get_storage),
    notifier: Notifier = Depends(get_notifier),
) -> LifecycleController:
    return LifecycleController(
        store=store,
        catalog=catalog,
        scorer=ResumeScorer(provider),
        storage=storage,
        notifier=notifier,
    )


def get_chat_service(
    db: AsyncSession = Depends(get_db),
    provider: Optional[AIProvider] = Depends(get_ai),
) -> ChatService:
    return ChatService(db, provider)
