"""Shared fixtures: in-memory database, stub collaborators and an API client."""

import os

# Must be set before portal.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RESEND_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["SENTRY_DSN"] = ""
os.environ["LOG_FORMAT"] = "console"

from datetime import datetime
from typing import Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portal.api.deps import get_ai, get_notifier, get_storage
from portal.core.security import AdminContext, create_session_token
from portal.db.base import Base
from portal.db.session import get_db
from portal.main import app
from portal.models.role import InternshipRole
from portal.services.ai import AIProvider
from portal.services.application_store import ApplicationStore
from portal.services.email_service import EmailResult
from portal.services.lifecycle import LifecycleController
from portal.services.role_catalog import RoleCatalog
from portal.services.scoring_service import ResumeScorer
from portal.services.storage_service import LocalResumeStorage

MOTIVATION = (
    "I want to build reliable backend systems and learn from experienced engineers "
    "while shipping features used by real students."
)


class StubProvider(AIProvider):
    """Scripted AI provider; ``error`` makes every call raise."""

    def __init__(self, score_payload=None, reply: str = "Applications close on the deadline.", error=None):
        self.score_payload = {"score": 78, "feedback": "Good fit"} if score_payload is None else score_payload
        self.reply = reply
        self.error = error
        self.chat_contexts: List[Dict] = []

    async def score_resume(self, resume_text: str, job_description: str) -> Dict:
        if self.error:
            raise self.error
        return self.score_payload

    async def chat_reply(self, message: str, context: Dict) -> str:
        if self.error:
            raise self.error
        self.chat_contexts.append(context)
        return self.reply

    @property
    def name(self) -> str:
        return "stub"


class RecordingNotifier:
    """Notifier that records calls. ``fail`` makes it raise, ``unsuccessful`` makes it report failure."""

    def __init__(self, fail: bool = False, unsuccessful: bool = False):
        self.fail = fail
        self.unsuccessful = unsuccessful
        self.sent: List[Dict] = []

    def _record(self, kind: str, **fields) -> EmailResult:
        if self.fail:
            raise ConnectionError("mail relay unreachable")
        self.sent.append({"kind": kind, **fields})
        if self.unsuccessful:
            return EmailResult(success=False, error="rejected by provider")
        return EmailResult(success=True, message_id=f"msg-{len(self.sent)}")

    async def send_application_confirmation(self, email: str, name: str, role_title: str) -> EmailResult:
        return self._record("confirmation", email=email, name=name, role_title=role_title)

    async def send_status_update(
        self, email: str, name: str, role_title: str, status: str, message: str = ""
    ) -> EmailResult:
        return self._record(
            "status_update", email=email, name=name, role_title=role_title, status=status, message=message
        )


def form_data(**overrides) -> Dict:
    data = {
        "full_name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "university": "IIT Madras",
        "course": "B.Tech Computer Science",
        "year": "3",
        "cgpa": "8.7",
        "motivation": MOTIVATION,
    }
    data.update(overrides)
    return data


async def make_role(
    db: AsyncSession,
    title: str = "Backend Intern",
    department: str = "Engineering",
    description: str = "Build APIs with Python and PostgreSQL",
    created_at: Optional[datetime] = None,
    **fields,
) -> InternshipRole:
    role = InternshipRole(title=title, department=department, description=description, **fields)
    if created_at is not None:
        role.created_at = created_at
    db.add(role)
    await db.commit()
    await db.refresh(role)
    return role


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin() -> AdminContext:
    return AdminContext(user_id="00000000-0000-0000-0000-000000000001", email="admin@octaiq.com")


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def storage(tmp_path) -> LocalResumeStorage:
    return LocalResumeStorage(str(tmp_path / "resumes"))


@pytest.fixture
def lifecycle(db, provider, notifier, storage) -> LifecycleController:
    return LifecycleController(
        store=ApplicationStore(db),
        catalog=RoleCatalog(db),
        scorer=ResumeScorer(provider),
        storage=storage,
        notifier=notifier,
    )


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    token = create_session_token("00000000-0000-0000-0000-000000000001", "admin@octaiq.com", "admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers() -> Dict[str, str]:
    token = create_session_token("00000000-0000-0000-0000-000000000002", "viewer@octaiq.com", "viewer")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(session_factory, provider, notifier, storage):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai] = lambda: provider
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
