"""Role catalog: listing, search and admin CRUD of internship roles."""

from typing import List, Optional, Sequence
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.exceptions import NotFound, RemoteServiceFailure
from portal.core.security import AdminContext
from portal.models.role import InternshipRole
from portal.schemas.role import RoleCreate, RoleUpdate

logger = structlog.get_logger(__name__)

SEARCH_FIELDS = ("title", "department", "description")


def filter_roles(roles: Sequence[InternshipRole], term: Optional[str]) -> List[InternshipRole]:
    """Case-insensitive substring search over title, department and description.

    The term is matched as typed, whitespace included. An empty term returns
    every role; the input order is preserved.
    """
    if not term:
        return list(roles)

    needle = term.lower()
    return [
        role
        for role in roles
        if any(needle in (getattr(role, field) or "").lower() for field in SEARCH_FIELDS)
    ]


class RoleCatalog:
    """Roles are read by everyone and mutated by admins only."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_roles(self) -> List[InternshipRole]:
        """All roles, newest first. The active flag is not applied."""
        try:
            result = await self.db.execute(
                select(InternshipRole).order_by(InternshipRole.created_at.desc())
            )
        except SQLAlchemyError as e:
            logger.error("role_list_failed", error=str(e))
            raise RemoteServiceFailure("database", str(e))
        return list(result.scalars().all())

    async def search_roles(self, term: Optional[str]) -> List[InternshipRole]:
        return filter_roles(await self.list_roles(), term)

    async def get_role(self, role_id: UUID) -> InternshipRole:
        role = await self.db.get(InternshipRole, role_id)
        if role is None:
            raise NotFound("Role", role_id)
        return role

    async def create_role(self, admin: AdminContext, fields: RoleCreate) -> InternshipRole:
        role = InternshipRole(**fields.model_dump())
        self.db.add(role)
        await self._flush("role_create_failed")
        await self.db.refresh(role)
        logger.info("role_created", role_id=str(role.id), title=role.title, admin=admin.email)
        return role

    async def update_role(self, admin: AdminContext, role_id: UUID, fields: RoleUpdate) -> InternshipRole:
        role = await self.get_role(role_id)
        changes = fields.model_dump(exclude_unset=True)
        for key, value in changes.items():
            setattr(role, key, value)
        await self._flush("role_update_failed")
        await self.db.refresh(role)
        logger.info("role_updated", role_id=str(role_id), fields=sorted(changes), admin=admin.email)
        return role

    async def delete_role(self, admin: AdminContext, role_id: UUID) -> None:
        role = await self.get_role(role_id)
        await self.db.delete(role)
        await self._flush("role_delete_failed")
        logger.info("role_deleted", role_id=str(role_id), admin=admin.email)

    async def count_roles(self) -> dict:
        """Total and active role counts."""
        result = await self.db.execute(
            select(
                func.count(InternshipRole.id),
                func.count(InternshipRole.id).filter(InternshipRole.is_active.is_(True)),
            )
        )
        total, active = result.one()
        return {"total": total or 0, "active": active or 0}

    async def _flush(self, event: str) -> None:
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(event, error=str(e))
            raise RemoteServiceFailure("database", str(e))
