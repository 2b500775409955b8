"""Global service catalog repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import GlobalService, utcnow
from repositories.utils import log_slow_query


class GlobalServiceRepository:
    """Repository for catalog entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, service_id: UUID) -> GlobalService | None:
        result = await self.db.execute(
            select(GlobalService).where(GlobalService.id == service_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> GlobalService | None:
        result = await self.db.execute(
            select(GlobalService).where(GlobalService.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    @log_slow_query("list_global_services")
    async def list_all(self) -> list[GlobalService]:
        """All catalog entries, newest first."""
        result = await self.db.execute(
            select(GlobalService).order_by(GlobalService.created_at.desc())
        )
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> GlobalService:
        service = GlobalService(**fields)
        self.db.add(service)
        await self.db.flush()
        await self.db.refresh(service)
        return service

    async def update(
        self, service: GlobalService, changes: dict[str, Any]
    ) -> GlobalService:
        for field, value in changes.items():
            setattr(service, field, value)
        service.updated_at = utcnow()

        await self.db.flush()
        await self.db.refresh(service)
        return service

    async def delete(self, service_id: UUID) -> bool:
        """Unconditional delete. Assignments referencing it cascade."""
        result = await self.db.execute(
            delete(GlobalService).where(GlobalService.id == service_id)
        )
        return result.rowcount > 0
