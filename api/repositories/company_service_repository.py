"""Company service (assignment) repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import CompanyService
from repositories.utils import insert_on_conflict_do_nothing, log_slow_query


class CompanyServiceRepository:
    """Repository for catalog-to-company assignments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, company_id: UUID, assignment_id: UUID) -> CompanyService | None:
        result = await self.db.execute(
            select(CompanyService).where(
                CompanyService.id == assignment_id,
                CompanyService.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    @log_slow_query("list_company_services")
    async def list_for_company(self, company_id: UUID) -> list[CompanyService]:
        """Assignments of one company with their catalog entry, newest first."""
        result = await self.db.execute(
            select(CompanyService)
            .where(CompanyService.company_id == company_id)
            .order_by(CompanyService.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_unique(
        self,
        company_id: UUID,
        service_id: UUID,
        *,
        custom_price: float | None = None,
        is_available: bool = True,
    ) -> CompanyService | None:
        """Insert an assignment unless the pair is already assigned.

        Returns None when the (company_id, service_id) constraint already
        holds a row, including one committed by a concurrent request.
        """
        assignment_id = await insert_on_conflict_do_nothing(
            self.db,
            CompanyService,
            {
                "company_id": company_id,
                "service_id": service_id,
                "custom_price": custom_price,
                "is_available": is_available,
            },
            index_elements=["company_id", "service_id"],
        )
        if assignment_id is None:
            return None
        return await self.get(company_id, assignment_id)

    async def update(
        self, assignment: CompanyService, changes: dict[str, Any]
    ) -> CompanyService:
        for field, value in changes.items():
            setattr(assignment, field, value)

        await self.db.flush()
        await self.db.refresh(assignment)
        return assignment

    async def delete(self, company_id: UUID, assignment_id: UUID) -> bool:
        result = await self.db.execute(
            delete(CompanyService).where(
                CompanyService.id == assignment_id,
                CompanyService.company_id == company_id,
            )
        )
        return result.rowcount > 0
