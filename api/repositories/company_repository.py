"""Company repository for database operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Company, CompanyZipCode, utcnow
from repositories.utils import log_slow_query


class CompanyRepository:
    """Repository for Company database operations.

    Zip codes, assignments and legacy services load with the company
    (selectin), so returned objects are safe to serialize outside the
    session's async context.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, company_id: UUID) -> Company | None:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def exists(self, company_id: UUID) -> bool:
        result = await self.db.execute(
            select(Company.id).where(Company.id == company_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_by_name(self, name: str) -> Company | None:
        result = await self.db.execute(
            select(Company).where(Company.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    @log_slow_query("search_companies")
    async def search(self, zip_code: str, category: str) -> list[Company]:
        """Companies in ``category`` whose ZIP set contains ``zip_code``.

        Exact containment only. No ordering guarantee.
        """
        result = await self.db.execute(
            select(Company).where(
                Company.service_category == category,
                Company.zip_code_rows.any(CompanyZipCode.zip_code == zip_code),
            )
        )
        return list(result.scalars().all())

    @log_slow_query("list_companies")
    async def list_all(self) -> list[Company]:
        """All companies, newest first."""
        result = await self.db.execute(
            select(Company).order_by(Company.created_at.desc())
        )
        return list(result.scalars().all())

    async def create(self, zip_codes: list[str], **fields: Any) -> Company:
        company = Company(company_services=[], legacy_services=[], **fields)
        company.set_zip_codes(zip_codes)
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def update(self, company: Company, changes: dict[str, Any]) -> Company:
        """Apply a presence-checked patch and stamp updated_at."""
        changes = dict(changes)
        zip_codes = changes.pop("zip_codes", None)
        for field, value in changes.items():
            setattr(company, field, value)
        if zip_codes is not None:
            company.set_zip_codes(zip_codes)
        company.updated_at = utcnow()

        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def delete(self, company_id: UUID) -> bool:
        """Delete a company. Assignments, ZIP rows and legacy services cascade
        in the database.
        """
        result = await self.db.execute(delete(Company).where(Company.id == company_id))
        return result.rowcount > 0
