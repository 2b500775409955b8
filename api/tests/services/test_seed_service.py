"""Tests for the sample data seed."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Company, CompanyService, GlobalService, LegacyService
from services.companies_service import search_companies
from services.seed_service import SAMPLE_CATALOG, SAMPLE_COMPANIES, seed_sample_data


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.integration
class TestSeedSampleData:
    async def test_first_run_creates_everything(self, db_session: AsyncSession):
        result = await seed_sample_data(db_session)

        expected_assignments = sum(len(c["assignments"]) for c in SAMPLE_COMPANIES)
        assert result.services_created == len(SAMPLE_CATALOG)
        assert result.companies_created == len(SAMPLE_COMPANIES)
        assert result.assignments_created == expected_assignments
        assert await _count(db_session, LegacyService) == 1

    async def test_second_run_is_a_no_op(self, db_session: AsyncSession):
        await seed_sample_data(db_session)
        await db_session.commit()

        again = await seed_sample_data(db_session)

        assert (again.services_created, again.companies_created) == (0, 0)
        assert again.assignments_created == 0
        assert await _count(db_session, GlobalService) == len(SAMPLE_CATALOG)
        assert await _count(db_session, Company) == len(SAMPLE_COMPANIES)
        assert await _count(db_session, CompanyService) == 6

    async def test_seeded_directory_is_searchable(self, db_session: AsyncSession):
        await seed_sample_data(db_session)
        await db_session.commit()
        db_session.expunge_all()

        garage = await search_companies(db_session, "90210")
        hvac = await search_companies(db_session, "10001", "hvac")

        assert {c.name for c in garage} == {
            "Elite Garage Doors",
            "Precision Door Service",
        }
        assert [c.name for c in hvac] == ["Cool Breeze HVAC"]
