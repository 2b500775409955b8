"""Company directory business logic: search, detail and CRUD."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from models import Company, CompanyService
from repositories.company_repository import CompanyRepository
from schemas import (
    AssignmentData,
    CompanyCreate,
    CompanyData,
    CompanyDetailData,
    CompanyUpdate,
    LegacyServiceData,
)

logger = get_logger(__name__)


class ZipCodeRequiredError(ValueError):
    """Search was called without a ZIP code."""

    def __init__(self) -> None:
        super().__init__("ZIP code is required")


class CompanyNotFoundError(Exception):
    def __init__(self, company_id: UUID) -> None:
        self.company_id = company_id
        super().__init__("Company not found")


def is_publicly_listed(assignment: CompanyService) -> bool:
    """Available, and its catalog entry still exists and is active."""
    service = assignment.service
    return assignment.is_available and service is not None and service.is_active


def to_company_data(company: Company, *, public: bool = False) -> CompanyData:
    """Serialize a company. Public views drop unavailable/inactive services."""
    assignments = company.company_services
    if public:
        assignments = [a for a in assignments if is_publicly_listed(a)]
    data = CompanyData.model_validate(company)
    return data.model_copy(
        update={
            "company_services": [AssignmentData.model_validate(a) for a in assignments]
        }
    )


def to_company_detail(company: Company) -> CompanyDetailData:
    base = to_company_data(company, public=True)
    return CompanyDetailData(
        **base.model_dump(exclude={"company_services"}),
        company_services=base.company_services,
        services=[LegacyServiceData.model_validate(s) for s in company.legacy_services],
    )


async def search_companies(
    db: AsyncSession, zip_code: str | None, category: str | None = None
) -> list[CompanyData]:
    """Companies in ``category`` serving ``zip_code``.

    Raises ZipCodeRequiredError before any query when the ZIP is blank.
    """
    zip_code = (zip_code or "").strip()
    if not zip_code:
        raise ZipCodeRequiredError()
    category = (category or "").strip() or get_settings().default_category

    companies = await CompanyRepository(db).search(zip_code, category)

    set_wide_event_fields(
        search_zip=zip_code,
        search_category=category,
        search_result_count=len(companies),
    )
    return [to_company_data(c, public=True) for c in companies]


async def list_companies(db: AsyncSession) -> list[CompanyData]:
    """Every company, newest first, with all of its assignments."""
    companies = await CompanyRepository(db).list_all()
    return [to_company_data(c) for c in companies]


async def get_company(db: AsyncSession, company_id: UUID) -> Company:
    company = await CompanyRepository(db).get_by_id(company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company


async def get_company_detail(db: AsyncSession, company_id: UUID) -> CompanyDetailData:
    """Public detail: listed assignments plus legacy per-company services."""
    return to_company_detail(await get_company(db, company_id))


async def create_company(db: AsyncSession, payload: CompanyCreate) -> CompanyData:
    fields = payload.model_dump()
    zip_codes = fields.pop("zip_codes")
    company = await CompanyRepository(db).create(zip_codes, **fields)

    logger.info(
        "company.created",
        company_id=str(company.id),
        category=company.service_category,
        zip_count=len(zip_codes),
    )
    set_wide_event_fields(company_id=str(company.id))
    return to_company_data(company)


async def update_company(
    db: AsyncSession, company_id: UUID, payload: CompanyUpdate
) -> CompanyData:
    """Presence-checked patch. Last writer wins."""
    company = await get_company(db, company_id)
    changes = payload.changes()
    company = await CompanyRepository(db).update(company, changes)

    logger.info(
        "company.updated", company_id=str(company_id), fields=sorted(changes.keys())
    )
    set_wide_event_fields(company_id=str(company_id))
    return to_company_data(company)


async def delete_company(db: AsyncSession, company_id: UUID) -> None:
    """Delete a company; its assignments go with it (FK cascade)."""
    deleted = await CompanyRepository(db).delete(company_id)
    if not deleted:
        raise CompanyNotFoundError(company_id)

    logger.info("company.deleted", company_id=str(company_id))
    set_wide_event_fields(company_id=str(company_id))
