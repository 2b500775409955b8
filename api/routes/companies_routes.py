"""Public directory endpoints: search and company CRUD."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Request

from core.auth import PublicRole
from core.database import DbSession
from core.ratelimit import READ_LIMIT, WRITE_LIMIT, limiter
from schemas import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    SuccessResponse,
)
from services.companies_service import (
    CompanyNotFoundError,
    ZipCodeRequiredError,
    create_company,
    delete_company,
    get_company_detail,
    search_companies,
    update_company,
)

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.get(
    "",
    response_model=CompanyListResponse,
    responses={400: {"description": "ZIP code is required"}},
)
@limiter.limit(READ_LIMIT)
async def search_companies_endpoint(
    request: Request,
    db: DbSession,
    role: PublicRole,
    zip_code: str | None = Query(
        default=None, alias="zip", description="ZIP code the company serves"
    ),
    category: str | None = Query(default=None, description="Service category"),
) -> CompanyListResponse:
    """Companies in a category that serve a ZIP code."""
    try:
        companies = await search_companies(db, zip_code, category)
    except ZipCodeRequiredError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CompanyListResponse(companies=companies)


@router.post("", response_model=CompanyResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_company_endpoint(
    request: Request, payload: CompanyCreate, db: DbSession, role: PublicRole
) -> CompanyResponse:
    company = await create_company(db, payload)
    return CompanyResponse(company=company)


@router.get(
    "/{company_id}",
    response_model=CompanyDetailResponse,
    responses={404: {"description": "Company not found"}},
)
@limiter.limit(READ_LIMIT)
async def get_company_endpoint(
    request: Request, company_id: UUID, db: DbSession, role: PublicRole
) -> CompanyDetailResponse:
    """Company detail with listed services and legacy services."""
    try:
        company = await get_company_detail(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CompanyDetailResponse(company=company)


@router.put(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={404: {"description": "Company not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def update_company_endpoint(
    request: Request,
    company_id: UUID,
    payload: CompanyUpdate,
    db: DbSession,
    role: PublicRole,
) -> CompanyResponse:
    try:
        company = await update_company(db, company_id, payload)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CompanyResponse(company=company)


@router.delete(
    "/{company_id}",
    response_model=SuccessResponse,
    responses={404: {"description": "Company not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def delete_company_endpoint(
    request: Request, company_id: UUID, db: DbSession, role: PublicRole
) -> SuccessResponse:
    try:
        await delete_company(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(success=True)
