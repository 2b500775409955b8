"""Admin endpoints for companies and their service assignments.

Every route requires the service role key (Authorization: Bearer ...).
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from core.auth import require_service_role
from core.database import DbSession
from core.ratelimit import READ_LIMIT, WRITE_LIMIT, limiter
from schemas import (
    AssignmentCreate,
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentUpdate,
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    ErrorResponse,
    SuccessResponse,
)
from services.assignments_service import (
    AssignmentNotFoundError,
    ServiceAlreadyAssignedError,
    assign_service,
    list_assignments,
    unassign_service,
    update_assignment,
)
from services.companies_service import (
    CompanyNotFoundError,
    create_company,
    delete_company,
    get_company,
    list_companies,
    to_company_data,
    update_company,
)
from services.global_services_service import GlobalServiceNotFoundError

router = APIRouter(
    prefix="/api/admin/companies",
    tags=["admin"],
    dependencies=[Depends(require_service_role)],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Admin access required"},
    },
)


@router.get("", response_model=CompanyListResponse)
@limiter.limit(READ_LIMIT)
async def list_companies_endpoint(
    request: Request, db: DbSession
) -> CompanyListResponse:
    """All companies, newest first, with every assignment."""
    return CompanyListResponse(companies=await list_companies(db))


@router.post("", response_model=CompanyResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_company_endpoint(
    request: Request, payload: CompanyCreate, db: DbSession
) -> CompanyResponse:
    return CompanyResponse(company=await create_company(db, payload))


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={404: {"description": "Company not found"}},
)
@limiter.limit(READ_LIMIT)
async def get_company_endpoint(
    request: Request, company_id: UUID, db: DbSession
) -> CompanyResponse:
    try:
        company = await get_company(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CompanyResponse(company=to_company_data(company))


@router.put(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={404: {"description": "Company not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def update_company_endpoint(
    request: Request, company_id: UUID, payload: CompanyUpdate, db: DbSession
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
    request: Request, company_id: UUID, db: DbSession
) -> SuccessResponse:
    try:
        await delete_company(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(success=True)


@router.get("/{company_id}/services", response_model=AssignmentListResponse)
@limiter.limit(READ_LIMIT)
async def list_assignments_endpoint(
    request: Request, company_id: UUID, db: DbSession
) -> AssignmentListResponse:
    """Assignments of a company with their catalog entry, newest first."""
    return AssignmentListResponse(assignments=await list_assignments(db, company_id))


@router.post(
    "/{company_id}/services",
    response_model=AssignmentResponse,
    status_code=201,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Service is already assigned to this company",
        },
        404: {"description": "Company or service not found"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def assign_service_endpoint(
    request: Request, company_id: UUID, payload: AssignmentCreate, db: DbSession
) -> AssignmentResponse | JSONResponse:
    """Assign a catalog service to a company.

    A second assignment of the same pair returns 400 with
    ``code: "already_assigned"``.
    """
    try:
        assignment = await assign_service(db, company_id, payload)
    except (CompanyNotFoundError, GlobalServiceNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceAlreadyAssignedError as e:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(detail=str(e), code=e.code).model_dump(),
        )
    return AssignmentResponse(assignment=assignment)


@router.put(
    "/{company_id}/services/{assignment_id}",
    response_model=AssignmentResponse,
    responses={404: {"description": "Assignment not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def update_assignment_endpoint(
    request: Request,
    company_id: UUID,
    assignment_id: UUID,
    payload: AssignmentUpdate,
    db: DbSession,
) -> AssignmentResponse:
    """Set or clear the price override, or toggle availability."""
    try:
        assignment = await update_assignment(db, company_id, assignment_id, payload)
    except AssignmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AssignmentResponse(assignment=assignment)


@router.delete(
    "/{company_id}/services/{assignment_id}", response_model=SuccessResponse
)
@limiter.limit(WRITE_LIMIT)
async def unassign_service_endpoint(
    request: Request, company_id: UUID, assignment_id: UUID, db: DbSession
) -> SuccessResponse:
    await unassign_service(db, company_id, assignment_id)
    return SuccessResponse(success=True)
