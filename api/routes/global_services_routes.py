"""Admin endpoints for the global service catalog."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import require_service_role
from core.database import DbSession
from core.ratelimit import READ_LIMIT, WRITE_LIMIT, limiter
from schemas import (
    GlobalServiceCreate,
    GlobalServiceListResponse,
    GlobalServiceResponse,
    GlobalServiceUpdate,
    SuccessResponse,
)
from services.global_services_service import (
    GlobalServiceNotFoundError,
    create_global_service,
    delete_global_service,
    list_global_services,
    update_global_service,
)

router = APIRouter(
    prefix="/api/admin/global-services",
    tags=["admin"],
    dependencies=[Depends(require_service_role)],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Admin access required"},
    },
)


@router.get("", response_model=GlobalServiceListResponse)
@limiter.limit(READ_LIMIT)
async def list_global_services_endpoint(
    request: Request, db: DbSession
) -> GlobalServiceListResponse:
    """Catalog entries, newest first."""
    return GlobalServiceListResponse(services=await list_global_services(db))


@router.post("", response_model=GlobalServiceResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_global_service_endpoint(
    request: Request, payload: GlobalServiceCreate, db: DbSession
) -> GlobalServiceResponse:
    """Create a catalog entry. Category defaults to "general"."""
    return GlobalServiceResponse(service=await create_global_service(db, payload))


@router.put(
    "/{service_id}",
    response_model=GlobalServiceResponse,
    responses={404: {"description": "Service not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def update_global_service_endpoint(
    request: Request, service_id: UUID, payload: GlobalServiceUpdate, db: DbSession
) -> GlobalServiceResponse:
    """Partial update: only fields present in the body are written."""
    try:
        service = await update_global_service(db, service_id, payload)
    except GlobalServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return GlobalServiceResponse(service=service)


@router.delete("/{service_id}", response_model=SuccessResponse)
@limiter.limit(WRITE_LIMIT)
async def delete_global_service_endpoint(
    request: Request, service_id: UUID, db: DbSession
) -> SuccessResponse:
    await delete_global_service(db, service_id)
    return SuccessResponse(success=True)
