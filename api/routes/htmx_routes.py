"""HTMX routes: admin dashboard actions that return HTML fragments.

Each action calls the same services as the JSON admin API, then re-fetches
both lists and returns the re-rendered ``partials/admin_lists.html``
fragment, which the page swaps into ``#admin-lists``.

- Form validation errors and duplicate assignments come back as an error
  banner inside the fragment (200, so HTMX swaps it in)
- A company, catalog entry or assignment that no longer exists means the
  page is stale: the response is empty with ``HX-Refresh: true``
"""

import logging
import re
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require_service_role
from core.database import DbSession
from core.ratelimit import WRITE_LIMIT, limiter
from core.templates import templates
from models import PriceUnit
from rendering.admin import build_admin_context
from schemas import (
    AssignmentCreate,
    AssignmentUpdate,
    CompanyCreate,
    CompanyUpdate,
    GlobalServiceCreate,
    GlobalServiceUpdate,
)
from services.assignments_service import (
    AssignmentNotFoundError,
    ServiceAlreadyAssignedError,
    assign_service,
    unassign_service,
    update_assignment,
)
from services.companies_service import (
    CompanyNotFoundError,
    create_company,
    delete_company,
    list_companies,
    update_company,
)
from services.global_services_service import (
    GlobalServiceNotFoundError,
    create_global_service,
    delete_global_service,
    list_global_services,
    update_global_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/htmx/admin",
    tags=["htmx"],
    include_in_schema=False,
    dependencies=[Depends(require_service_role)],
)

_ZIP_SEPARATORS = re.compile(r"[,\s]+")


def _optional(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def _validation_message(exc: ValidationError) -> str:
    """First error as ``field: message`` for the banner."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "input"
    return f"{field}: {error['msg']}"


async def company_form(
    name: str = Form(""),
    description: str = Form(""),
    phone: str = Form(""),
    email: str = Form(""),
    website: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    zip_codes: str = Form(""),
    service_category: str = Form(""),
) -> dict[str, Any]:
    """Company fields from the add/edit form.

    ZIP codes are one text input, split on commas or whitespace. A blank
    category is left out so the default (create) or current value (edit)
    applies.
    """
    fields: dict[str, Any] = {
        "name": name.strip(),
        "description": _optional(description),
        "phone": phone.strip(),
        "email": email.strip(),
        "website": _optional(website),
        "address": address.strip(),
        "city": city.strip(),
        "state": state.strip(),
        "zip_codes": [z for z in _ZIP_SEPARATORS.split(zip_codes) if z],
    }
    if service_category.strip():
        fields["service_category"] = service_category.strip()
    return fields


async def service_form(
    name: str = Form(""),
    description: str = Form(""),
    base_price: str = Form(""),
    price_unit: str = Form(PriceUnit.PER_SERVICE.value),
    category: str = Form(""),
    is_active: str | None = Form(None),
) -> dict[str, Any]:
    """Catalog fields from the add/edit form. An unchecked box is False."""
    fields: dict[str, Any] = {
        "name": name.strip(),
        "description": _optional(description),
        "base_price": base_price.strip() or None,
        "price_unit": price_unit,
        "is_active": is_active is not None,
    }
    if category.strip():
        fields["category"] = category.strip()
    return fields


CompanyForm = Annotated[dict[str, Any], Depends(company_form)]
ServiceForm = Annotated[dict[str, Any], Depends(service_form)]


async def _render_admin_lists(
    request: Request, db: AsyncSession, q: str | None, *, error: str | None = None
) -> HTMLResponse:
    """Re-fetch companies and catalog and render the lists fragment."""
    companies = await list_companies(db)
    services = await list_global_services(db)
    context = build_admin_context(companies, services, q, error=error)
    return templates.TemplateResponse(
        request, "partials/admin_lists.html", {"request": request, **context}
    )


def _stale_page() -> HTMLResponse:
    response = HTMLResponse("")
    response.headers["HX-Refresh"] = "true"
    return response


# ============ Companies ============


@router.post("/companies", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_create_company(
    request: Request, db: DbSession, fields: CompanyForm, q: str = Form("")
) -> HTMLResponse:
    try:
        payload = CompanyCreate.model_validate(fields)
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    await create_company(db, payload)
    return await _render_admin_lists(request, db, q)


@router.put("/companies/{company_id}", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_update_company(
    request: Request,
    company_id: UUID,
    db: DbSession,
    fields: CompanyForm,
    q: str = Form(""),
) -> HTMLResponse:
    try:
        payload = CompanyUpdate.model_validate(fields)
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    try:
        await update_company(db, company_id, payload)
    except CompanyNotFoundError:
        logger.warning(
            "htmx.company_update.not_found", extra={"company_id": str(company_id)}
        )
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.delete("/companies/{company_id}", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_delete_company(
    request: Request, company_id: UUID, db: DbSession, q: str | None = None
) -> HTMLResponse:
    try:
        await delete_company(db, company_id)
    except CompanyNotFoundError:
        return _stale_page()
    return await _render_admin_lists(request, db, q)


# ============ Service catalog ============


@router.post("/global-services", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_create_global_service(
    request: Request, db: DbSession, fields: ServiceForm, q: str = Form("")
) -> HTMLResponse:
    try:
        payload = GlobalServiceCreate.model_validate(fields)
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    await create_global_service(db, payload)
    return await _render_admin_lists(request, db, q)


@router.put("/global-services/{service_id}", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_update_global_service(
    request: Request,
    service_id: UUID,
    db: DbSession,
    fields: ServiceForm,
    q: str = Form(""),
) -> HTMLResponse:
    try:
        payload = GlobalServiceUpdate.model_validate(fields)
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    try:
        await update_global_service(db, service_id, payload)
    except GlobalServiceNotFoundError:
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.post("/global-services/{service_id}/active", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_set_global_service_active(
    request: Request,
    service_id: UUID,
    db: DbSession,
    is_active: bool = Form(...),
    q: str = Form(""),
) -> HTMLResponse:
    """Activate or deactivate a catalog entry."""
    try:
        await update_global_service(
            db, service_id, GlobalServiceUpdate(is_active=is_active)
        )
    except GlobalServiceNotFoundError:
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.delete("/global-services/{service_id}", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_delete_global_service(
    request: Request, service_id: UUID, db: DbSession, q: str | None = None
) -> HTMLResponse:
    await delete_global_service(db, service_id)
    return await _render_admin_lists(request, db, q)


# ============ Assignments ============


@router.post("/companies/{company_id}/services", response_class=HTMLResponse)
@limiter.limit(WRITE_LIMIT)
async def htmx_assign_service(
    request: Request,
    company_id: UUID,
    db: DbSession,
    service_id: str = Form(""),
    custom_price: str = Form(""),
    q: str = Form(""),
) -> HTMLResponse:
    """Assign a catalog entry, with an optional price override."""
    try:
        payload = AssignmentCreate.model_validate(
            {"service_id": service_id, "custom_price": custom_price.strip() or None}
        )
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    try:
        await assign_service(db, company_id, payload)
    except ServiceAlreadyAssignedError as e:
        return await _render_admin_lists(request, db, q, error=str(e))
    except (CompanyNotFoundError, GlobalServiceNotFoundError):
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.put(
    "/companies/{company_id}/services/{assignment_id}", response_class=HTMLResponse
)
@limiter.limit(WRITE_LIMIT)
async def htmx_set_assignment_price(
    request: Request,
    company_id: UUID,
    assignment_id: UUID,
    db: DbSession,
    custom_price: str = Form(""),
    q: str = Form(""),
) -> HTMLResponse:
    """Set the price override; a blank price clears it."""
    try:
        payload = AssignmentUpdate.model_validate(
            {"custom_price": custom_price.strip() or None}
        )
    except ValidationError as e:
        return await _render_admin_lists(request, db, q, error=_validation_message(e))

    try:
        await update_assignment(db, company_id, assignment_id, payload)
    except AssignmentNotFoundError:
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.post(
    "/companies/{company_id}/services/{assignment_id}/availability",
    response_class=HTMLResponse,
)
@limiter.limit(WRITE_LIMIT)
async def htmx_set_assignment_availability(
    request: Request,
    company_id: UUID,
    assignment_id: UUID,
    db: DbSession,
    is_available: bool = Form(...),
    q: str = Form(""),
) -> HTMLResponse:
    try:
        await update_assignment(
            db, company_id, assignment_id, AssignmentUpdate(is_available=is_available)
        )
    except AssignmentNotFoundError:
        return _stale_page()
    return await _render_admin_lists(request, db, q)


@router.delete(
    "/companies/{company_id}/services/{assignment_id}", response_class=HTMLResponse
)
@limiter.limit(WRITE_LIMIT)
async def htmx_unassign_service(
    request: Request,
    company_id: UUID,
    assignment_id: UUID,
    db: DbSession,
    q: str | None = None,
) -> HTMLResponse:
    await unassign_service(db, company_id, assignment_id)
    return await _render_admin_lists(request, db, q)
