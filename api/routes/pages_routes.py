"""Page routes: server-side rendered HTML pages.

These routes serve full Jinja2 pages. They call the same services as the
JSON API routes but render HTML templates instead of returning JSON.
Free-text filtering (``q``) runs over the fetched list; after an admin
change made through the HTMX admin routes the lists are re-fetched and
re-rendered.
"""

from datetime import UTC, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from core.auth import require_public_key, require_service_role
from core.config import get_settings
from core.database import DbSession
from core.templates import templates
from rendering.admin import build_admin_context
from rendering.search import filter_companies
from services.companies_service import (
    CompanyNotFoundError,
    ZipCodeRequiredError,
    get_company_detail,
    list_companies,
    search_companies,
)
from services.global_services_service import list_global_services

router = APIRouter(tags=["pages"], include_in_schema=False)


def _template_context(request: Request, **kwargs) -> dict:
    """Build common template context."""
    return {
        "request": request,
        "now": datetime.now(UTC),
        "default_category": get_settings().default_category,
        **kwargs,
    }


@router.get(
    "/", response_class=HTMLResponse, dependencies=[Depends(require_public_key)]
)
async def home_page(
    request: Request,
    db: DbSession,
    zip_code: str | None = Query(default=None, alias="zip"),
    category: str | None = None,
    q: str | None = None,
) -> HTMLResponse:
    """Search form; results when a ZIP is given."""
    companies = None
    error = None
    if zip_code is not None:
        try:
            companies = await search_companies(db, zip_code, category)
        except ZipCodeRequiredError as e:
            error = str(e)

    filtered = filter_companies(companies, q) if companies is not None else None

    return templates.TemplateResponse(
        request,
        "pages/home.html",
        _template_context(
            request,
            zip=zip_code or "",
            category=category or "",
            q=q or "",
            companies=filtered,
            total=len(companies) if companies is not None else 0,
            error=error,
        ),
        status_code=400 if error else 200,
    )


@router.get(
    "/company/{company_id}",
    response_class=HTMLResponse,
    dependencies=[Depends(require_public_key)],
)
async def company_page(
    request: Request, company_id: UUID, db: DbSession
) -> HTMLResponse:
    """Company detail with contact info and priced services."""
    try:
        company = await get_company_detail(db, company_id)
    except CompanyNotFoundError:
        return templates.TemplateResponse(
            request,
            "pages/404.html",
            _template_context(request, message="Company not found"),
            status_code=404,
        )

    return templates.TemplateResponse(
        request,
        "pages/company.html",
        _template_context(request, company=company),
    )


@router.get(
    "/admin",
    response_class=HTMLResponse,
    dependencies=[Depends(require_service_role)],
)
async def admin_page(
    request: Request, db: DbSession, q: str | None = None
) -> HTMLResponse:
    """Admin dashboard: every company and catalog entry, filtered by ``q``.

    Add, edit and delete actions post to ``/htmx/admin/*``.
    """
    companies = await list_companies(db)
    services = await list_global_services(db)

    return templates.TemplateResponse(
        request,
        "pages/admin.html",
        _template_context(request, **build_admin_context(companies, services, q)),
    )
