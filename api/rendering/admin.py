"""Admin dashboard view model.

Shared by the full /admin page and the HTMX fragments that re-render the
lists after a change.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from models import PriceUnit
from rendering.search import filter_companies, filter_global_services

if TYPE_CHECKING:
    from uuid import UUID

    from schemas import CompanyData, GlobalServiceData


def assignable_services(
    company: CompanyData, services: Sequence[GlobalServiceData]
) -> list[GlobalServiceData]:
    """Active catalog entries the company does not offer yet."""
    taken = {assignment.service_id for assignment in company.company_services}
    return [s for s in services if s.is_active and s.id not in taken]


def build_admin_context(
    companies: Sequence[CompanyData],
    services: Sequence[GlobalServiceData],
    q: str | None,
    *,
    error: str | None = None,
) -> dict:
    """Filtered lists, totals and per-company assign pickers."""
    assignable: dict[UUID, list[GlobalServiceData]] = {
        company.id: assignable_services(company, services) for company in companies
    }
    return {
        "q": q or "",
        "companies": filter_companies(companies, q),
        "services": filter_global_services(services, q),
        "company_total": len(companies),
        "service_total": len(services),
        "assignable": assignable,
        "price_units": list(PriceUnit),
        "error": error,
    }
