"""Free-text filtering over already-fetched result lists.

Case-insensitive substring match, no network and no mutation: the
functions return a new list and leave the input alone.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from rendering.pricing import price_text

if TYPE_CHECKING:
    from schemas import AssignmentData, CompanyData, GlobalServiceData


def _normalize(query: str | None) -> str:
    """Lower-cased query, or "" when it is blank.

    Surrounding whitespace only decides blankness; it stays part of the
    needle, so "doors " does not match a name ending in "Doors".
    """
    query = query or ""
    return query.lower() if query.strip() else ""


def _any_contains(needle: str, values: Iterable[object]) -> bool:
    return any(
        needle in str(value).lower() for value in values if value is not None
    )


def _unit(unit) -> str:
    return getattr(unit, "value", unit)


def _assignment_haystack(assignment: AssignmentData) -> list[object]:
    service = assignment.service
    if service is None:
        return []
    values: list[object] = [
        service.name,
        service.description,
        _unit(service.price_unit),
        price_text(service.base_price),
    ]
    if assignment.custom_price is not None:
        values.append(price_text(assignment.custom_price))
    return values


def company_matches(company: CompanyData, query: str) -> bool:
    """True when the lower-cased query occurs in any searchable field.

    Fields: name, city, state, email, phone, address, category,
    description, website, every ZIP code, and every assigned service's
    name, description, price unit and price text.
    """
    needle = _normalize(query)
    if not needle:
        return True

    basic = [
        company.name,
        company.city,
        company.state,
        company.email,
        company.phone,
        company.address,
        company.service_category,
        company.description,
        company.website,
    ]
    if _any_contains(needle, basic):
        return True
    if _any_contains(needle, company.zip_codes):
        return True
    return any(
        _any_contains(needle, _assignment_haystack(assignment))
        for assignment in company.company_services
    )


def filter_companies(
    companies: Sequence[CompanyData], query: str | None
) -> list[CompanyData]:
    needle = _normalize(query)
    if not needle:
        return list(companies)
    return [company for company in companies if company_matches(company, needle)]


def filter_global_services(
    services: Sequence[GlobalServiceData], query: str | None
) -> list[GlobalServiceData]:
    """Catalog filter over name, description, category and price unit."""
    needle = _normalize(query)
    if not needle:
        return list(services)
    return [
        service
        for service in services
        if _any_contains(
            needle,
            [
                service.name,
                service.description,
                service.category,
                _unit(service.price_unit),
            ],
        )
    ]
