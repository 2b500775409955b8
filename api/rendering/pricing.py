"""Price display helpers.

Pure functions shared by the JSON API, the Jinja2 pages and the search
filter. Prices are floats; ``None`` means the catalog entry is gone.
"""

from __future__ import annotations

from models import PriceUnit

UNIT_SUFFIXES: dict[str, str] = {
    PriceUnit.PER_SERVICE.value: "",
    PriceUnit.PER_HOUR.value: "/hr",
    PriceUnit.PER_SQFT.value: "/sqft",
    PriceUnit.PER_DAY.value: "/day",
    PriceUnit.PER_WEEK.value: "/wk",
    PriceUnit.PER_MONTH.value: "/mo",
}

UNIT_LABELS: dict[str, str] = {
    PriceUnit.PER_SERVICE.value: "Per Service",
    PriceUnit.PER_HOUR.value: "Per Hour",
    PriceUnit.PER_SQFT.value: "Per Square Foot",
    PriceUnit.PER_DAY.value: "Per Day",
    PriceUnit.PER_WEEK.value: "Per Week",
    PriceUnit.PER_MONTH.value: "Per Month",
}

MISSING_PRICE = "Price unavailable"


def _unit_value(unit: PriceUnit | str) -> str:
    return unit.value if isinstance(unit, PriceUnit) else str(unit)


def effective_price(
    custom_price: float | None, base_price: float | None
) -> float | None:
    """Custom price when set (zero included), otherwise the catalog price."""
    if custom_price is not None:
        return custom_price
    return base_price


def unit_suffix(unit: PriceUnit | str) -> str:
    """Display suffix for a price unit. Unknown (legacy) units get none."""
    return UNIT_SUFFIXES.get(_unit_value(unit), "")


def unit_label(unit: PriceUnit | str) -> str:
    value = _unit_value(unit)
    return UNIT_LABELS.get(value, value.replace("_", " ").title())


def price_text(price: float) -> str:
    """Number as text the way the browser prints it: 150 not 150.0."""
    if float(price).is_integer():
        return str(int(price))
    return repr(float(price))


def format_price(
    price: float | None, unit: PriceUnit | str = PriceUnit.PER_SERVICE
) -> str:
    """``$150/hr`` style label."""
    if price is None:
        return MISSING_PRICE
    return f"${price_text(price)}{unit_suffix(unit)}"


def assignment_price_label(assignment) -> str:
    """Effective price label for an assignment joined with its catalog entry."""
    service = assignment.service
    if service is None:
        return MISSING_PRICE
    price = effective_price(assignment.custom_price, service.base_price)
    return format_price(price, service.price_unit)
