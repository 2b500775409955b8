"""Rendering module for presentation concerns.

This module handles presentation logic shared by the JSON API and the
server-rendered pages:
- Price display (effective price, unit suffixes)
- Free-text filtering of fetched company and catalog lists
- The admin dashboard view model

This separates presentation concerns from business logic in services.
"""

from rendering.admin import assignable_services, build_admin_context
from rendering.pricing import (
    assignment_price_label,
    effective_price,
    format_price,
    price_text,
    unit_label,
    unit_suffix,
)
from rendering.search import company_matches, filter_companies, filter_global_services

__all__ = [
    "assignable_services",
    "assignment_price_label",
    "build_admin_context",
    "company_matches",
    "effective_price",
    "filter_companies",
    "filter_global_services",
    "format_price",
    "price_text",
    "unit_label",
    "unit_suffix",
]
