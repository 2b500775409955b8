"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping routes thin and focused
on HTTP handling. This separation provides:
- Single source of truth for database operations
- Easier testing (repositories can be mocked)
- Reusable queries across the API and the server-rendered pages
"""

from repositories.company_repository import CompanyRepository
from repositories.company_service_repository import CompanyServiceRepository
from repositories.global_service_repository import GlobalServiceRepository
from repositories.utils import insert_on_conflict_do_nothing, log_slow_query

__all__ = [
    "CompanyRepository",
    "CompanyServiceRepository",
    "GlobalServiceRepository",
    "insert_on_conflict_do_nothing",
    "log_slow_query",
]
