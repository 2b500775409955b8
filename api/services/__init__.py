"""Service layer for business logic.

Services encapsulate all business logic, keeping routes thin and focused
on HTTP handling. This separation provides:
- Clear business rules in one place
- Orchestration of multiple repositories
- Reusable business logic across the JSON API and the HTML pages

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain all business rules and validation
- Orchestrate calls to repositories
- Raise domain exceptions (routes map them to status codes)

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
"""
