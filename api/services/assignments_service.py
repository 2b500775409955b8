"""Assigning catalog services to companies.

The (company, service) uniqueness lives in the database constraint.
The insert either creates the row or reports that the pair is taken, so two
concurrent assigns can never both succeed.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_nested
from repositories.company_repository import CompanyRepository
from repositories.company_service_repository import CompanyServiceRepository
from repositories.global_service_repository import GlobalServiceRepository
from schemas import AssignmentCreate, AssignmentData, AssignmentUpdate
from services.companies_service import CompanyNotFoundError
from services.global_services_service import GlobalServiceNotFoundError

logger = get_logger(__name__)

ALREADY_ASSIGNED_CODE = "already_assigned"


class ServiceAlreadyAssignedError(Exception):
    code = ALREADY_ASSIGNED_CODE

    def __init__(self, company_id: UUID, service_id: UUID) -> None:
        self.company_id = company_id
        self.service_id = service_id
        super().__init__("Service is already assigned to this company")


class AssignmentNotFoundError(Exception):
    def __init__(self, assignment_id: UUID) -> None:
        self.assignment_id = assignment_id
        super().__init__("Assignment not found")


async def list_assignments(db: AsyncSession, company_id: UUID) -> list[AssignmentData]:
    assignments = await CompanyServiceRepository(db).list_for_company(company_id)
    return [AssignmentData.model_validate(a) for a in assignments]


async def assign_service(
    db: AsyncSession, company_id: UUID, payload: AssignmentCreate
) -> AssignmentData:
    """Create an assignment joined with its catalog entry.

    Raises:
        CompanyNotFoundError / GlobalServiceNotFoundError: unknown ids.
        ServiceAlreadyAssignedError: the pair already has a row.
    """
    if not await CompanyRepository(db).exists(company_id):
        raise CompanyNotFoundError(company_id)
    if await GlobalServiceRepository(db).get_by_id(payload.service_id) is None:
        raise GlobalServiceNotFoundError(payload.service_id)

    assignment = await CompanyServiceRepository(db).create_unique(
        company_id,
        payload.service_id,
        custom_price=payload.custom_price,
        is_available=payload.is_available,
    )
    if assignment is None:
        logger.info(
            "assignment.duplicate",
            company_id=str(company_id),
            service_id=str(payload.service_id),
        )
        set_wide_event_nested(
            "assignment",
            company_id=str(company_id),
            service_id=str(payload.service_id),
            outcome="duplicate",
        )
        raise ServiceAlreadyAssignedError(company_id, payload.service_id)

    logger.info(
        "assignment.created",
        assignment_id=str(assignment.id),
        company_id=str(company_id),
        service_id=str(payload.service_id),
        has_custom_price=payload.custom_price is not None,
    )
    set_wide_event_nested(
        "assignment",
        company_id=str(company_id),
        service_id=str(payload.service_id),
        outcome="created",
    )
    return AssignmentData.model_validate(assignment)


async def update_assignment(
    db: AsyncSession,
    company_id: UUID,
    assignment_id: UUID,
    payload: AssignmentUpdate,
) -> AssignmentData:
    """Set/clear the price override or toggle availability."""
    repo = CompanyServiceRepository(db)
    assignment = await repo.get(company_id, assignment_id)
    if assignment is None:
        raise AssignmentNotFoundError(assignment_id)

    changes = payload.changes()
    assignment = await repo.update(assignment, changes)

    logger.info(
        "assignment.updated",
        assignment_id=str(assignment_id),
        fields=sorted(changes.keys()),
    )
    return AssignmentData.model_validate(assignment)


async def unassign_service(
    db: AsyncSession, company_id: UUID, assignment_id: UUID
) -> None:
    """Unconditional delete by assignment id."""
    deleted = await CompanyServiceRepository(db).delete(company_id, assignment_id)
    logger.info(
        "assignment.deleted",
        assignment_id=str(assignment_id),
        company_id=str(company_id),
        found=deleted,
    )
