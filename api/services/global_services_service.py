"""Global service catalog business logic."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from repositories.global_service_repository import GlobalServiceRepository
from schemas import GlobalServiceCreate, GlobalServiceData, GlobalServiceUpdate

logger = get_logger(__name__)


class GlobalServiceNotFoundError(Exception):
    def __init__(self, service_id: UUID) -> None:
        self.service_id = service_id
        super().__init__("Service not found")


async def list_global_services(db: AsyncSession) -> list[GlobalServiceData]:
    services = await GlobalServiceRepository(db).list_all()
    return [GlobalServiceData.model_validate(s) for s in services]


async def create_global_service(
    db: AsyncSession, payload: GlobalServiceCreate
) -> GlobalServiceData:
    service = await GlobalServiceRepository(db).create(**payload.model_dump())

    logger.info(
        "global_service.created",
        service_id=str(service.id),
        price_unit=service.price_unit.value,
        category=service.category,
    )
    set_wide_event_fields(service_id=str(service.id))
    return GlobalServiceData.model_validate(service)


async def update_global_service(
    db: AsyncSession, service_id: UUID, payload: GlobalServiceUpdate
) -> GlobalServiceData:
    """Writes only the fields present in the body; falsy values included."""
    repo = GlobalServiceRepository(db)
    service = await repo.get_by_id(service_id)
    if service is None:
        raise GlobalServiceNotFoundError(service_id)

    changes = payload.changes()
    service = await repo.update(service, changes)

    logger.info(
        "global_service.updated",
        service_id=str(service_id),
        fields=sorted(changes.keys()),
    )
    set_wide_event_fields(service_id=str(service_id))
    return GlobalServiceData.model_validate(service)


async def delete_global_service(db: AsyncSession, service_id: UUID) -> None:
    """Unconditional: succeeds whether or not the entry existed.

    Assignments referencing the entry are removed by the FK cascade, so
    directory listings never see a dangling reference.
    """
    deleted = await GlobalServiceRepository(db).delete(service_id)

    logger.info("global_service.deleted", service_id=str(service_id), found=deleted)
    set_wide_event_fields(service_id=str(service_id))
