"""Maintenance request business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import as_utc, utc_now
from ...core.validators import ValidationPipeline
from ..property_management.crud import property_crud
from ..tenant_management.crud import tenant_crud
from .crud import maintenance_crud
from .models import MaintenancePriority, MaintenanceRequest, MaintenanceStatus
from .schemas import MaintenanceCreate, MaintenanceUpdate

logger = get_logger(__name__)

VALID_PRIORITIES = [priority.value for priority in MaintenancePriority]
NOT_FOUND = "Maintenance request not found or access denied"


async def list_requests(db: AsyncSession, account_id: int) -> list[MaintenanceRequest]:
    return await maintenance_crud.get_multi(db, account_id)


async def create_request(
    db: AsyncSession, account_id: int, data: MaintenanceCreate
) -> MaintenanceRequest:
    priority = (data.priority or MaintenancePriority.MEDIUM.value).strip().lower()

    await (
        ValidationPipeline()
        .require(lambda: bool(data.title), ValidationError("Title is required"))
        .require(
            lambda: priority in VALID_PRIORITIES,
            ValidationError(
                f"Priority must be one of: {', '.join(VALID_PRIORITIES)}",
                field="priority",
            ),
        )
        .require_owned(
            db, property_crud, account_id, data.property_id,
            "Property not found or access denied",
        )
        .require_owned(
            db, tenant_crud, account_id, data.tenant_id,
            "Tenant not found or access denied",
        )
        .run()
    )

    request = await maintenance_crud.create(
        db,
        {
            "property_id": data.property_id,
            "tenant_id": data.tenant_id,
            "title": data.title,
            "description": data.description,
            "priority": priority,
            "status": MaintenanceStatus.PENDING.value,
        },
        account_id,
    )
    await db.commit()
    logger.info("Maintenance request created", extra={"request_id": request.id})
    return await maintenance_crud.get(db, account_id, request.id, populate_existing=True)


async def update_request(
    db: AsyncSession,
    account_id: int,
    request_id: int,
    data: MaintenanceUpdate,
) -> MaintenanceRequest:
    """Set status and completion time; any status string is accepted."""
    request = await maintenance_crud.get(db, account_id, request_id)
    if not request:
        raise NotFoundError(NOT_FOUND)
    if not data.status:
        raise ValidationError("Status is required", field="status")

    completed_at = as_utc(data.completed_at)
    if completed_at is None and data.status == MaintenanceStatus.COMPLETED.value:
        completed_at = utc_now()

    await maintenance_crud.update(
        db, request, {"status": data.status, "completed_at": completed_at}
    )
    await db.commit()
    return await maintenance_crud.get(db, account_id, request_id, populate_existing=True)


async def delete_request(db: AsyncSession, account_id: int, request_id: int) -> None:
    """Delete a request; only completed requests may be removed."""
    request = await maintenance_crud.get(db, account_id, request_id)
    if not request:
        raise NotFoundError(NOT_FOUND)
    if not request.is_completed:
        raise BusinessLogicError("Only completed maintenance requests can be deleted")

    await maintenance_crud.delete(db, request)
    await db.commit()
    logger.info("Maintenance request deleted", extra={"request_id": request_id})
