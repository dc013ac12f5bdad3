"""Repository for MaintenanceRecord data access."""

from datetime import UTC, datetime

from app.api.schemas.maintenance_record import MaintenanceRecordCreate, MaintenanceRecordUpdate
from app.core.errors import ValidationError
from app.db.models import Asset, MaintenanceRecord
from app.repos.base import CrudRepository


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


class MaintenanceRecordRepository(
    CrudRepository[MaintenanceRecord, MaintenanceRecordCreate, MaintenanceRecordUpdate]
):
    model = MaintenanceRecord
    resource = "maintenance-records"
    filterable = frozenset({"asset_id"})
    references = {"asset_id": Asset}

    def check_invariants(self, entity: MaintenanceRecord) -> None:
        """Reject a completion time earlier than the start time."""
        if entity.completed_at is None:
            return
        started_at = _as_utc(entity.started_at or datetime.now(UTC))
        if _as_utc(entity.completed_at) < started_at:
            raise ValidationError.for_fields(
                {"completedAt": ["Completed at must not be earlier than started at."]}
            )
