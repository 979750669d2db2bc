"""
Location catalog persisted through SQLAlchemy
"""
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_backend.catalog.types import (Location, LocationResponse,
                                           LocationsCatalog, LocationSpec,
                                           LocationStatus,
                                           LocationUpdateLogEvent)
from catalog_backend.core.errors import ConflictError, NotFoundError
from catalog_backend.core.logging_config import LoggingConfig
from catalog_backend.models.location import (LocationRow,
                                             LocationUpdateLogRow,
                                             LocationUpdateStatus)
from catalog_backend.utils.datetime_utils import to_iso

logger = LoggingConfig.get_logger(__name__)


class DatabaseLocationsCatalog(LocationsCatalog):
    """Locations and their update log stored in the catalog database"""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, location_id: str) -> LocationRow:
        row = self.db.query(LocationRow).filter(LocationRow.id == location_id).first()
        if row is None:
            raise NotFoundError(f"Found no location with ID {location_id}")
        return row

    def _find_existing(self, location: LocationSpec) -> Optional[LocationRow]:
        return self.db.query(LocationRow).filter(
            LocationRow.type == location.type,
            LocationRow.target == location.target,
        ).first()

    def _latest_log(self, location_id: str) -> Optional[LocationUpdateLogRow]:
        return (
            self.db.query(LocationUpdateLogRow)
            .filter(LocationUpdateLogRow.location_id == location_id)
            .order_by(desc(LocationUpdateLogRow.created_at), desc(LocationUpdateLogRow.id))
            .first()
        )

    def _to_response(self, row: LocationRow) -> LocationResponse:
        latest = self._latest_log(row.id)
        if latest is None:
            current_status = LocationStatus()
        else:
            current_status = LocationStatus(
                status=LocationUpdateStatus(latest.status),
                message=latest.message,
                timestamp=to_iso(latest.created_at),
            )
        return LocationResponse(
            data=Location(id=row.id, type=row.type, target=row.target),
            current_status=current_status,
        )

    def _commit(self, action: str, location_id: Optional[str] = None) -> None:
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error during {action}: {e}", exc_info=True, extra={"location_id": location_id})
            raise

    async def add_location(self, location: LocationSpec) -> Location:
        """
        Register a new location

        Raises:
            ConflictError: a location with the same type and target already exists
        """
        conflict_message = f"Location {location.type}:{location.target} already exists"
        if self._find_existing(location) is not None:
            raise ConflictError(conflict_message)

        row = LocationRow(type=location.type, target=location.target)
        self.db.add(row)
        try:
            self._commit("add_location")
        except IntegrityError as e:
            # Another writer inserted the same location after the check above
            raise ConflictError(conflict_message) from e
        self.db.refresh(row)

        logger.info(
            f"Added location {row.id}",
            extra={"location_id": row.id, "location_type": row.type, "target": row.target},
        )
        return Location(id=row.id, type=row.type, target=row.target)

    async def remove_location(self, id: str) -> None:
        row = self._get_row(id)
        self.db.delete(row)
        self._commit("remove_location", id)
        logger.info(f"Removed location {id}", extra={"location_id": id})

    async def locations(self) -> List[LocationResponse]:
        rows = self.db.query(LocationRow).order_by(LocationRow.created_at, LocationRow.id).all()
        return [self._to_response(row) for row in rows]

    async def location(self, id: str) -> LocationResponse:
        return self._to_response(self._get_row(id))

    async def location_history(self, id: str) -> List[LocationUpdateLogEvent]:
        """Update log for a location, newest first"""
        rows = (
            self.db.query(LocationUpdateLogRow)
            .filter(LocationUpdateLogRow.location_id == id)
            .order_by(desc(LocationUpdateLogRow.created_at), desc(LocationUpdateLogRow.id))
            .all()
        )
        return [
            LocationUpdateLogEvent(
                id=row.id,
                status=LocationUpdateStatus(row.status),
                location_id=row.location_id,
                message=row.message,
                entity_name=row.entity_name,
                created_at=to_iso(row.created_at),
            )
            for row in rows
        ]

    def _append_log(
        self,
        location_id: str,
        status: LocationUpdateStatus,
        message: Optional[str],
        entity_name: Optional[str],
    ) -> None:
        self._get_row(location_id)
        self.db.add(
            LocationUpdateLogRow(
                location_id=location_id,
                status=status.value,
                message=message,
                entity_name=entity_name,
            )
        )
        self._commit(f"log_update_{status.value}", location_id)

    async def log_update_success(self, location_id: str, entity_name: Optional[str] = None) -> None:
        self._append_log(location_id, LocationUpdateStatus.SUCCESS, None, entity_name)

    async def log_update_failure(
        self,
        location_id: str,
        error: Optional[BaseException] = None,
        entity_name: Optional[str] = None,
    ) -> None:
        message = str(error) if error is not None else None
        self._append_log(location_id, LocationUpdateStatus.FAIL, message, entity_name)
        logger.warning(
            f"Update of location {location_id} failed: {message}",
            extra={"location_id": location_id, "entity_name": entity_name},
        )
