"""
Catalog that overlays configured ("static") locations on top of an optional
inner catalog.

Static locations get synthetic ids ``static-0``, ``static-1``, ... in
configuration order. They always take precedence over the inner catalog and
can never be added, removed or re-registered through it. Their status lives
in memory only; history is kept by the inner catalog alone.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from catalog_backend.catalog.types import (Location, LocationResponse,
                                           LocationsCatalog, LocationSpec,
                                           LocationStatus,
                                           LocationUpdateLogEvent)
from catalog_backend.core.config import Settings, get_settings
from catalog_backend.core.errors import ConflictError, NotFoundError
from catalog_backend.core.logging_config import LoggingConfig
from catalog_backend.models.location import LocationUpdateStatus
from catalog_backend.utils.datetime_utils import utc_now_iso

logger = LoggingConfig.get_logger(__name__)

STATIC_ID_PREFIX = "static-"


def read_static_locations(settings: Optional[Settings] = None) -> List[LocationSpec]:
    """Return the configured static locations in declaration order."""
    settings = settings or get_settings()
    return [
        LocationSpec(type=block.type, target=block.target)
        for block in settings.catalog_locations
    ]


class CompositeLocationsCatalog(LocationsCatalog):
    def __init__(
        self,
        static_locations: Sequence[LocationSpec],
        inner_catalog: Optional[LocationsCatalog] = None,
    ):
        self._static_locations = tuple(
            LocationResponse(
                data=Location(id=f"{STATIC_ID_PREFIX}{index}", type=spec.type, target=spec.target),
                current_status=LocationStatus(),
            )
            for index, spec in enumerate(static_locations)
        )
        self._inner_catalog = inner_catalog
        logger.debug(
            f"Composite catalog created with {len(self._static_locations)} static locations",
            extra={"has_inner_catalog": inner_catalog is not None},
        )

    def _find_static(self, location_id: str) -> Optional[LocationResponse]:
        for entry in self._static_locations:
            if entry.data.id == location_id:
                return entry
        return None

    def _is_static(self, location: LocationSpec) -> bool:
        return any(entry.data.matches(location) for entry in self._static_locations)

    async def add_location(self, location: LocationSpec) -> Location:
        if self._is_static(location):
            logger.warning(
                "Rejected location that duplicates a static location",
                extra={"location_type": location.type, "target": location.target},
            )
            raise ConflictError(
                f"Conflicting static location for type={location.type} target={location.target}"
            )
        if self._inner_catalog is None:
            raise ConflictError("Only static location entries are supported by this catalog")
        return await self._inner_catalog.add_location(location)

    async def remove_location(self, id: str) -> None:
        if self._inner_catalog is None:
            return
        await self._inner_catalog.remove_location(id)

    async def locations(self) -> List[LocationResponse]:
        if self._inner_catalog is None:
            items: List[LocationResponse] = []
        else:
            items = await self._inner_catalog.locations()
        return [*self._static_locations, *items]

    async def location_history(self, id: str) -> List[LocationUpdateLogEvent]:
        if self._inner_catalog is None:
            return []
        return await self._inner_catalog.location_history(id)

    async def location(self, id: str) -> LocationResponse:
        static_location = self._find_static(id)
        if static_location is not None:
            return static_location

        inner_location = None
        if self._inner_catalog is not None:
            inner_location = await self._inner_catalog.location(id)
        if inner_location is None:
            raise NotFoundError(f"Found no location with ID {id}")
        return inner_location

    def _set_static_status(
        self,
        entry: LocationResponse,
        status: LocationUpdateStatus,
        message: Optional[str],
    ) -> None:
        entry.current_status.status = status
        entry.current_status.message = message
        entry.current_status.timestamp = utc_now_iso()
        logger.debug(
            f"Static location {entry.data.id} status set to {status.value}",
            extra={"location_id": entry.data.id},
        )

    async def log_update_success(self, location_id: str, entity_name: Optional[str] = None) -> None:
        static_location = self._find_static(location_id)
        if static_location is not None:
            self._set_static_status(static_location, LocationUpdateStatus.SUCCESS, None)
        elif self._inner_catalog is not None:
            await self._inner_catalog.log_update_success(location_id, entity_name)

    async def log_update_failure(
        self,
        location_id: str,
        error: Optional[BaseException] = None,
        entity_name: Optional[str] = None,
    ) -> None:
        static_location = self._find_static(location_id)
        if static_location is not None:
            message = str(error) if error is not None else None
            self._set_static_status(static_location, LocationUpdateStatus.FAIL, message)
        elif self._inner_catalog is not None:
            await self._inner_catalog.log_update_failure(location_id, error, entity_name)
