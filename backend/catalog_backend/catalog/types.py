"""
Data model and capability contract shared by all location catalogs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog_backend.models.location import LocationUpdateStatus


class LocationSpec(BaseModel):
    """Identifies a source of entity data. Compared by exact (type, target) equality."""
    type: str = Field(..., description="Location type, e.g. 'url'")
    target: str = Field(..., description="Where the entity data lives")

    def matches(self, other: "LocationSpec") -> bool:
        return self.type == other.type and self.target == other.target


class Location(LocationSpec):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Catalog-assigned location id")


class LocationStatus(BaseModel):
    status: Optional[LocationUpdateStatus] = None
    message: Optional[str] = None
    timestamp: Optional[str] = Field(default=None, description="ISO-8601 time of the last update")


class LocationResponse(BaseModel):
    # Status is updated in place; identity never changes
    model_config = ConfigDict(frozen=True)

    data: Location
    current_status: LocationStatus = Field(default_factory=LocationStatus)


class LocationUpdateLogEvent(BaseModel):
    id: int
    status: LocationUpdateStatus
    location_id: str
    message: Optional[str] = None
    entity_name: Optional[str] = None
    created_at: str


class LocationsCatalog(ABC):
    """Read/write access to a set of locations and their update history."""

    @abstractmethod
    async def add_location(self, location: LocationSpec) -> Location:
        ...

    @abstractmethod
    async def remove_location(self, id: str) -> None:
        ...

    @abstractmethod
    async def locations(self) -> List[LocationResponse]:
        ...

    @abstractmethod
    async def location(self, id: str) -> Optional[LocationResponse]:
        """Return the location, raise NotFoundError, or return None when unknown."""

    @abstractmethod
    async def location_history(self, id: str) -> List[LocationUpdateLogEvent]:
        ...

    @abstractmethod
    async def log_update_success(self, location_id: str, entity_name: Optional[str] = None) -> None:
        ...

    @abstractmethod
    async def log_update_failure(
        self,
        location_id: str,
        error: Optional[BaseException] = None,
        entity_name: Optional[str] = None,
    ) -> None:
        ...
