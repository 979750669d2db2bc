"""
SQLAlchemy models for persisted locations and their update log
"""
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey, Index,
                        Integer, String, Text, UniqueConstraint)
from sqlalchemy.orm import relationship

from catalog_backend.core.database import Base


class LocationUpdateStatus(str, Enum):
    """Outcome of the last attempt to read entities from a location"""
    SUCCESS = "success"
    FAIL = "fail"


class LocationRow(Base):
    """
    A location registered at runtime

    Ids are uuid4 strings so they never collide with the "static-<n>" ids
    handed out to configured locations.
    """
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String(255), nullable=False)
    target = Column(Text, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    update_log = relationship(
        "LocationUpdateLogRow",
        back_populates="location",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("type", "target", name="uq_locations_type_target"),
    )

    def __repr__(self):
        return f"<LocationRow(id='{self.id}', type='{self.type}', target='{self.target}')>"


class LocationUpdateLogRow(Base):
    """Append-only history of update attempts for a location"""
    __tablename__ = "location_update_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(
        String(20),
        CheckConstraint("status IN ('success', 'fail')"),
        nullable=False,
    )
    location_id = Column(
        String(36),
        ForeignKey("locations.id", ondelete="CASCADE"),
        nullable=False,
    )
    message = Column(Text, nullable=True)
    entity_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    location = relationship("LocationRow", back_populates="update_log")

    __table_args__ = (
        Index("idx_location_update_log_location_created", "location_id", "created_at"),
    )
