"""
SQLAlchemy models
"""
from catalog_backend.core.database import Base  # noqa: F401
from catalog_backend.models.location import (LocationRow,  # noqa: F401
                                             LocationUpdateLogRow,
                                             LocationUpdateStatus)
