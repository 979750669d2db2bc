"""
Wiring of the location catalog from settings
"""
from typing import Optional

from sqlalchemy.orm import Session

from catalog_backend.catalog.database_locations_catalog import \
    DatabaseLocationsCatalog
from catalog_backend.catalog.static_locations_catalog import (
    CompositeLocationsCatalog, read_static_locations)
from catalog_backend.catalog.types import LocationsCatalog
from catalog_backend.core.config import Settings, get_settings
from catalog_backend.core.database import get_session_local, init_db
from catalog_backend.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


def build_locations_catalog(
    settings: Optional[Settings] = None,
    db: Optional[Session] = None,
) -> CompositeLocationsCatalog:
    """
    Build the catalog used by the rest of the service

    Args:
        settings: Settings to read static locations from (cached settings by default)
        db: Session for the database catalog. The caller owns it and closes it
            (e.g. a session taken from ``get_db()``). When omitted, a session is
            opened here and stays open for the lifetime of the catalog

    Returns:
        Static locations layered over the database catalog, or static locations
        alone when ``catalog_database_enabled`` is off
    """
    settings = settings or get_settings()
    static_locations = read_static_locations(settings)

    inner_catalog: Optional[LocationsCatalog] = None
    if settings.catalog_database_enabled:
        if db is None:
            init_db()
            db = get_session_local()()
        inner_catalog = DatabaseLocationsCatalog(db)

    logger.info(
        f"Built locations catalog with {len(static_locations)} static locations",
        extra={"database_enabled": settings.catalog_database_enabled},
    )
    return CompositeLocationsCatalog(static_locations, inner_catalog)
