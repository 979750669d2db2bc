"""
Configuration management using Pydantic Settings
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from project root
# config.py is at: backend/catalog_backend/core/config.py
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class StaticLocationConfig(BaseModel):
    """One statically declared location block"""
    type: str = Field(..., min_length=1, description="Location type, e.g. 'url' or 'file'")
    target: str = Field(..., min_length=1, description="Where the entity data lives")


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "location-catalog"
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Logging
    log_sqlalchemy: bool = Field(default=False, description="Enable SQLAlchemy query logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"catalog_backend.catalog": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/catalog.log",
        description="Path to log file (relative to project root)"
    )
    log_file_rotation: str = Field(
        default="midnight",
        description="Log file rotation: 'midnight' or 'W0'..'W6' (weekly)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of rotated log files to keep"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Enable logging of credentials embedded in targets - NOT RECOMMENDED"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./catalog.db",
        description="SQLAlchemy database URL for the location store"
    )
    database_pool_size: int = Field(default=5, ge=1, description="Database pool size")
    database_max_overflow: int = Field(default=10, ge=0, description="Database max overflow")

    # Catalog
    catalog_database_enabled: bool = Field(
        default=True,
        description="Compose static locations with the database-backed catalog"
    )
    catalog_locations: List[StaticLocationConfig] = Field(
        default_factory=list,
        description="Statically configured locations (JSON list of {type, target})"
    )

    @field_validator("catalog_locations", mode="before")
    @classmethod
    def parse_catalog_locations(cls, v):
        """Parse locations from a JSON string"""
        if isinstance(v, str):
            return json.loads(v) if v.strip() else []
        return v or []

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
