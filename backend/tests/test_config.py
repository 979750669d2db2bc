"""
Tests for settings and static location configuration
"""
import json

import pytest
from pydantic import ValidationError

from catalog_backend.catalog.static_locations_catalog import \
    read_static_locations
from catalog_backend.catalog.types import LocationSpec
from catalog_backend.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.catalog_locations == []
    assert settings.catalog_database_enabled is True
    assert settings.is_sqlite
    assert read_static_locations(settings) == []


def test_catalog_locations_from_environment(monkeypatch):
    blocks = [
        {"type": "url", "target": "https://example.com/a.yaml"},
        {"type": "file", "target": "/etc/catalog/b.yaml"},
    ]
    monkeypatch.setenv("CATALOG_LOCATIONS", json.dumps(blocks))

    settings = Settings(_env_file=None)

    assert read_static_locations(settings) == [
        LocationSpec(type="url", target="https://example.com/a.yaml"),
        LocationSpec(type="file", target="/etc/catalog/b.yaml"),
    ]


def test_catalog_locations_from_json_string():
    settings = Settings(_env_file=None, catalog_locations='[{"type": "url", "target": "a"}]')

    assert [(s.type, s.target) for s in read_static_locations(settings)] == [("url", "a")]


@pytest.mark.parametrize(
    "block",
    [
        {"type": "url"},
        {"target": "a"},
        {"type": "", "target": "a"},
        {"type": "url", "target": ""},
    ],
)
def test_incomplete_location_blocks_are_rejected(block):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, catalog_locations=[block])


def test_database_enabled_flag_from_environment(monkeypatch):
    monkeypatch.setenv("CATALOG_DATABASE_ENABLED", "false")
    monkeypatch.setenv("DATABASE_URL", "postgresql://catalog@localhost/catalog")

    settings = Settings(_env_file=None)

    assert settings.catalog_database_enabled is False
    assert not settings.is_sqlite
