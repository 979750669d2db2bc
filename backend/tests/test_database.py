"""
Tests for database session helpers
"""
from unittest.mock import Mock

from catalog_backend.core import database


def test_get_db_closes_session(monkeypatch):
    session = Mock()
    monkeypatch.setattr(database, "_SessionLocal", Mock(return_value=session))

    gen = database.get_db()
    assert next(gen) is session
    session.close.assert_not_called()

    gen.close()

    session.close.assert_called_once()


def test_init_db_creates_catalog_tables(engine):
    from sqlalchemy import inspect

    database.Base.metadata.drop_all(bind=engine)
    database.init_db(engine)

    tables = set(inspect(engine).get_table_names())
    assert {"locations", "location_update_log"} <= tables
