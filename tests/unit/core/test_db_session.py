"""Unit tests for the database session and schema services."""

from collections.abc import Generator

import pytest
from sqlalchemy import StaticPool, inspect

from src.catalog.core.services.database.db_manage import DbManageService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.catalog.product_group import ProductGroupTable
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import with_context
from src.catalog.runtime.init_db import init_db


@pytest.fixture
def db_service(test_config: ConfigData) -> Generator[DbSessionService]:
    service = DbSessionService(test_config)
    DbManageService(service.engine).create_all()
    try:
        yield service
    finally:
        service.dispose()


class TestDbSessionService:
    def test_memory_database_uses_static_pool(self, db_service: DbSessionService):
        assert isinstance(db_service.engine.pool, StaticPool)

    def test_tables_created(self, db_service: DbSessionService):
        tables = set(inspect(db_service.engine).get_table_names())

        assert {"products", "product_groups", "product_group_links"} <= tables

    def test_session_scope_commits(self, db_service: DbSessionService):
        with db_service.session_scope() as session:
            session.add(ProductGroupTable(id="grp-1", name="Breakfast"))

        with db_service.session_scope() as session:
            assert session.get(ProductGroupTable, "grp-1") is not None

    def test_session_scope_rolls_back_on_error(self, db_service: DbSessionService):
        with pytest.raises(RuntimeError):
            with db_service.session_scope() as session:
                session.add(ProductGroupTable(id="grp-1", name="Breakfast"))
                session.flush()
                raise RuntimeError("boom")

        with db_service.session_scope() as session:
            assert session.get(ProductGroupTable, "grp-1") is None

    def test_health_check(self, db_service: DbSessionService):
        assert db_service.health_check() is True

    def test_uses_current_config_by_default(self, app_context: ConfigData):
        service = DbSessionService()
        try:
            assert service.engine.url.database == ":memory:"
        finally:
            service.dispose()


class TestDbManageService:
    def test_drop_all(self, db_service: DbSessionService):
        DbManageService(db_service.engine).drop_all()

        assert inspect(db_service.engine).get_table_names() == []

    def test_init_db_creates_tables_for_configured_database(self, tmp_path, app_context: ConfigData):
        override = ConfigData()
        override.database.url = f"sqlite:///{tmp_path / 'catalog.db'}"

        with with_context(override):
            init_db()

        service = DbSessionService(override)
        try:
            assert "products" in inspect(service.engine).get_table_names()
        finally:
            service.dispose()
