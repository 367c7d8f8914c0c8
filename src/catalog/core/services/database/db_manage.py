"""Schema management for the catalog database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.catalog.entities.catalog.product import ProductTable  # noqa: F401
from src.catalog.entities.catalog.product_group import (  # noqa: F401
    ProductGroupLinkTable,
    ProductGroupTable,
)


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all catalog tables."""
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Dropped all catalog tables.")
