"""Catalog entities.

Entities are organized by business concept. Each entity has its own package
containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer

Shared pieces (the ``Entity`` base, field validators and errors) live in
``entities.core``.
"""

from .catalog.product import Product, ProductRepository, ProductTable
from .catalog.product_group import (
    ProductGroup,
    ProductGroupLinkTable,
    ProductGroupRepository,
    ProductGroupTable,
)
from .core._base import Entity, EntityTable
from .core.errors import (
    EntityValidationError,
    InvalidProductGroupError,
    UnknownValidatorError,
)

__all__ = [
    "Entity",
    "EntityTable",
    "EntityValidationError",
    "InvalidProductGroupError",
    "UnknownValidatorError",
    "Product",
    "ProductTable",
    "ProductRepository",
    "ProductGroup",
    "ProductGroupTable",
    "ProductGroupLinkTable",
    "ProductGroupRepository",
]
