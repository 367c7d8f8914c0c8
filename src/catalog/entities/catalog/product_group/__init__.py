"""Entity package: ProductGroup."""

from .entity import ProductGroup
from .repository import ProductGroupRepository
from .table import ProductGroupLinkTable, ProductGroupTable

__all__ = [
    "ProductGroup",
    "ProductGroupRepository",
    "ProductGroupTable",
    "ProductGroupLinkTable",
]
