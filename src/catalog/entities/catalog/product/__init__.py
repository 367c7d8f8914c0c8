"""Entity package: Product."""

from .entity import IMAGE_SIZES, UNKNOWN_PRICE_PER_KG, Product, ProductGroupRegistry
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "IMAGE_SIZES",
    "UNKNOWN_PRICE_PER_KG",
    "Product",
    "ProductGroupRegistry",
    "ProductRepository",
    "ProductTable",
]
