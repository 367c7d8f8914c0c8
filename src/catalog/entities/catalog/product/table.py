"""Product database table model."""

from src.catalog.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    Group membership lives in ``ProductGroupLinkTable``.
    """

    __tablename__ = "products"  # type: ignore[assignment]

    name: str
    description: str
    price: float
    weight: float
    presentation: str
    enabled: bool = True
    featured: bool = False
