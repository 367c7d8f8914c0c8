"""Product group database table models."""

from sqlmodel import Field, SQLModel

from src.catalog.entities.core._base import EntityTable


class ProductGroupTable(EntityTable, table=True):
    """Database persistence model for product groups.

    Membership is not stored here; see ``ProductGroupLinkTable``.
    """

    __tablename__ = "product_groups"  # type: ignore[assignment]

    name: str
    description: str | None = None


class ProductGroupLinkTable(SQLModel, table=True):
    """Association between a product and a product group."""

    __tablename__ = "product_group_links"  # type: ignore[assignment]

    product_id: str = Field(
        foreign_key="products.id", primary_key=True, ondelete="CASCADE"
    )
    group_id: str = Field(
        foreign_key="product_groups.id", primary_key=True, ondelete="CASCADE"
    )
