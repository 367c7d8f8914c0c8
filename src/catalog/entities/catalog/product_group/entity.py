"""Entity: ProductGroup."""

from typing import Any, ClassVar, Protocol

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Identified(Protocol):
    id: str


class ProductGroup(Entity):
    """A named collection of products.

    Members are tracked by product id rather than by object, so a group never
    holds a reference back to the products that hold it.
    """

    COLLECTION: ClassVar[str] = "product_groups"

    name: str = Field(description="Group name")
    description: str | None = Field(default=None, description="Group description")
    product_ids: set[str] = Field(
        default_factory=set, description="Ids of the products in this group"
    )

    @classmethod
    def get_fields(cls) -> list[str]:
        return [name for name in super().get_fields() if name != "product_ids"]

    @classmethod
    def get_field_validators(cls) -> dict[str, list[str]]:
        return {
            "id": ["NonEmpty"],
            "name": ["NonEmpty"],
        }

    def add_product(self, product: Identified) -> None:
        self.product_ids.add(product.id)

    def remove_product(self, product: Identified) -> None:
        self.product_ids.discard(product.id)

    def has_product(self, product: Identified) -> bool:
        return product.id in self.product_ids

    def __eq__(self, other: Any) -> bool:
        """Compare groups by business attributes, ignoring timestamps and members."""
        if not isinstance(other, ProductGroup):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.name,
            self.description,
        ))
