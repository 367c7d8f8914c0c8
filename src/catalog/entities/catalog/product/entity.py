"""Entity: Product."""

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Protocol

from loguru import logger
from pydantic import Field, PrivateAttr, field_validator

from src.catalog.entities.catalog.product_group.entity import ProductGroup
from src.catalog.entities.core._base import Entity, FieldErrors
from src.catalog.entities.core.errors import InvalidProductGroupError

IMAGE_SIZES = (32, 96, 140)

# Shown instead of a price per kg when price or weight is missing
UNKNOWN_PRICE_PER_KG = "—"


class ProductGroupRegistry(Protocol):
    def get_entity(self, group_id: str) -> ProductGroup | None: ...


class Product(Entity):
    """Product entity representing a sellable catalog item.

    Groups are held keyed by group id. The price per kg is computed on demand
    and cached until the next call to ``update``.
    """

    COLLECTION: ClassVar[str] = "products"

    name: str = Field(description="Product name")
    description: str = Field(description="Product description")
    price: float = Field(description="Unit price")
    weight: float = Field(description="Weight in kg")
    presentation: str = Field(description="Packaging descriptor, e.g. '500 g bag'")
    enabled: bool = Field(default=True, description="Whether the product can be displayed and sold")
    featured: bool = Field(default=False, description="Whether the product is promoted")
    groups: dict[str, ProductGroup] = Field(
        default_factory=dict, description="Groups this product belongs to, keyed by group id"
    )

    _price_per_kg: float | str | None = PrivateAttr(default=None)
    _group_registry: ProductGroupRegistry | None = PrivateAttr(default=None)

    def __init__(self, /, **data: Any) -> None:
        # Raw group data resolves the same way as in update(), minus a registry
        if data.get("groups"):
            data["groups"] = self._resolve_groups(data["groups"], None)
        super().__init__(**data)

    @field_validator("groups", mode="before")
    @classmethod
    def _key_groups_by_id(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            items = value.values()
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = value
        else:
            return value

        keyed = {}
        for group in items:
            if not isinstance(group, ProductGroup):
                raise InvalidProductGroupError("The product group is not valid.")
            keyed[group.id] = group
        return keyed

    @classmethod
    def get_fields(cls) -> list[str]:
        # groups are resolved by update() itself
        return [name for name in super().get_fields() if name != "groups"]

    @classmethod
    def get_field_validators(cls) -> dict[str, list[str]]:
        return {
            "id": ["NonEmpty"],
            "name": ["NonEmpty"],
            "description": ["NonEmpty"],
            "price": ["NonEmpty", "Number", "NonNegative"],
            "weight": ["NonEmpty", "Number", "NonNegative"],
            "presentation": ["NonEmpty"],
        }

    def attach_group_registry(self, registry: ProductGroupRegistry | None) -> None:
        """Set the registry ``update`` uses to resolve groups given as raw data."""
        self._group_registry = registry

    def update(
        self,
        data: Mapping[str, Any],
        is_atomic: bool = True,
        *,
        group_registry: ProductGroupRegistry | None = None,
    ) -> FieldErrors:
        """Update fields from ``data`` and, when present, replace the groups.

        Each entry of ``data["groups"]`` is either a ``ProductGroup`` or a
        mapping with ``id`` and ``name``. Mappings are looked up in the group
        registry; unknown ids become unsaved stub groups. The cached price per
        kg is always cleared.
        """
        new_groups = None
        if data.get("groups"):
            new_groups = self._resolve_groups(
                data["groups"], group_registry or self._group_registry
            )

        errors = super().update(data, is_atomic)

        if new_groups is not None:
            self.groups = new_groups

        self._price_per_kg = None
        return errors

    @staticmethod
    def _resolve_groups(
        groups: Iterable[Any] | Mapping[Any, Any], registry: ProductGroupRegistry | None
    ) -> dict[str, ProductGroup]:
        items = groups.values() if isinstance(groups, Mapping) else groups

        resolved: dict[str, ProductGroup] = {}
        for group in items:
            if not isinstance(group, ProductGroup):
                if not isinstance(group, Mapping) or not group.get("id"):
                    raise InvalidProductGroupError("The product group is not valid.")
                found = registry.get_entity(group["id"]) if registry is not None else None
                if found is None:
                    logger.debug(f"Product group {group['id']} not found; using a stub")
                    found = ProductGroup(
                        id=group["id"],
                        name=group.get("name") or group["id"],
                        description=group.get("description"),
                    )
                group = found
            resolved[group.id] = group
        return resolved

    def add_to_group(self, group: ProductGroup) -> None:
        """Make this product part of ``group``."""
        if not isinstance(group, ProductGroup):
            raise InvalidProductGroupError("The product group is not valid.")
        if group.id in self.groups:
            return
        self.groups[group.id] = group
        group.add_product(self)

    def remove_from_group(self, group: ProductGroup) -> None:
        """Remove this product from ``group``.

        The group's reference to this product is removed even when the product
        did not list the group.
        """
        if self.groups.pop(group.id, None) is None:
            logger.warning(
                f"Product {self.id} is not in group {group.id}; clearing the group's reference only"
            )
        group.remove_product(self)

    def set_groups(self, groups: Iterable[ProductGroup]) -> None:
        """Replace this product's groups.

        An empty ``groups`` leaves the current groups untouched.

        Raises:
            InvalidProductGroupError: if any element is not a ``ProductGroup``.
        """
        groups = list(groups)
        if not groups:
            return
        for group in groups:
            if not isinstance(group, ProductGroup):
                # One wrong group invalidates the whole assignment
                raise InvalidProductGroupError("The product group is not valid.")
        self.groups = {group.id: group for group in groups}

    def enable(self) -> None:
        """Allow the product to be displayed and used."""
        self.enabled = True

    def disable(self) -> None:
        """Prevent the product from being displayed or used."""
        self.enabled = False

    def promote(self) -> None:
        self.featured = True

    def demote(self) -> None:
        self.featured = False

    @staticmethod
    def get_image_sizes() -> list[int]:
        """Pixel sizes a product image can be rendered at."""
        return list(IMAGE_SIZES)

    def get_price_per_kg(self) -> float | str:
        """Price divided by weight, or ``UNKNOWN_PRICE_PER_KG`` if either is not positive."""
        if self._price_per_kg is None:
            if self.weight > 0 and self.price > 0:
                self._price_per_kg = self.price / self.weight
            else:
                self._price_per_kg = UNKNOWN_PRICE_PER_KG
        return self._price_per_kg

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.weight == other.weight
            and self.presentation == other.presentation
            and self.enabled == other.enabled
            and self.featured == other.featured
            and set(self.groups) == set(other.groups)
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.price,
            self.weight,
            self.presentation,
        ))
