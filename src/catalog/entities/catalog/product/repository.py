"""Product repository for data access operations."""

from collections.abc import Sequence

from loguru import logger
from sqlmodel import Session, col, select

from src.catalog.entities.catalog.product_group.repository import ProductGroupRepository
from src.catalog.entities.catalog.product_group.table import ProductGroupLinkTable
from src.catalog.runtime.context import get_config

from .entity import Product
from .table import ProductTable

_COLUMNS = (
    "id",
    "name",
    "description",
    "price",
    "weight",
    "presentation",
    "enabled",
    "featured",
    "created_at",
    "updated_at",
)


class ProductRepository:
    """Data-access layer for products.

    Products returned by this repository carry the group repository as their
    group registry, so ``Product.update`` can resolve groups given by id.
    The repository flushes but never commits; the caller owns the transaction.
    """

    def __init__(
        self, session: Session, group_repository: ProductGroupRepository | None = None
    ) -> None:
        self._session = session
        self._groups = group_repository or ProductGroupRepository(session)

    @property
    def groups(self) -> ProductGroupRepository:
        return self._groups

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entities([row])[0]

    def get_entity(self, product_id: str) -> Product | None:
        return self.get(product_id)

    def create(self, product: Product) -> Product:
        if self._session.get(ProductTable, product.id) is not None:
            raise ValueError(f"Product {product.id} already exists")
        self._session.add(self._to_row(product))
        self._write_links(product)
        self._session.flush()
        product.attach_group_registry(self._groups)
        logger.info(f"Created product {product.id}")
        return product

    def save(self, product: Product) -> Product:
        """Insert or update ``product`` together with its group memberships."""
        row = self._session.get(ProductTable, product.id)
        if row is None:
            return self.create(product)
        for name in _COLUMNS:
            if name in ("id", "created_at"):
                continue
            setattr(row, name, getattr(product, name))
        self._session.add(row)
        self._write_links(product)
        self._session.flush()
        product.attach_group_registry(self._groups)
        logger.debug(f"Saved product {product.id}")
        return product

    def delete(self, product_id: str) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        for link in self._links_for([product_id]):
            self._session.delete(link)
        self._session.delete(row)
        self._session.flush()
        logger.info(f"Deleted product {product_id}")
        return True

    def list_all(self, limit: int | None = None) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.name)
        return self._to_entities(self._session.exec(statement.limit(self._limit(limit))).all())

    def list_enabled(self, limit: int | None = None) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(ProductTable.enabled == True)  # noqa: E712
            .order_by(ProductTable.name)
        )
        return self._to_entities(self._session.exec(statement.limit(self._limit(limit))).all())

    def list_featured(self, limit: int | None = None) -> list[Product]:
        """Featured products that are also enabled."""
        statement = (
            select(ProductTable)
            .where(ProductTable.featured == True, ProductTable.enabled == True)  # noqa: E712
            .order_by(ProductTable.name)
        )
        return self._to_entities(self._session.exec(statement.limit(self._limit(limit))).all())

    def list_by_group(self, group_id: str, limit: int | None = None) -> list[Product]:
        statement = (
            select(ProductTable)
            .join(ProductGroupLinkTable, col(ProductGroupLinkTable.product_id) == col(ProductTable.id))
            .where(ProductGroupLinkTable.group_id == group_id)
            .order_by(ProductTable.name)
        )
        return self._to_entities(self._session.exec(statement.limit(self._limit(limit))).all())

    def _limit(self, limit: int | None) -> int:
        return limit if limit is not None else get_config().catalog.default_page_size

    def _links_for(self, product_ids: Sequence[str]) -> list[ProductGroupLinkTable]:
        if not product_ids:
            return []
        return list(
            self._session.exec(
                select(ProductGroupLinkTable).where(
                    col(ProductGroupLinkTable.product_id).in_(product_ids)
                )
            ).all()
        )

    def _write_links(self, product: Product) -> None:
        """Replace the stored memberships of ``product`` with its current groups."""
        for link in self._links_for([product.id]):
            self._session.delete(link)
        self._session.flush()

        create_missing = get_config().catalog.create_missing_groups
        for group in product.groups.values():
            if not self._groups.exists(group.id):
                if not create_missing:
                    raise ValueError(f"Product group {group.id} does not exist")
                logger.info(f"Persisting stub product group {group.id} for product {product.id}")
                self._groups.create(group)
            self._session.add(ProductGroupLinkTable(product_id=product.id, group_id=group.id))

    def _to_entities(self, rows: Sequence[ProductTable]) -> list[Product]:
        links = self._links_for([row.id for row in rows])
        groups = self._groups.get_many(sorted({link.group_id for link in links}))

        group_ids: dict[str, list[str]] = {}
        for link in links:
            group_ids.setdefault(link.product_id, []).append(link.group_id)

        products = []
        for row in rows:
            product = Product.model_validate(row, from_attributes=True)
            product.groups = {
                group_id: groups[group_id]
                for group_id in group_ids.get(row.id, [])
                if group_id in groups
            }
            product.attach_group_registry(self._groups)
            products.append(product)
        return products

    @staticmethod
    def _to_row(product: Product) -> ProductTable:
        return ProductTable(**{name: getattr(product, name) for name in _COLUMNS})
