"""Product group repository for data access operations."""

from loguru import logger
from sqlmodel import Session, col, select

from .entity import ProductGroup
from .table import ProductGroupLinkTable, ProductGroupTable


class ProductGroupRepository:
    """Data-access layer for product groups.

    Also serves as the group registry products use to resolve group ids.
    Member ids are read from the link table, which products own; saving a
    group never rewrites its memberships.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, group_id: str) -> ProductGroup | None:
        row = self._session.get(ProductGroupTable, group_id)
        if row is None:
            return None
        return self._to_entity(row, self._member_ids([group_id]).get(group_id, set()))

    def get_entity(self, group_id: str) -> ProductGroup | None:
        return self.get(group_id)

    def get_many(self, group_ids: list[str]) -> dict[str, ProductGroup]:
        """Load several groups at once, keyed by id. Unknown ids are left out."""
        if not group_ids:
            return {}
        rows = self._session.exec(
            select(ProductGroupTable).where(col(ProductGroupTable.id).in_(group_ids))
        ).all()
        members = self._member_ids([row.id for row in rows])
        return {row.id: self._to_entity(row, members.get(row.id, set())) for row in rows}

    def exists(self, group_id: str) -> bool:
        return self._session.get(ProductGroupTable, group_id) is not None

    def create(self, group: ProductGroup) -> ProductGroup:
        if self.exists(group.id):
            raise ValueError(f"Product group {group.id} already exists")
        self._session.add(self._to_row(group))
        self._session.flush()
        logger.info(f"Created product group {group.id}")
        return group

    def save(self, group: ProductGroup) -> ProductGroup:
        """Insert or update ``group``."""
        row = self._session.get(ProductGroupTable, group.id)
        if row is None:
            return self.create(group)
        row.name = group.name
        row.description = group.description
        row.updated_at = group.updated_at
        self._session.add(row)
        self._session.flush()
        return group

    def delete(self, group_id: str) -> bool:
        row = self._session.get(ProductGroupTable, group_id)
        if row is None:
            return False
        links = self._session.exec(
            select(ProductGroupLinkTable).where(ProductGroupLinkTable.group_id == group_id)
        ).all()
        for link in links:
            self._session.delete(link)
        self._session.delete(row)
        self._session.flush()
        logger.info(f"Deleted product group {group_id} and {len(links)} memberships")
        return True

    def list_all(self) -> list[ProductGroup]:
        rows = self._session.exec(
            select(ProductGroupTable).order_by(ProductGroupTable.name)
        ).all()
        members = self._member_ids([row.id for row in rows])
        return [self._to_entity(row, members.get(row.id, set())) for row in rows]

    def _member_ids(self, group_ids: list[str]) -> dict[str, set[str]]:
        members: dict[str, set[str]] = {}
        if not group_ids:
            return members
        links = self._session.exec(
            select(ProductGroupLinkTable).where(col(ProductGroupLinkTable.group_id).in_(group_ids))
        ).all()
        for link in links:
            members.setdefault(link.group_id, set()).add(link.product_id)
        return members

    @staticmethod
    def _to_entity(row: ProductGroupTable, product_ids: set[str]) -> ProductGroup:
        group = ProductGroup.model_validate(row, from_attributes=True)
        group.product_ids = set(product_ids)
        return group

    @staticmethod
    def _to_row(group: ProductGroup) -> ProductGroupTable:
        return ProductGroupTable(
            id=group.id,
            name=group.name,
            description=group.description,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
