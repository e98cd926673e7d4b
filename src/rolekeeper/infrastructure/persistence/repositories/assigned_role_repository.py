"""Repository for the role assignment junction table."""

from collections.abc import Iterable
from typing import Any, Literal

from sqlalchemy import Insert, delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from rolekeeper.infrastructure.persistence.tables import RoleTables

ConflictPolicy = Literal["ignore", "raise"]


class AssignedRoleRepository:
    """Repository for role assignment rows.

    Rows are ``(role_id, entity_type, entity_id)`` triples. The triple is the
    primary key, so assigning the same role twice either does nothing
    (``ignore``) or raises ``IntegrityError`` (``raise``).
    """

    def __init__(
        self,
        session: Session,
        tables: RoleTables,
        conflict: ConflictPolicy = "ignore",
    ) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy session.
            tables: Role tables to query.
            conflict: Duplicate assignment policy.
        """
        self.session = session
        self.table = tables.assigned_roles
        self.conflict = conflict

    def insert_many(self, rows: list[dict[str, Any]]) -> None:
        """Insert assignment rows in one statement.

        Args:
            rows: Dicts with ``role_id``, ``entity_type`` and ``entity_id``.
        """
        if not rows:
            return
        self.session.execute(self._insert_statement(), rows)

    def delete_for(self, role_id: int, entity_type: str, entity_ids: Iterable[int]) -> int:
        """Delete the assignments of a role to the given authorities.

        Args:
            role_id: Role ID.
            entity_type: Authority type tag.
            entity_ids: Authority keys.

        Returns:
            Number of deleted rows.
        """
        entity_ids = list(entity_ids)
        if not entity_ids:
            return 0

        result = self.session.execute(
            delete(self.table).where(
                (self.table.c.role_id == role_id)
                & (self.table.c.entity_type == entity_type)
                & (self.table.c.entity_id.in_(entity_ids))
            )
        )
        return result.rowcount

    def get_entity_ids(self, role_id: int, entity_type: str) -> list[int]:
        """Get the keys of the authorities of one type holding a role."""
        result = self.session.execute(
            select(self.table.c.entity_id)
            .where(
                (self.table.c.role_id == role_id)
                & (self.table.c.entity_type == entity_type)
            )
            .order_by(self.table.c.entity_id)
        )
        return list(result.scalars().all())

    def get_role_ids(self, entity_type: str, entity_id: int) -> list[int]:
        """Get the IDs of the roles held by one authority."""
        result = self.session.execute(
            select(self.table.c.role_id)
            .where(
                (self.table.c.entity_type == entity_type)
                & (self.table.c.entity_id == entity_id)
            )
            .order_by(self.table.c.role_id)
        )
        return list(result.scalars().all())

    def _insert_statement(self) -> Insert:
        if self.conflict == "ignore":
            dialect = self.session.get_bind().dialect.name
            if dialect == "sqlite":
                return sqlite.insert(self.table).on_conflict_do_nothing()
            if dialect == "postgresql":
                return postgresql.insert(self.table).on_conflict_do_nothing()
        return insert(self.table)
