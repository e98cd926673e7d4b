"""Role repository for database operations."""

from collections.abc import Iterable

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from rolekeeper.domain.entities.role import Role
from rolekeeper.infrastructure.persistence.tables import RoleTables


def _unique(values: Iterable) -> list:
    return list(dict.fromkeys(values))


class RoleRepository:
    """Repository for role database operations.

    Lookups by several ids or names return results in the order of the first
    occurrence of each id or name in the input. Misses are omitted.
    """

    def __init__(self, session: Session, tables: RoleTables) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy session.
            tables: Role tables to query.
        """
        self.session = session
        self.table = tables.roles

    def get_by_id(self, role_id: int) -> Role | None:
        """Get a role by ID.

        Args:
            role_id: Role ID.

        Returns:
            Role if found, None otherwise.
        """
        row = self.session.execute(
            select(self.table).where(self.table.c.id == role_id)
        ).mappings().one_or_none()
        return Role.from_row(row) if row is not None else None

    def get_by_name(self, name: str) -> Role | None:
        """Get a role by name.

        Args:
            name: Role name (e.g., 'admin').

        Returns:
            Role if found, None otherwise.
        """
        row = self.session.execute(
            select(self.table).where(self.table.c.name == name)
        ).mappings().one_or_none()
        return Role.from_row(row) if row is not None else None

    def find(self, role_ids: Iterable[int]) -> list[Role]:
        """Get the roles with the given IDs.

        Args:
            role_ids: Role IDs.

        Returns:
            Roles found, in input order.
        """
        role_ids = _unique(role_ids)
        if not role_ids:
            return []

        rows = self.session.execute(
            select(self.table).where(self.table.c.id.in_(role_ids))
        ).mappings().all()
        by_id = {row["id"]: Role.from_row(row) for row in rows}
        return [by_id[role_id] for role_id in role_ids if role_id in by_id]

    def get_by_names(self, names: Iterable[str]) -> list[Role]:
        """Get the roles with the given names.

        Args:
            names: Role names.

        Returns:
            Roles found, in input order.
        """
        names = _unique(names)
        if not names:
            return []

        rows = self.session.execute(
            select(self.table).where(self.table.c.name.in_(names))
        ).mappings().all()
        by_name = {row["name"]: Role.from_row(row) for row in rows}
        return [by_name[name] for name in names if name in by_name]

    def get_keys_by_name(self, names: Iterable[str]) -> list[int]:
        """Get the IDs of the roles with the given names.

        Empty input returns an empty list without querying.
        """
        return [role.id for role in self.get_by_names(names)]

    def get_names_by_key(self, role_ids: Iterable[int]) -> list[str]:
        """Get the names of the roles with the given IDs.

        Empty input returns an empty list without querying.
        """
        return [role.name for role in self.find(role_ids)]

    def create(
        self,
        name: str,
        title: str | None = None,
        description: str | None = None,
    ) -> Role:
        """Create a new role.

        Args:
            name: Unique role name.
            title: Optional title.
            description: Optional description.

        Returns:
            Created role.
        """
        role = Role(id=0, name=name, title=title, description=description)
        result = self.session.execute(
            insert(self.table).values(name=name, title=title, description=description)
        )
        role.id = result.inserted_primary_key[0]
        return role
