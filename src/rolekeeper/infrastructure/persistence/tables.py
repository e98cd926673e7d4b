"""Table definitions for roles and role assignments.

Table names come from settings, so the tables are built at runtime against
a caller supplied ``MetaData`` rather than declared on a global base.
"""

from dataclasses import dataclass

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
)

from rolekeeper.core.config import Settings


@dataclass(frozen=True)
class RoleTables:
    """The roles table and the assignment table built from one ``Settings``.

    Attributes:
        roles: Roles table (id, name, title, description).
        assigned_roles: Assignment table (role_id, entity_type, entity_id).
    """

    roles: Table
    assigned_roles: Table


def build_role_tables(metadata: MetaData, settings: Settings) -> RoleTables:
    """Build the role tables on the given metadata.

    Args:
        metadata: Metadata the tables are registered on.
        settings: Settings providing the table names.

    Returns:
        RoleTables: The roles and assignment tables.
    """
    roles_name = settings.roles_table_name
    assigned_name = settings.assigned_roles_table_name

    roles = Table(
        roles_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column(
            "name",
            String(255),
            nullable=False,
            unique=True,
            index=True,
            comment="Unique role name (e.g., 'admin', 'editor')",
        ),
        Column("title", String(255), nullable=True),
        Column("description", String(255), nullable=True),
    )

    assigned_roles = Table(
        assigned_name,
        metadata,
        Column(
            "role_id",
            Integer,
            ForeignKey(f"{roles_name}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        Column(
            "entity_type",
            String(255),
            nullable=False,
            comment="Type tag of the authority holding the role",
        ),
        Column(
            "entity_id",
            Integer,
            nullable=False,
            comment="Key of the authority holding the role",
        ),
        PrimaryKeyConstraint("role_id", "entity_type", "entity_id"),
    )

    return RoleTables(roles=roles, assigned_roles=assigned_roles)
