"""Query constraints based on role assignments.

``RoleQuery`` wraps a select over the roles table so scopes can constrain it
in place. The ``where_is*`` helpers work the other way around: they filter a
select over any authority table by the roles its rows hold.
"""

from collections.abc import Iterable

from sqlalchemy import ColumnElement, Select, and_, exists, false, func, select
from sqlalchemy.orm import Session

from rolekeeper.domain.entities.authority import AuthorityTarget
from rolekeeper.domain.entities.role import Role
from rolekeeper.infrastructure.persistence.tables import RoleTables


class RoleQuery:
    """A mutable query over the roles table.

    Example:
        query = RoleQuery(tables)
        service.where_assigned_to(query, user)
        roles = query.all(session)
    """

    def __init__(self, tables: RoleTables, statement: Select | None = None) -> None:
        self.tables = tables
        self.statement = statement if statement is not None else select(tables.roles)

    def where(self, *criteria: ColumnElement[bool]) -> "RoleQuery":
        """Add criteria to the query in place."""
        self.statement = self.statement.where(*criteria)
        return self

    def all(self, session: Session) -> list[Role]:
        """Execute the query and return the matching roles ordered by ID."""
        rows = session.execute(
            self.statement.order_by(self.tables.roles.c.id)
        ).mappings().all()
        return [Role.from_row(row) for row in rows]


def constrain_where_assigned_to(query: RoleQuery, target: AuthorityTarget) -> None:
    """Constrain a role query to roles assigned to the given authorities.

    Args:
        query: Role query to constrain in place.
        target: Authority type tag and keys.
    """
    roles = query.tables.roles
    pivot = query.tables.assigned_roles

    query.where(
        exists()
        .where(pivot.c.role_id == roles.c.id)
        .where(pivot.c.entity_type == target.type_tag)
        .where(pivot.c.entity_id.in_(target.keys))
    )


def _holders_of(
    tables: RoleTables,
    key_column: ColumnElement,
    type_tag: str,
    role_names: Iterable[str],
    *columns: ColumnElement,
) -> Select:
    roles = tables.roles
    pivot = tables.assigned_roles
    return (
        select(*columns)
        .select_from(pivot.join(roles, roles.c.id == pivot.c.role_id))
        .where(
            and_(
                pivot.c.entity_id == key_column,
                pivot.c.entity_type == type_tag,
                roles.c.name.in_(list(role_names)),
            )
        )
    )


def constrain_where_is(
    statement: Select,
    tables: RoleTables,
    key_column: ColumnElement,
    type_tag: str,
    *role_names: str,
) -> Select:
    """Constrain an authority select to authorities holding any of the roles.

    Args:
        statement: Select over an authority table.
        tables: Role tables.
        key_column: The authority table's key column.
        type_tag: Type tag of the authorities in the select.
        *role_names: Role names.

    Returns:
        The constrained select.
    """
    holders = _holders_of(
        tables, key_column, type_tag, role_names, tables.assigned_roles.c.role_id
    )
    return statement.where(holders.exists())


def constrain_where_is_all(
    statement: Select,
    tables: RoleTables,
    key_column: ColumnElement,
    type_tag: str,
    *role_names: str,
) -> Select:
    """Constrain an authority select to authorities holding every one of the roles.

    With no role names nothing matches.
    """
    names = list(dict.fromkeys(role_names))
    if not names:
        return statement.where(false())

    held = _holders_of(
        tables, key_column, type_tag, names, func.count()
    ).scalar_subquery()
    return statement.where(held == len(names))


def constrain_where_is_not(
    statement: Select,
    tables: RoleTables,
    key_column: ColumnElement,
    type_tag: str,
    *role_names: str,
) -> Select:
    """Constrain an authority select to authorities holding none of the roles."""
    holders = _holders_of(
        tables, key_column, type_tag, role_names, tables.assigned_roles.c.role_id
    )
    return statement.where(~holders.exists())
