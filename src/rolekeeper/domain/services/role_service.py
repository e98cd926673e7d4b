"""Role resolution and assignment service.

Resolves mixed role references (ids, names and role records) into roles and
assigns or retracts roles to and from authorities.

Lookups are best effort: unknown ids and unknown names are silently left out
of results. Only ``find_or_create_roles`` writes roles, creating the names it
cannot find. Nothing here commits; the caller owns the transaction.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import ColumnElement, Select
from sqlalchemy.orm import Session

from rolekeeper.core.config import Settings, get_settings
from rolekeeper.core.logging import get_logger
from rolekeeper.domain.entities.authority import AuthorityTarget
from rolekeeper.domain.entities.role import Role
from rolekeeper.domain.services.authority_resolver import AuthorityResolver
from rolekeeper.domain.services.role_classifier import group_roles_by_type
from rolekeeper.infrastructure.persistence.queries.roles_query import (
    RoleQuery,
    constrain_where_assigned_to,
    constrain_where_is,
    constrain_where_is_all,
    constrain_where_is_not,
)
from rolekeeper.infrastructure.persistence.repositories.assigned_role_repository import (
    AssignedRoleRepository,
)
from rolekeeper.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from rolekeeper.infrastructure.persistence.tables import RoleTables

logger = get_logger(__name__)


class RoleService:
    """Resolves role references and manages role assignments."""

    def __init__(
        self,
        session: Session,
        tables: RoleTables,
        settings: Settings | None = None,
    ):
        """Initialize the service.

        Args:
            session: Database session used for every query.
            tables: Role tables built for ``settings``.
            settings: Optional settings. Defaults to ``get_settings()``.
        """
        self.session = session
        self.tables = tables
        self.settings = settings or get_settings()
        self.role_repo = RoleRepository(session, tables)
        self.assignment_repo = AssignedRoleRepository(
            session, tables, conflict=self.settings.assignment_conflict
        )
        self.authorities = AuthorityResolver(self.settings)

    # Resolution

    def find_or_create_roles(self, references: Any) -> list[Role]:
        """Find the given roles, creating the names that don't exist yet.

        Args:
            references: Role ids, names and/or roles (or a single one).

        Returns:
            Roles for the id bucket, then the name bucket, then the role
            records passed in. Unknown ids are dropped.

        Raises:
            InvalidRoleReference: If a reference has an unsupported type.
            ValueError: If a name is empty. Nothing is written in that case.
        """
        groups = group_roles_by_type(references)

        found = self.role_repo.find(groups["integers"])
        named = self._find_or_create_roles_by_name(groups["strings"])

        return found + named + groups["models"]

    def _find_or_create_roles_by_name(self, names: list[str]) -> list[Role]:
        if not names:
            return []

        names = list(dict.fromkeys(names))
        if any(not name for name in names):
            raise ValueError("Role name is required")

        existing = {role.name: role for role in self.role_repo.get_by_names(names)}

        roles = []
        for name in names:
            role = existing.get(name)
            if role is None:
                role = self.role_repo.create(name)
                logger.info("Role created", role_id=role.id, role_name=name)
            roles.append(role)
        return roles

    def get_role_keys(self, references: Any) -> list[int]:
        """Get the IDs of the given roles without creating any.

        Integers are passed through as-is, names are looked up (unknown names
        are dropped) and roles contribute their ID.
        """
        groups = group_roles_by_type(references)

        return (
            groups["integers"]
            + self.get_keys_by_name(groups["strings"])
            + [role.id for role in groups["models"]]
        )

    def get_role_names(self, references: Any) -> list[str]:
        """Get the names of the given roles without creating any.

        Integers are looked up (unknown IDs are dropped), names are passed
        through as-is and roles contribute their name.
        """
        groups = group_roles_by_type(references)

        return (
            self.get_names_by_key(groups["integers"])
            + groups["strings"]
            + [role.name for role in groups["models"]]
        )

    def get_keys_by_name(self, names: Iterable[str]) -> list[int]:
        """Get the IDs of the roles with the given names."""
        return self.role_repo.get_keys_by_name(names)

    def get_names_by_key(self, keys: Iterable[int]) -> list[str]:
        """Get the names of the roles with the given IDs."""
        return self.role_repo.get_names_by_key(keys)

    # Assignment

    def assign_to(
        self,
        role: Any,
        authority: Any,
        keys: Iterable[int] | None = None,
    ) -> Role:
        """Assign a role to the given authority or authorities.

        Writes one row per authority key in a single insert. No existence check
        is made first; duplicates are handled per ``assignment_conflict``.

        Args:
            role: The role, or a single id or name. Unknown names are created.
            authority: Authority instance, collection of instances of one type,
                or (with ``keys``) an authority class or type tag.
            keys: Optional explicit authority keys.

        Returns:
            The assigned role, for chaining.

        Raises:
            InvalidRoleReference: If ``role`` has an unsupported type.
            InvalidAuthority: If ``authority`` cannot be resolved.
            LookupError: If ``role`` is an id with no matching role.
        """
        role = self._resolve_single(role)
        target = self.authorities.extract_model_and_keys(authority, keys)

        self.assignment_repo.insert_many(self._create_assign_records(role, target))

        logger.debug(
            "Role assigned",
            role_id=role.id,
            entity_type=target.type_tag,
            count=len(target.keys),
        )
        return role

    def retract_from(
        self,
        role: Any,
        authority: Any,
        keys: Iterable[int] | None = None,
    ) -> Role:
        """Retract a role from the given authority or authorities.

        Retracting a role that is not assigned is a no-op.

        Args:
            role: The role, or a single id or name.
            authority: Same shapes as for ``assign_to``.
            keys: Optional explicit authority keys.

        Returns:
            The retracted role, for chaining.

        Raises:
            LookupError: If ``role`` is an id or name with no matching role.
        """
        role = self._resolve_single(role, create=False)
        target = self.authorities.extract_model_and_keys(authority, keys)

        deleted = self.assignment_repo.delete_for(role.id, target.type_tag, target.keys)

        logger.debug(
            "Role retracted",
            role_id=role.id,
            entity_type=target.type_tag,
            count=deleted,
        )
        return role

    def _create_assign_records(self, role: Role, target: AuthorityTarget) -> list[dict[str, Any]]:
        return [
            {
                "role_id": role.id,
                "entity_type": target.type_tag,
                "entity_id": key,
            }
            for key in target.keys
        ]

    def _resolve_single(self, role: Any, create: bool = True) -> Role:
        groups = group_roles_by_type(role)
        if sum(len(bucket) for bucket in groups.values()) != 1:
            raise ValueError("Expected a single role reference")
        if groups["models"]:
            return groups["models"][0]

        if create:
            roles = self.find_or_create_roles(role)
            found = roles[0] if roles else None
        elif groups["integers"]:
            found = self.role_repo.get_by_id(groups["integers"][0])
        else:
            found = self.role_repo.get_by_name(groups["strings"][0])

        if found is None:
            raise LookupError(f"Role not found: {role!r}")
        return found

    # Queries

    def where_assigned_to(
        self,
        query: RoleQuery,
        authority: Any,
        keys: Iterable[int] | None = None,
    ) -> None:
        """Constrain a role query to roles assigned to the given authorities.

        The query is modified in place.
        """
        target = self.authorities.extract_model_and_keys(authority, keys)
        constrain_where_assigned_to(query, target)

    def get_roles_for(self, authority: Any) -> list[Role]:
        """Get the roles held by a single authority instance."""
        tag = self.authorities.type_tag(authority)
        key = self.authorities.key_of(authority)
        return self.role_repo.find(self.assignment_repo.get_role_ids(tag, key))

    def get_authority_keys(self, role: Any, authority_type: Any) -> list[int]:
        """Get the keys of the authorities of one type holding a role.

        Args:
            role: The role, or a single id or name.
            authority_type: Authority class, instance or type tag.

        Returns:
            Authority keys in ascending order. Empty if the role is unknown.
        """
        role_ids = self.get_role_keys(role)
        if not role_ids:
            return []
        tag = self.authorities.type_tag(authority_type)
        return self.assignment_repo.get_entity_ids(role_ids[0], tag)

    def where_is(
        self,
        statement: Select,
        key_column: ColumnElement,
        authority_type: Any,
        *role_names: str,
    ) -> Select:
        """Constrain an authority select to authorities holding any of the roles."""
        tag = self.authorities.type_tag(authority_type)
        return constrain_where_is(statement, self.tables, key_column, tag, *role_names)

    def where_is_all(
        self,
        statement: Select,
        key_column: ColumnElement,
        authority_type: Any,
        *role_names: str,
    ) -> Select:
        """Constrain an authority select to authorities holding all of the roles."""
        tag = self.authorities.type_tag(authority_type)
        return constrain_where_is_all(statement, self.tables, key_column, tag, *role_names)

    def where_is_not(
        self,
        statement: Select,
        key_column: ColumnElement,
        authority_type: Any,
        *role_names: str,
    ) -> Select:
        """Constrain an authority select to authorities holding none of the roles."""
        tag = self.authorities.type_tag(authority_type)
        return constrain_where_is_not(statement, self.tables, key_column, tag, *role_names)
