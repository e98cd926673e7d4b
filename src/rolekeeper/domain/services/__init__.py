"""Domain services for role resolution and assignment."""

from rolekeeper.domain.services.authority_resolver import AuthorityResolver
from rolekeeper.domain.services.role_classifier import RoleGroups, group_roles_by_type
from rolekeeper.domain.services.role_service import RoleService

__all__ = [
    "AuthorityResolver",
    "RoleGroups",
    "RoleService",
    "group_roles_by_type",
]
