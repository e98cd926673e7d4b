"""Domain entities for RoleKeeper.

Entities are pure Python dataclasses that represent core concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from rolekeeper.domain.entities.authority import AuthorityTarget
from rolekeeper.domain.entities.role import Role
from rolekeeper.domain.entities.role_reference import (
    RoleId,
    RoleName,
    RoleRecord,
    RoleReference,
    as_role_reference,
)

__all__ = [
    "AuthorityTarget",
    "Role",
    "RoleId",
    "RoleName",
    "RoleRecord",
    "RoleReference",
    "as_role_reference",
]
