"""RoleKeeper - role resolution and assignment for RBAC systems.

Resolves role references given by id, name or record, and assigns roles to
any kind of authority through a polymorphic assignment table.
"""

__version__ = "0.1.0"

from rolekeeper.domain.entities import Role
from rolekeeper.domain.exceptions import (
    InvalidAuthority,
    InvalidRoleReference,
    RoleKeeperError,
)
from rolekeeper.domain.services import RoleService
from rolekeeper.infrastructure.persistence.database import DatabaseManager
from rolekeeper.infrastructure.persistence.queries import RoleQuery

__all__ = [
    "DatabaseManager",
    "InvalidAuthority",
    "InvalidRoleReference",
    "Role",
    "RoleKeeperError",
    "RoleQuery",
    "RoleService",
    "__version__",
]
