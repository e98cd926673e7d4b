"""Persistence repositories for database operations."""

from rolekeeper.infrastructure.persistence.repositories.assigned_role_repository import (
    AssignedRoleRepository,
)
from rolekeeper.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)

__all__ = [
    "AssignedRoleRepository",
    "RoleRepository",
]
