"""Exceptions raised by role resolution and assignment."""

from typing import Any


class RoleKeeperError(Exception):
    """Base class for all RoleKeeper errors."""
    pass


class InvalidRoleReference(RoleKeeperError, TypeError):
    """Raised when a role reference is not an id, a name or a role record."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid role: {value!r} ({type(value).__name__})")


class InvalidAuthority(RoleKeeperError, ValueError):
    """Raised when an authority argument cannot be resolved to a type and keys."""
    pass
