"""Role references.

A role reference is how callers point at a role: by numeric id, by name, or
with an already loaded ``Role``. The three shapes form a closed variant so
the classifier can match them exhaustively.
"""

from dataclasses import dataclass
from typing import Any

from rolekeeper.domain.entities.role import Role
from rolekeeper.domain.exceptions import InvalidRoleReference


@dataclass(frozen=True)
class RoleId:
    """Reference to a role by primary key."""

    value: int


@dataclass(frozen=True)
class RoleName:
    """Reference to a role by unique name."""

    value: str


@dataclass(frozen=True)
class RoleRecord:
    """Reference holding an already resolved role."""

    value: Role


RoleReference = RoleId | RoleName | RoleRecord


def as_role_reference(value: Any) -> RoleReference:
    """Wrap a raw value in its reference variant.

    Args:
        value: An ``int``, a ``str``, a ``Role`` or an existing reference.

    Returns:
        The matching ``RoleReference`` variant.

    Raises:
        InvalidRoleReference: If the value has any other type. ``bool`` is
            rejected even though it subclasses ``int``.
    """
    if isinstance(value, (RoleId, RoleName, RoleRecord)):
        return value
    if isinstance(value, bool):
        raise InvalidRoleReference(value)
    if isinstance(value, int):
        return RoleId(value)
    if isinstance(value, str):
        return RoleName(value)
    if isinstance(value, Role):
        return RoleRecord(value)
    raise InvalidRoleReference(value)
