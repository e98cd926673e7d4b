"""Role entity for authorization.

Roles are global and can be held by any kind of authority (users, API
clients, groups, ...). They are looked up by id or by their unique name.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass
class Role:
    """Role entity.

    Attributes:
        id: Unique identifier (auto-incrementing integer).
        name: Unique role name (e.g., 'admin', 'editor').
        title: Optional human readable title.
        description: Optional description of the role's purpose.
    """

    id: int
    name: str
    title: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.name:
            raise ValueError("Role name is required")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Role":
        """Build a role from a result row mapping."""
        return cls(
            id=row["id"],
            name=row["name"],
            title=row.get("title"),
            description=row.get("description"),
        )
