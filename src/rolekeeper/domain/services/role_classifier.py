"""Classification of heterogeneous role references.

Callers may pass role ids, role names and role records mixed in a single
collection. The classifier sorts them into three buckets so each bucket can
be resolved with a single query.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypedDict

from rolekeeper.domain.entities.role import Role
from rolekeeper.domain.entities.role_reference import (
    RoleId,
    RoleName,
    RoleRecord,
    as_role_reference,
)


class RoleGroups(TypedDict):
    """Role references grouped by shape."""

    integers: list[int]
    strings: list[str]
    models: list[Role]


def iter_references(references: Any) -> Iterable[Any]:
    """Treat a single value (valid or not) as a one-element collection."""
    if isinstance(references, (str, bytes, bytearray, Mapping)) or not isinstance(
        references, Iterable
    ):
        return [references]
    return references


def group_roles_by_type(references: Any) -> RoleGroups:
    """Group role references into integers, strings and models.

    Every key is present in the result, even when its bucket is empty.
    Relative order within each bucket follows the input.

    Args:
        references: Iterable of ``int``, ``str``, ``Role`` or ``RoleReference``
            values, or a single such value.

    Returns:
        RoleGroups: Mapping with the keys ``integers``, ``strings`` and ``models``.

    Raises:
        InvalidRoleReference: If any element has an unsupported type.
    """
    groups: RoleGroups = {"integers": [], "strings": [], "models": []}

    for value in iter_references(references):
        reference = as_role_reference(value)
        if isinstance(reference, RoleId):
            groups["integers"].append(reference.value)
        elif isinstance(reference, RoleName):
            groups["strings"].append(reference.value)
        elif isinstance(reference, RoleRecord):
            groups["models"].append(reference.value)

    return groups
