"""Unit tests for Role and RoleReference entities."""

import pytest

from rolekeeper.domain.entities import (
    AuthorityTarget,
    Role,
    RoleId,
    RoleName,
    RoleRecord,
    as_role_reference,
)
from rolekeeper.domain.exceptions import InvalidRoleReference


def test_role_requires_name():
    with pytest.raises(ValueError, match="Role name is required"):
        Role(id=1, name="")


def test_role_from_row():
    role = Role.from_row({"id": 4, "name": "editor", "title": "Editor", "description": None})

    assert role == Role(id=4, name="editor", title="Editor")


def test_as_role_reference_wraps_each_shape():
    role = Role(id=1, name="admin")

    assert as_role_reference(1) == RoleId(1)
    assert as_role_reference("admin") == RoleName("admin")
    assert as_role_reference(role) == RoleRecord(role)


def test_as_role_reference_keeps_existing_references():
    reference = RoleName("admin")

    assert as_role_reference(reference) is reference


@pytest.mark.parametrize("value", [1.5, None, True, {"name": "admin"}, b"admin"])
def test_as_role_reference_rejects_other_types(value):
    with pytest.raises(InvalidRoleReference) as exc_info:
        as_role_reference(value)

    assert exc_info.value.value is value


def test_invalid_role_reference_is_a_type_error():
    with pytest.raises(TypeError):
        as_role_reference(2.0)


def test_authority_target_requires_type_tag():
    with pytest.raises(ValueError, match="type tag is required"):
        AuthorityTarget(type_tag="", keys=[1])
