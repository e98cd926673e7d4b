import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rolekeeper.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    settings = Settings(_env_file=None)

    assert settings.app_name == "RoleKeeper"
    assert settings.environment == "development"
    assert settings.roles_table_name == "roles"
    assert settings.assigned_roles_table_name == "assigned_roles"
    assert settings.authority_key_attribute == "id"
    assert settings.morph_map == {}
    assert settings.assignment_conflict == "ignore"
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "ROLEKEEPER_ENVIRONMENT": "production",
        "ROLEKEEPER_TABLE_PREFIX": "acl_",
        "ROLEKEEPER_ASSIGNMENT_CONFLICT": "raise",
        "ROLEKEEPER_MORPH_MAP": '{"app.models.User": "user"}',
    }):
        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.roles_table_name == "acl_roles"
        assert settings.assigned_roles_table_name == "acl_assigned_roles"
        assert settings.assignment_conflict == "raise"
        assert settings.morph_map == {"app.models.User": "user"}


def test_blank_table_name_rejected():
    """Test that blank table names are rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, roles_table="  ")


def test_invalid_conflict_policy_rejected():
    """Test that unknown duplicate assignment policies are rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, assignment_conflict="merge")


def test_get_settings_is_cached():
    """Test that get_settings returns the same instance."""
    get_settings.cache_clear()

    assert get_settings() is get_settings()

    get_settings.cache_clear()
