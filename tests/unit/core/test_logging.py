import structlog

from rolekeeper.core.config import Settings
from rolekeeper.core.logging import (
    LoggingContext,
    configure_logging,
    get_logger,
    rename_message_field,
)


def test_configure_logging_json(capsys):
    """Test JSON output outside development."""
    configure_logging(Settings(_env_file=None, environment="production", log_format="json"))

    get_logger("rolekeeper.test").info("Role created", role_id=3)

    out = capsys.readouterr().out
    assert '"message": "Role created"' in out
    assert '"role_id": 3' in out

    structlog.reset_defaults()


def test_logging_context_binds_and_unbinds():
    """Test that LoggingContext adds context only inside the block."""
    with LoggingContext(entity_type="user"):
        assert structlog.contextvars.get_contextvars()["entity_type"] == "user"

    assert "entity_type" not in structlog.contextvars.get_contextvars()


def test_rename_message_field():
    event_dict = rename_message_field(None, "info", {"event": "hello"})

    assert event_dict == {"message": "hello"}
