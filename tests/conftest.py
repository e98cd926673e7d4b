"""Pytest configuration for all tests."""

from typing import Generator

import pytest
from sqlalchemy import Engine, MetaData, Table, create_engine, event, insert
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rolekeeper.core.config import Settings
from rolekeeper.domain.services.role_service import RoleService
from rolekeeper.infrastructure.persistence.tables import RoleTables, build_role_tables
from tests.authorities import build_users_table


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of the environment."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite:///:memory:",
    )


@pytest.fixture
def metadata() -> MetaData:
    return MetaData()


@pytest.fixture
def tables(metadata: MetaData, settings: Settings) -> RoleTables:
    return build_role_tables(metadata, settings)


@pytest.fixture
def users_table(metadata: MetaData) -> Table:
    return build_users_table(metadata)


@pytest.fixture
def engine(metadata: MetaData, tables: RoleTables, users_table: Table) -> Generator[Engine, None, None]:
    """Create an in-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    metadata.create_all(engine)

    yield engine

    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine, tables: RoleTables) -> Generator[Session, None, None]:
    """Create a test database session.

    Seeds the default 'admin' and 'user' roles.
    """
    session_maker = sessionmaker(engine, expire_on_commit=False)

    with session_maker() as session:
        session.execute(
            insert(tables.roles),
            [
                {"name": "admin", "title": "Administrator"},
                {"name": "user", "title": "Standard User"},
            ],
        )
        yield session
        session.rollback()


@pytest.fixture
def role_service(db_session: Session, tables: RoleTables, settings: Settings) -> RoleService:
    """Create a RoleService bound to the test session."""
    return RoleService(db_session, tables, settings)
