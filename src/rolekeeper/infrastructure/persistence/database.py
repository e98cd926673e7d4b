"""Database abstraction layer using SQLAlchemy 2.0.

This module provides engine configuration, session management and the
metadata holding the role tables. It supports SQLite and PostgreSQL.
"""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, MetaData, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker

from rolekeeper.core.config import Settings, get_settings
from rolekeeper.core.logging import get_logger
from rolekeeper.infrastructure.persistence.tables import RoleTables, build_role_tables

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Database connection and session manager.

    This class manages the engine, the session factory and the role tables
    built from settings. Sessions handed out by ``session()`` commit on
    success and roll back on error.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the database manager.

        Args:
            settings: Optional settings instance. Defaults to ``get_settings()``.
        """
        self.settings = settings or get_settings()
        self.metadata = MetaData()
        self.tables: RoleTables = build_role_tables(self.metadata, self.settings)
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    @property
    def engine(self) -> Engine:
        """Get or create the database engine.

        Returns:
            Engine: SQLAlchemy engine instance.
        """
        if self._engine is None:
            if self.is_sqlite:
                self._ensure_sqlite_directory()
                self._engine = create_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    connect_args={"check_same_thread": False},
                )
                event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)
            else:
                self._engine = create_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                )

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    def create_tables(self) -> None:
        """Create the role tables if they don't exist.

        Intended for development and tests; production schemas are managed
        outside this package.
        """
        self.metadata.create_all(self.engine)
        logger.info("Database tables created")

    def drop_tables(self) -> None:
        """Drop the role tables.

        WARNING: This will delete all data. Only use in testing!
        """
        self.metadata.drop_all(self.engine)
        logger.warning("Database tables dropped")

    def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional scope for database operations.

        Yields:
            Session: SQLAlchemy session.

        Example:
            with db.session() as session:
                RoleService(session, db.tables).assign_to("admin", user)
        """
        with self.session_factory() as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False

    def _ensure_sqlite_directory(self) -> None:
        _, sep, path = self.settings.database_url.partition("///")
        if sep and path and path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
