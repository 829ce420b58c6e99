from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from .config import Settings
import logging

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def build_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured store.

    Server databases get a QueuePool with connect/statement timeouts so a
    slow store cannot hold request workers forever. SQLite (local runs and
    tests) shares one connection, which keeps in-memory databases alive.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.DATABASE_URL,
            poolclass=StaticPool,
            echo=settings.DB_ECHO_SQL,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        settings.DATABASE_URL,

        # Connection pool settings
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,  # Number of connections to keep open
        max_overflow=settings.DB_MAX_OVERFLOW,  # Max connections beyond pool_size
        pool_timeout=settings.DB_POOL_TIMEOUT,  # Seconds to wait for connection
        pool_recycle=settings.DB_POOL_RECYCLE,  # Recycle connections after N seconds

        # Test connection before using (detect disconnects)
        pool_pre_ping=True,

        echo=settings.DB_ECHO_SQL,

        connect_args={
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        }
    )


class Database:
    """
    Handle on the relational store.

    Built once at process start (see the application lifespan), shared by
    every request through the ``get_db`` dependency and disposed on shutdown.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = build_engine(settings)
        self.SessionLocal = sessionmaker(
            autocommit=False,  # Don't auto-commit transactions
            autoflush=False,   # Don't auto-flush before queries
            bind=self.engine,
            expire_on_commit=False  # Don't expire objects after commit
        )
        if settings.DEBUG:
            self._register_debug_listeners()

    def session(self) -> Session:
        return self.SessionLocal()

    def check_connection(self) -> bool:
        """
        Check if database connection is working.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {e.__class__.__name__}")
            return False

    def create_tables(self):
        """
        Create all database tables defined in models.

        Only for development and tests, production uses Alembic migrations.
        """
        # Register models on Base.metadata
        from student_service.models import student  # noqa: F401

        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")

    def drop_tables(self):
        """Drop all database tables. Deletes all data."""
        logger.warning("Dropping all database tables...")
        Base.metadata.drop_all(bind=self.engine)
        logger.info("Database tables dropped")

    def dispose(self):
        logger.info("Closing database connection pool")
        self.engine.dispose()

    # =========================================================================
    # EVENT LISTENERS
    # =========================================================================

    def _register_debug_listeners(self):
        @event.listens_for(self.engine, "connect")
        def receive_connect(dbapi_conn, connection_record):
            logger.debug("New database connection established")

        @event.listens_for(self.engine, "checkout")
        def receive_checkout(dbapi_conn, connection_record, connection_proxy):
            logger.debug("Connection checked out from pool")
