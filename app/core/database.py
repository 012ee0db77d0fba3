from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from .config import settings
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def engine_options(database_url: str) -> dict:
    """
    Build create_engine() keyword arguments for the configured backend.

    SQLite connections are shared across the request thread pool, and an
    in-memory database must stay on a single connection to keep its data.
    """
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in IN_MEMORY_SQLITE_URLS:
            options["poolclass"] = StaticPool
        return options

    return {
        # Connection pool settings
        "poolclass": QueuePool,
        "pool_size": settings.DB_POOL_SIZE,  # Number of connections to keep open
        "max_overflow": settings.DB_MAX_OVERFLOW,  # Max connections beyond pool_size
        "pool_timeout": settings.DB_POOL_TIMEOUT,  # Seconds to wait for connection
        "pool_recycle": settings.DB_POOL_RECYCLE,  # Recycle connections after N seconds
        "pool_pre_ping": True,  # Detect disconnects before using a connection
        "connect_args": {
            "connect_timeout": 10,  # Connection timeout in seconds
        },
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO_SQL,
    **engine_options(settings.DATABASE_URL)
)


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables():
    """
    Create all database tables defined in models.

    Only use this in development and tests. Production uses Alembic migrations.
    """
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def drop_database_tables():
    """
    Drop all database tables.

    This deletes all data! Only use in development/testing.
    """
    logger.warning("Dropping all database tables...")
    Base.metadata.drop_all(bind=engine)
    logger.info("Database tables dropped")


def check_database_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


# =============================================================================
# EVENT LISTENERS
# =============================================================================

@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enforce foreign keys on SQLite, which leaves them off by default.
    """
    if engine.dialect.name == "sqlite":
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    if settings.DEBUG:
        logger.debug("New database connection established")


# =============================================================================
# INITIALIZATION
# =============================================================================

def init_db():
    """
    Initialize database.
    Run this when starting the application.
    """
    logger.info("Initializing database...")

    if not check_database_connection():
        raise RuntimeError("Cannot connect to database!")

    # SQLite is only used for local development, where there are no migrations
    if settings.is_sqlite:
        create_database_tables()

    logger.info("Database initialized successfully")

