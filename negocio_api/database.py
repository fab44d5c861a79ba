"""
Database Configuration and Session Management

SQLAlchemy setup standing in for the document store. Tenants live in one
table and every nested collection lives in a second table keyed by
(negocio_id, tipo), so a "subcollection" is just a filtered query.

NOTE: Each request gets its own session; there is no shared state between
requests beyond what the database itself provides.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from negocio_api.config import get_settings
import logging

logger = logging.getLogger(__name__)

settings = get_settings()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for the given URL.

    SQLite gets check_same_thread disabled (FastAPI runs sync dependencies in
    a threadpool); an in-memory SQLite URL also gets a StaticPool so every
    session sees the same database. Other backends use the default QueuePool
    sized from settings.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs = {
            "pool_size": settings.DATABASE_POOL_SIZE,
            "max_overflow": settings.DATABASE_MAX_OVERFLOW,
            "pool_pre_ping": True,
        }

    db_engine = create_engine(database_url, echo=echo, **kwargs)
    event.listen(db_engine, "connect", _on_connect)
    return db_engine


def _on_connect(dbapi_connection, connection_record):
    """Set connection-level configuration on new connections."""
    cursor = dbapi_connection.cursor()
    module = type(dbapi_connection).__module__
    if module.startswith("sqlite3"):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
        cursor.execute("PRAGMA foreign_keys=ON")
    elif settings.DATABASE_URL.startswith("postgresql"):
        cursor.execute("SET TIME ZONE 'UTC'")
    cursor.close()
    logger.debug("New database connection established")


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# Base class for all models
Base = declarative_base()


def get_db() -> Session:
    """
    Dependency function that provides a database session.

    The session is closed after the request completes. Tenant scoping is
    applied by the service functions, not here.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """Create tables that do not exist yet."""
    # Import models so they register on Base.metadata
    import negocio_api.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ready")
