"""
Conexión a base de datos

Este módulo centraliza el acceso a la base de datos a través de SQLAlchemy:
- Engine + Session factory (una sesión por request)
- Base declarativa para los modelos ORM
- Política de reintento ante fallos transitorios, aplicada una vez al arrancar
"""
import time
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration
# ============================================================================

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FOREIGN KEY clauses unless asked per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs):
    """
    Create an Engine for the given URL

    Postgres (and other server databases) get a sized connection pool;
    SQLite gets foreign key enforcement turned on for every connection.

    Args:
        database_url: SQLAlchemy URL
        **kwargs: Extra create_engine arguments (override the defaults)
    """
    options = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,  # Verificar conexión antes de usar
    }

    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_MAX_OVERFLOW

    options.update(kwargs)
    db_engine = create_engine(database_url, **options)

    if database_url.startswith("sqlite"):
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)

    return db_engine


# SQLAlchemy Engine
engine = build_engine(settings.DATABASE_URL)

# Session Factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para modelos
Base = declarative_base()


def get_db():
    """
    FastAPI dependency para obtener sesión de SQLAlchemy

    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Create any missing tables

    Schema bootstrap for development and tests, not a migration tool.
    """
    # Register every mapped class on Base.metadata
    from backoffice import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# ============================================================================
# Database Connection with Retry Logic (transient failure recovery)
# ============================================================================

def wait_for_database(db_engine=None, max_retries=None, retry_delay=None):
    """
    Ping the database, retrying on connection failures

    Handles a database that is still starting up or briefly unreachable:
    - Retries failed pings up to max_retries times
    - Exponential backoff between retries
    - Logs every attempt

    Args:
        db_engine: Engine to ping (default: module engine)
        max_retries: Maximum number of attempts (default: DB_CONNECT_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: DB_CONNECT_RETRY_DELAY)

    Returns:
        Latency of the successful ping in milliseconds

    Raises:
        sqlalchemy.exc.OperationalError: If all retry attempts fail
    """
    db_engine = db_engine or engine
    max_retries = max_retries if max_retries is not None else settings.DB_CONNECT_RETRIES
    retry_delay = retry_delay if retry_delay is not None else settings.DB_CONNECT_RETRY_DELAY
    max_retries = max(max_retries, 1)

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database ping attempt {attempt}/{max_retries}")
            start = time.time()
            with db_engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            latency_ms = round((time.time() - start) * 1000, 2)
            logger.debug(f"Database ping successful on attempt {attempt}")
            return latency_ms

        except OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            # Don't retry on last attempt
            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)

    logger.error(f"All {max_retries} connection attempts failed")
    raise last_error
