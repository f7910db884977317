from sqlmodel import SQLModel, Session, create_engine

from birthdays.core.config import settings
from birthdays.core.errors import retry_with_backoff, StartupError
from birthdays.core.logging_config import get_logger

logger = get_logger(__name__)

# created on first use
_engine = None

def get_engine():
    global _engine
    if _engine is None:
        _engine = create_engine(settings.database_url, pool_pre_ping=True)
    return _engine

def dispose_engine():
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Database connection closed")

def init_db(retries: int = settings.DB_CONNECT_RETRIES):
    """create tables, waiting for the database to accept connections"""
    # registers the table models on SQLModel.metadata
    from birthdays import models  # noqa: F401

    @retry_with_backoff(max_retries=max(retries, 1), initial_delay=1.0)
    def _create_all():
        SQLModel.metadata.create_all(get_engine())

    try:
        _create_all()
    except Exception as e:
        raise StartupError(f"Failed to connect to database: {e}") from e

    logger.debug(
        "Database connection initialized host=%s port=%s user=%s dbname=%s",
        settings.DB_HOST, settings.DB_PORT, settings.DB_USER, settings.DB_NAME,
    )

def get_session():
    with Session(get_engine()) as session:
        yield session
