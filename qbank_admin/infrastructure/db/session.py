import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from qbank_admin.infrastructure.config import get_database_url, SQL_ECHO

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """Build an engine; SQLite connections get foreign keys and case-sensitive LIKE."""
    engine = create_engine(database_url, pool_pre_ping=True, echo=SQL_ECHO, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _configure_sqlite(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA case_sensitive_like=ON")
            cursor.close()

    logger.info(f"Database engine created for dialect '{engine.dialect.name}'")
    return engine


engine = create_db_engine(get_database_url())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
