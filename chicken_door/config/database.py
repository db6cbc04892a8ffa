"""Database configuration and initialization for the sql status backend."""
import logging
from typing import Callable, Iterator
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, scoped_session, sessionmaker

logger = logging.getLogger(__name__)

# Seconds sqlite waits on a locked database before failing
SQLITE_BUSY_TIMEOUT_SEC = 5

# Base class for models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create a database engine; sqlite connections may be shared across threads."""
    connect_args = {}
    if database_url.startswith('sqlite'):
        connect_args = {'check_same_thread': False, 'timeout': SQLITE_BUSY_TIMEOUT_SEC}
    return create_engine(database_url, connect_args=connect_args, echo=False)


def create_session_factory(engine: Engine) -> scoped_session:
    """Create a thread-local session factory bound to engine."""
    return scoped_session(sessionmaker(autocommit=False, autoflush=False, bind=engine))


def init_db(engine: Engine):
    """Initialize database by creating all tables."""
    from chicken_door.models.door_status_record import DoorStatusRecord  # noqa: F401
    Base.metadata.create_all(bind=engine)
    tables = inspect(engine).get_table_names()
    logger.info(f"Database initialized (tables: {', '.join(tables)})")


def session_scope(session_factory: Callable[[], Session]) -> Iterator[Session]:
    """Get database session."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
