"""SQLAlchemy-backed status store."""
import logging
import os
from typing import Callable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from chicken_door.config.database import init_db, session_scope
from chicken_door.models.door_status import DoorStatus, InvalidDoorStatus
from chicken_door.models.door_status_record import SINGLETON_ID, DoorStatusRecord
from chicken_door.storage.status_store import (
    StatusCorrupt, StatusNotFound, StatusStore, StatusStoreError
)

logger = logging.getLogger(__name__)


class SqlStatusStore(StatusStore):
    """Door status kept as the single row of the door_status table."""

    def __init__(self, session_factory: Callable[[], Session], engine=None):
        """
        Initialize the store.
        
        Args:
            session_factory: Function that returns a database session
            engine: Engine used to create the table on initialize()
        """
        self.session_factory = session_factory
        self.engine = engine

    def exists(self) -> bool:
        """Check that the database is reachable; a sqlite file must already exist."""
        if self.engine is None:
            return True
        url = self.engine.url
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            # Connecting would create the file
            if not os.path.isfile(url.database):
                return False
        try:
            with self.engine.connect():
                return True
        except SQLAlchemyError as e:
            logger.error(f"Status database unreachable: {str(e)}")
            return False

    def initialize(self) -> bool:
        if not self.exists():
            raise StatusNotFound("Status database not found")
        if self.engine is not None:
            try:
                init_db(self.engine)
            except SQLAlchemyError as e:
                raise StatusNotFound(f"Status database unavailable: {e}") from e

        db = next(session_scope(self.session_factory))
        try:
            if db.get(DoorStatusRecord, SINGLETON_ID) is not None:
                return False
            record = DoorStatusRecord(id=SINGLETON_ID)
            record.apply(DoorStatus.default())
            db.add(record)
            db.commit()
            logger.info("Initialized door status row with default status (closed)")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            raise StatusStoreError(f"Error initializing door status row: {e}") from e
        finally:
            db.close()

    def read_status(self) -> DoorStatus:
        db = next(session_scope(self.session_factory))
        try:
            record = db.get(DoorStatusRecord, SINGLETON_ID)
            if record is None:
                raise StatusNotFound("Door status row not found")
            return record.to_status()
        except InvalidDoorStatus as e:
            raise StatusCorrupt(f"Bad door status row: {e}") from e
        except SQLAlchemyError as e:
            raise StatusStoreError(f"Error reading door status: {e}") from e
        finally:
            db.close()

    def replace_status(self, status: DoorStatus) -> DoorStatus:
        db = next(session_scope(self.session_factory))
        try:
            record = db.get(DoorStatusRecord, SINGLETON_ID)
            if record is None:
                record = DoorStatusRecord(id=SINGLETON_ID)
                db.add(record)
            record.apply(status)
            db.commit()
            return status
        except SQLAlchemyError as e:
            db.rollback()
            raise StatusStoreError(f"Error writing door status: {e}") from e
        finally:
            db.close()
