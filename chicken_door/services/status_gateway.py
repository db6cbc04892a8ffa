"""Authenticated, serialized access to the persisted door status."""
import hmac
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Optional
from chicken_door.decision_engine.door_engine import Decision
from chicken_door.models.door_status import DoorStatus
from chicken_door.storage.status_store import StatusStore, StatusStoreError

logger = logging.getLogger(__name__)


class Unauthorized(Exception):
    """Raised when an access key is missing or does not match."""


class StatusGateway:
    """Gateway between callers and the status store.

    Every store access, including the loop's read-decide-write, runs under one
    lock so at most one writer touches the record at a time.
    """

    def __init__(self, store: StatusStore, access_key: str, lock_timeout_seconds: float = 10.0):
        """
        Initialize the gateway.
        
        Args:
            store: Backend holding the single status record
            access_key: Secret callers must present
            lock_timeout_seconds: Longest wait for the store lock before failing
        """
        if lock_timeout_seconds <= 0:
            raise ValueError(f"lock_timeout_seconds must be positive, got {lock_timeout_seconds}")
        self.store = store
        self._access_key = access_key
        self.lock_timeout = lock_timeout_seconds
        self._lock = threading.RLock()

    def authorize(self, token: Optional[str]):
        """Raise Unauthorized unless token exactly equals the configured key."""
        if not token:
            logger.warning("No access key provided")
            raise Unauthorized("No access key provided")
        if not hmac.compare_digest(token.encode('utf-8'), self._access_key.encode('utf-8')):
            logger.warning("Unauthorized access attempt")
            raise Unauthorized("Access key mismatch")

    def read_status(self) -> DoorStatus:
        with self._locked():
            return self.store.read_status()

    def replace_status(self, new: DoorStatus) -> DoorStatus:
        """Overwrite the record; override fields are taken as given."""
        with self._locked():
            stored = self.store.replace_status(new)
        logger.info(f"Door status replaced: {stored.to_dict()}")
        return stored

    def update_status(self, decide: Callable[[DoorStatus], Decision]) -> Decision:
        """
        Read, decide and write as one step under the store lock.
        
        Args:
            decide: Function computing a Decision from the current status
            
        Returns:
            The decision; its status is written only if it changed
        """
        with self._locked():
            current = self.store.read_status()
            decision = decide(current)
            if decision.changed:
                self.store.replace_status(decision.status)
        return decision

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise StatusStoreError(f"Timed out after {self.lock_timeout}s waiting for status lock")
        try:
            yield
        finally:
            self._lock.release()
