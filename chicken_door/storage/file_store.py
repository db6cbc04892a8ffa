"""JSON file status store."""
import json
import logging
import os
import shutil
import tempfile
from chicken_door.models.door_status import DoorStatus, InvalidDoorStatus
from chicken_door.storage.status_store import (
    StatusCorrupt, StatusNotFound, StatusStore, StatusStoreError
)

logger = logging.getLogger(__name__)


class JsonFileStatusStore(StatusStore):
    """Door status kept as a JSON document in a single file."""

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def initialize(self) -> bool:
        if not self.exists():
            raise StatusNotFound(f"Status file not found: {self.path}")
        if os.path.getsize(self.path) > 0:
            return False
        self.replace_status(DoorStatus.default())
        logger.info(f"Initialized empty status file {self.path} with default status (closed)")
        return True

    def read_status(self) -> DoorStatus:
        try:
            with open(self.path, 'r', encoding='utf-8') as handle:
                data = json.load(handle)
        except FileNotFoundError as e:
            raise StatusNotFound(f"Status file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise StatusCorrupt(f"Bad door status structure in {self.path}: {e}") from e
        except OSError as e:
            raise StatusStoreError(f"Couldn't read status file {self.path}: {e}") from e

        try:
            return DoorStatus.from_dict(data)
        except InvalidDoorStatus as e:
            raise StatusCorrupt(f"Bad door status structure in {self.path}: {e}") from e

    def replace_status(self, status: DoorStatus) -> DoorStatus:
        if not self.exists():
            raise StatusNotFound(f"Status file not found: {self.path}")

        # Write beside the target then rename, so readers never see a partial record
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, temp_path = tempfile.mkstemp(prefix='.door_status.', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                json.dump(status.to_dict(), handle)
                handle.flush()
                os.fsync(handle.fileno())
            shutil.copymode(self.path, temp_path)
            os.replace(temp_path, self.path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StatusStoreError(f"Couldn't write status file {self.path}: {e}") from e

        return status
