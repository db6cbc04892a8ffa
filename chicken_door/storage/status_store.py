"""Abstract status store interface for persistence abstraction."""
from abc import ABC, abstractmethod
from chicken_door.models.door_status import DoorStatus


class StatusStoreError(Exception):
    """Raised when the backing medium cannot be read or written."""


class StatusNotFound(StatusStoreError):
    """Raised when the backing record does not exist."""


class StatusCorrupt(StatusStoreError):
    """Raised when the backing record is structurally invalid."""


class StatusStore(ABC):
    """Abstract base class for door status persistence."""

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the backing medium is present."""
        pass

    @abstractmethod
    def initialize(self) -> bool:
        """
        Seed the default status if the medium is present but holds no record.
        
        Returns:
            True if a default record was written
            
        Raises:
            StatusNotFound: If the medium itself is missing
        """
        pass

    @abstractmethod
    def read_status(self) -> DoorStatus:
        """
        Read the stored status.
        
        Raises:
            StatusNotFound: If there is no record
            StatusCorrupt: If the record is structurally invalid
            StatusStoreError: On any other read failure
        """
        pass

    @abstractmethod
    def replace_status(self, status: DoorStatus) -> DoorStatus:
        """
        Overwrite the stored status.
        
        Args:
            status: New status
            
        Returns:
            The stored status
        """
        pass
