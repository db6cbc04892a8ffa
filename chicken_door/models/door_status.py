"""Door status model: the single persisted record and its derived state."""
import enum
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

MAX_ORDINAL = 366

FIELDS = ('executed', 'up', 'over_ride', 'over_ride_day')
FLAG_FIELDS = ('executed', 'up', 'over_ride')


class InvalidDoorStatus(ValueError):
    """Raised when a payload cannot be turned into a DoorStatus."""


class DoorState(enum.Enum):
    """Door state derived from (executed, up)."""
    OPEN = "open"
    CLOSED = "closed"
    OPENING = "opening"
    CLOSING = "closing"
    UNKNOWN = "unknown"


_STATE_TABLE = {
    (1, 1): DoorState.OPEN,
    (1, 0): DoorState.CLOSED,
    (0, 1): DoorState.OPENING,
    (0, 0): DoorState.CLOSING,
}


def derive_state(executed: int, up: int) -> DoorState:
    """Map (executed, up) to a DoorState; anything outside {0,1}x{0,1} is UNKNOWN."""
    if isinstance(executed, bool) or isinstance(up, bool):
        return DoorState.UNKNOWN
    return _STATE_TABLE.get((executed, up), DoorState.UNKNOWN)


@dataclass(frozen=True)
class DoorStatus:
    """
    Persisted door status.

    executed: 1 once the last requested motion has completed, 0 while pending
    up: target/actual position, 1 = raised, 0 = lowered
    over_ride: 1 suppresses automatic decisions for over_ride_day
    over_ride_day: day-of-year ordinal the override applies to
    """
    executed: int
    up: int
    over_ride: int
    over_ride_day: int

    @classmethod
    def default(cls) -> 'DoorStatus':
        """Closed, executed, no override."""
        return cls(executed=1, up=0, over_ride=0, over_ride_day=0)

    @property
    def state(self) -> DoorState:
        return derive_state(self.executed, self.up)

    @property
    def override_active(self) -> bool:
        return self.over_ride == 1

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = False) -> 'DoorStatus':
        """
        Build a DoorStatus from a JSON-shaped mapping.
        
        Args:
            data: Mapping with executed, up, over_ride and over_ride_day keys
            strict: Also require the flag fields to be 0 or 1
            
        Returns:
            DoorStatus instance
            
        Raises:
            InvalidDoorStatus: If the mapping is structurally invalid
        """
        if not isinstance(data, Mapping):
            raise InvalidDoorStatus(f"Door status must be an object, got {type(data).__name__}")

        missing = [name for name in FIELDS if name not in data]
        if missing:
            raise InvalidDoorStatus(f"Door status missing fields: {', '.join(missing)}")

        for name in FIELDS:
            value = data[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDoorStatus(f"Door status field {name} must be an integer, got {value!r}")

        if not 0 <= data['over_ride_day'] <= MAX_ORDINAL:
            raise InvalidDoorStatus(
                f"over_ride_day must be between 0 and {MAX_ORDINAL}, got {data['over_ride_day']}"
            )

        if strict:
            for name in FLAG_FIELDS:
                if data[name] not in (0, 1):
                    raise InvalidDoorStatus(f"Door status field {name} must be 0 or 1, got {data[name]}")

        return cls(**{name: data[name] for name in FIELDS})
