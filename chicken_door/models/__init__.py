"""Door models package."""
from chicken_door.models.door_status import DoorStatus, DoorState, InvalidDoorStatus, derive_state
from chicken_door.models.sun_couplet import SunCouplet
from chicken_door.models.door_status_record import DoorStatusRecord

__all__ = [
    'DoorStatus',
    'DoorState',
    'InvalidDoorStatus',
    'derive_state',
    'SunCouplet',
    'DoorStatusRecord',
]
