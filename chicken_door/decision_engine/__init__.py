"""Decision engine package."""
from chicken_door.decision_engine.daylight import is_daylight
from chicken_door.decision_engine.door_engine import Decision, DoorAction, DoorDecisionEngine

__all__ = [
    'is_daylight',
    'Decision',
    'DoorAction',
    'DoorDecisionEngine',
]
