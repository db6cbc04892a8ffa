"""Almanac and status gateway services."""
from chicken_door.services.almanac import Almanac, ScheduleGap
from chicken_door.services.status_gateway import StatusGateway, Unauthorized

__all__ = [
    'Almanac',
    'ScheduleGap',
    'StatusGateway',
    'Unauthorized',
]
