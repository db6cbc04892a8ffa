"""Daylight predicate."""
from chicken_door.config.config import DAYLIGHT_GRACE_SECONDS


def is_daylight(now_seconds: float, sunrise: float, sunset: float,
                grace: float = DAYLIGHT_GRACE_SECONDS) -> bool:
    """
    Check whether a time of day falls inside the lit window.

    Both ends are exclusive: the window opens strictly after sunrise and
    closes strictly before sunset plus the grace period.
    
    Args:
        now_seconds: Seconds since midnight
        sunrise: Sunrise in seconds since midnight
        sunset: Sunset in seconds since midnight
        grace: Extra seconds after sunset still counted as daylight
        
    Returns:
        True if it is daylight
    """
    return now_seconds > sunrise and now_seconds < sunset + grace
