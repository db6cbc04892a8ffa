"""Sunrise/sunset pair for one day of the year."""
from dataclasses import dataclass


@dataclass(frozen=True)
class SunCouplet:
    """Sunrise and sunset as seconds since midnight."""
    sunrise: float
    sunset: float
