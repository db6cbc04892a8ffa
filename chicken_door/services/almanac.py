"""Sunrise/sunset almanac indexed by day-of-year ordinal."""
import json
import logging
from typing import Iterable, Tuple
from chicken_door.config.config import ConfigurationError
from chicken_door.models.sun_couplet import SunCouplet

logger = logging.getLogger(__name__)


class ScheduleGap(LookupError):
    """Raised when an ordinal has no entry in the loaded schedule."""

    def __init__(self, ordinal: int, length: int):
        super().__init__(f"No schedule entry for day {ordinal} (schedule has {length} days)")
        self.ordinal = ordinal
        self.length = length


class Almanac:
    """Immutable ordered sequence of sun couplets, one per day of the year."""

    def __init__(self, couplets: Iterable[SunCouplet]):
        self._couplets: Tuple[SunCouplet, ...] = tuple(couplets)

    def __len__(self) -> int:
        return len(self._couplets)

    def lookup(self, ordinal: int) -> SunCouplet:
        """
        Get the sun couplet for a day.
        
        Args:
            ordinal: 1-based day of year
            
        Returns:
            SunCouplet for that day
            
        Raises:
            ScheduleGap: If the schedule has no entry for ordinal
        """
        if ordinal < 1 or ordinal > len(self._couplets):
            raise ScheduleGap(ordinal, len(self._couplets))
        return self._couplets[ordinal - 1]

    @classmethod
    def from_file(cls, path: str) -> 'Almanac':
        """
        Load the schedule file: a JSON array of {"sunrise": s, "sunset": s} objects.
        
        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        try:
            with open(path, 'r', encoding='utf-8') as handle:
                raw = json.load(handle)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Schedule not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Couldn't read schedule {path}: {e}") from e

        if not isinstance(raw, list) or not raw:
            raise ConfigurationError(f"Schedule {path} must be a non-empty JSON array")

        couplets = []
        for day, entry in enumerate(raw, start=1):
            try:
                sunrise = entry['sunrise']
                sunset = entry['sunset']
            except (TypeError, KeyError) as e:
                raise ConfigurationError(f"Bad schedule entry for day {day}: {entry!r}") from e
            if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in (sunrise, sunset)):
                raise ConfigurationError(f"Bad schedule entry for day {day}: {entry!r}")
            couplets.append(SunCouplet(sunrise=float(sunrise), sunset=float(sunset)))

        almanac = cls(couplets)
        logger.info(f"Loaded schedule with {len(almanac)} days from {path}")
        return almanac
