"""Background loop reconciling the persisted door status with daylight."""
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple
from chicken_door.config.config import DAYLIGHT_GRACE_SECONDS
from chicken_door.decision_engine.daylight import is_daylight
from chicken_door.decision_engine.door_engine import Decision, DoorDecisionEngine
from chicken_door.services.almanac import Almanac, ScheduleGap
from chicken_door.services.status_gateway import StatusGateway
from chicken_door.storage.status_store import StatusStoreError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def current_day_position(hour_offset: int, now: Optional[datetime] = None) -> Tuple[int, int]:
    """
    Get the shifted time of day and day of year.
    
    Args:
        hour_offset: Fixed number of hours added to UTC
        now: Current UTC time (defaults to the wall clock)
        
    Returns:
        Tuple of (seconds since midnight, day-of-year ordinal)
    """
    shifted = (now or utc_now()) + timedelta(hours=hour_offset)
    now_seconds = shifted.hour * 3600 + shifted.minute * 60 + shifted.second
    return now_seconds, shifted.timetuple().tm_yday


class ReconciliationLoop:
    """Periodic task that decides door motion and persists the result."""

    def __init__(self, gateway: StatusGateway, almanac: Almanac,
                 engine: DoorDecisionEngine, interval_seconds: float,
                 hour_offset: int = 0,
                 daylight_grace_seconds: float = DAYLIGHT_GRACE_SECONDS,
                 clock: Callable[[], datetime] = utc_now):
        """
        Initialize the loop.
        
        Args:
            gateway: Status gateway used for the read-decide-write step
            almanac: Sunrise/sunset schedule
            engine: Decision engine
            interval_seconds: Wait between ticks
            hour_offset: Fixed hours added to UTC before deriving the day
            daylight_grace_seconds: Grace period after sunset
            clock: Function returning the current UTC time
        """
        self.gateway = gateway
        self.almanac = almanac
        self.engine = engine
        self.interval = interval_seconds
        self.hour_offset = hour_offset
        self.grace = daylight_grace_seconds
        self.clock = clock
        self.thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def tick(self) -> Optional[Decision]:
        """Run one reconciliation; returns None when the tick was skipped."""
        now_seconds, ordinal = current_day_position(self.hour_offset, self.clock())

        try:
            couplet = self.almanac.lookup(ordinal)
        except ScheduleGap as e:
            logger.error(f"Skipping tick: {e}")
            return None

        daylight = is_daylight(now_seconds, couplet.sunrise, couplet.sunset, self.grace)
        logger.debug(
            f"Day {ordinal}, {now_seconds}s: sunrise={couplet.sunrise}, "
            f"sunset={couplet.sunset}, daylight={daylight}"
        )

        try:
            decision = self.gateway.update_status(
                lambda status: self.engine.decide(status, daylight, ordinal)
            )
        except StatusStoreError as e:
            logger.error(f"Abandoning tick, status store failed: {e}")
            return None

        if decision.changed:
            logger.info(f"Door status updated ({decision.action.value}): {decision.status.to_dict()}")
        return decision

    def _run(self):
        """Main loop for background task"""
        logger.info(f"Reconciliation loop started (interval: {self.interval}s)")

        while not self._stop_event.wait(self.interval):
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in reconciliation loop: {e}", exc_info=True)

        logger.info("Reconciliation loop stopped")

    def start(self):
        """Start the background thread."""
        if self.is_running:
            logger.warning("Reconciliation loop already running")
            return

        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run, name='reconciliation-loop', daemon=True)
        self.thread.start()

    def stop(self, timeout: float = 5.0):
        """Stop the background thread; a tick in progress runs to completion."""
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=timeout)
        self.thread = None
