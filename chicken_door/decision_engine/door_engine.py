"""Door decision engine."""
import enum
import logging
from dataclasses import dataclass, replace
from typing import Optional
from chicken_door.models.door_status import DoorState, DoorStatus

logger = logging.getLogger(__name__)


class DoorAction(enum.Enum):
    """Motion request issued by a decision."""
    OPEN = "open"
    CLOSE = "close"
    PASS = "pass"


@dataclass(frozen=True)
class Decision:
    """Outcome of one decision: the action and the status to persist."""
    action: DoorAction
    status: DoorStatus
    previous: DoorStatus
    reason: str
    warning: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status != self.previous


class DoorDecisionEngine:
    """Decides the next door status from the current one and daylight."""

    def decide(self, status: DoorStatus, daylight: bool, today_ordinal: int) -> Decision:
        """
        Compute the next door status.

        The override expires first, then suppresses everything for the day it
        names. Otherwise the door is only asked to move when its last motion
        was confirmed; a request is never stacked on an unconfirmed one.
        
        Args:
            status: Current persisted status
            daylight: Result of the daylight predicate for now
            today_ordinal: Current day of year
            
        Returns:
            Decision holding the action and the status to persist
        """
        current = replace(status, over_ride_day=today_ordinal)
        if status.override_active and status.over_ride_day != today_ordinal:
            logger.info(f"Override for day {status.over_ride_day} expired (today is day {today_ordinal})")
            current = replace(current, over_ride=0)

        if current.override_active:
            return self._pass(status, current, f"Manual override active for day {today_ordinal}")

        state = status.state

        if state is DoorState.UNKNOWN:
            return self._pass(
                status, current, "Door status outside known states",
                warning=f"Unknown door state (executed={status.executed}, up={status.up}), not acting"
            )

        if daylight:
            if state is DoorState.CLOSED:
                return self._request(DoorAction.OPEN, status, replace(current, up=1, executed=0),
                                     "Daylight and door closed")
            if state is DoorState.CLOSING:
                return self._pass(status, current, "Close request never confirmed",
                                  warning="The door should have been opened by now")
            if state is DoorState.OPENING:
                return self._pass(status, current, "Open request pending",
                                  warning="Open request not yet confirmed by the door")
            return self._pass(status, current, "Daylight and door already open")

        if state is DoorState.OPEN:
            return self._request(DoorAction.CLOSE, status, replace(current, up=0, executed=0),
                                 "Dark and door open")
        if state is DoorState.OPENING:
            return self._pass(status, current, "Open request never confirmed",
                              warning="The door should have been closed by now")
        if state is DoorState.CLOSING:
            return self._pass(status, current, "Close request pending",
                              warning="Close request not yet confirmed by the door")
        return self._pass(status, current, "Dark and door already closed")

    def _request(self, action: DoorAction, previous: DoorStatus, status: DoorStatus, reason: str) -> Decision:
        logger.info(f"Requesting door {action.value}: {reason}")
        return Decision(action=action, status=status, previous=previous, reason=reason)

    def _pass(self, previous: DoorStatus, status: DoorStatus, reason: str,
              warning: Optional[str] = None) -> Decision:
        if warning:
            logger.warning(warning)
        else:
            logger.debug(f"No door action: {reason}")
        return Decision(action=DoorAction.PASS, status=status, previous=previous,
                        reason=reason, warning=warning)
