"""Door status table for the sql status backend."""
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.sql import func
from chicken_door.config.database import Base
from chicken_door.models.door_status import DoorStatus

# The table only ever holds this row
SINGLETON_ID = 1


class DoorStatusRecord(Base):
    """Model for the single persisted door status row."""
    __tablename__ = 'door_status'

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    executed = Column(Integer, nullable=False, default=1)
    up = Column(Integer, nullable=False, default=0)  # 0 = lowered, 1 = raised
    over_ride = Column(Integer, nullable=False, default=0)
    over_ride_day = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return (f"<DoorStatusRecord(executed={self.executed}, up={self.up}, "
                f"over_ride={self.over_ride}, over_ride_day={self.over_ride_day})>")

    def to_status(self) -> DoorStatus:
        return DoorStatus.from_dict({
            'executed': self.executed,
            'up': self.up,
            'over_ride': self.over_ride,
            'over_ride_day': self.over_ride_day,
        })

    def apply(self, status: DoorStatus):
        """Copy the fields of status onto this row."""
        self.executed = status.executed
        self.up = status.up
        self.over_ride = status.over_ride
        self.over_ride_day = status.over_ride_day
