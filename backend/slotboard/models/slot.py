from sqlalchemy import Column, Integer, Date, DateTime, Boolean, CheckConstraint, UniqueConstraint, func
from ..core.weeks import FIRST_HOUR, LAST_HOUR, SLOTS_PER_HOUR
from ..database import Base


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True)
    # istante UTC (naive) del minuto esatto dello slot
    date = Column(DateTime, nullable=False, index=True)
    # domenica della settimana a cui appartiene lo slot
    week = Column(Date, nullable=False)
    hour = Column(Integer, nullable=False)
    slot_number = Column(Integer, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("week", "hour", "slot_number", name="uniq_week_slot"),
        CheckConstraint(f"hour BETWEEN {FIRST_HOUR} AND {LAST_HOUR}", name="ck_slot_hour"),
        CheckConstraint(f"slot_number BETWEEN 0 AND {SLOTS_PER_HOUR - 1}", name="ck_slot_number"),
    )
