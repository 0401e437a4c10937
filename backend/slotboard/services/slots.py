# backend/slotboard/services/slots.py
import logging
from datetime import date, datetime

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.weeks import SLOTS_PER_WEEK, day_bounds, sunday_of_week, week_layout
from ..models.slot import TimeSlot

logger = logging.getLogger(__name__)


def _slots_between(db: Session, start: datetime, end: datetime) -> list[TimeSlot]:
    return (
        db.query(TimeSlot)
        .filter(TimeSlot.date >= start, TimeSlot.date < end)
        .order_by(TimeSlot.hour.asc(), TimeSlot.slot_number.asc())
        .all()
    )


def _new_week_rows(sunday: date) -> list[TimeSlot]:
    return [
        TimeSlot(date=start, week=sunday, hour=hour, slot_number=n, is_available=True)
        for hour, n, start in week_layout(sunday)
    ]


def slots_for_day(db: Session, day: date) -> list[TimeSlot]:
    """Slot di un giorno preciso, senza inizializzazione."""
    return _slots_between(db, *day_bounds(day))


def initialize_week(db: Session, day: date | datetime | str) -> tuple[int, int]:
    """
    Crea i 32 slot della settimana di `day`. Ritorna (creati, saltati).

    Prima un unico batch; se il vincolo unico lo rifiuta (righe già presenti,
    o un'altra richiesta concorrente le ha appena inserite) si riprova riga per
    riga, ognuna nella sua transazione, saltando i duplicati.
    """
    sunday = sunday_of_week(day)

    db.add_all(_new_week_rows(sunday))
    try:
        db.commit()
        logger.info("Initialized %d slots for week %s", SLOTS_PER_WEEK, sunday)
        return SLOTS_PER_WEEK, 0
    except IntegrityError:
        db.rollback()
        logger.info("Week %s partially present, inserting row by row", sunday)

    created = skipped = 0
    for row in _new_week_rows(sunday):
        db.add(row)
        try:
            db.commit()
            created += 1
        except IntegrityError:
            db.rollback()
            skipped += 1

    logger.info("Week %s: created=%d skipped=%d", sunday, created, skipped)
    return created, skipped


def get_week_slots(db: Session, day: date | datetime | str) -> list[TimeSlot]:
    """
    Slot della domenica che apre la settimana di `day`, ordinati per
    (hour, slot_number). Se mancano vengono creati: la seconda chiamata non scrive.
    """
    sunday = sunday_of_week(day)
    start, end = day_bounds(sunday)

    slots = _slots_between(db, start, end)
    if len(slots) < SLOTS_PER_WEEK:
        initialize_week(db, sunday)
        slots = _slots_between(db, start, end)
    return slots


def toggle_slot(db: Session, slot_id: int) -> TimeSlot:
    s = db.get(TimeSlot, slot_id)
    if not s:
        raise HTTPException(404, "Slot not found")
    s.is_available = not s.is_available
    db.commit()
    db.refresh(s)
    logger.info("Slot %s (%s) -> available=%s", s.id, s.date, s.is_available)
    return s
