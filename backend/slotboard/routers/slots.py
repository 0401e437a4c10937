from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.weeks import parse_date_key, sunday_of_week
from ..database import get_db
from ..deps import require_admin
from ..models.user import User
from ..schemas.slot import InitializeIn, InitializeOut, SlotOut
from ..services import slots as slot_store

router = APIRouter(prefix="/api/slots", tags=["slots"])


def _parse_or_400(value: str | None):
    try:
        return parse_date_key(value or "")
    except ValueError as e:
        raise HTTPException(400, str(e))


# -----------------------------------------------------------------------------
# PUBBLICO: lettura (inizializza la settimana se serve)
# -----------------------------------------------------------------------------
@router.get("/week/{date}", response_model=List[SlotOut])
def week_slots(date: str, db: Session = Depends(get_db)):
    return slot_store.get_week_slots(db, _parse_or_400(date))


@router.get("", response_model=List[SlotOut])
def day_slots(date: str | None = None, db: Session = Depends(get_db)):
    if not date:
        raise HTTPException(400, "Missing date parameter")
    return slot_store.slots_for_day(db, _parse_or_400(date))


# -----------------------------------------------------------------------------
# ADMIN: toggle disponibilità / inizializzazione esplicita
# -----------------------------------------------------------------------------
@router.patch("/{slot_id}", response_model=SlotOut)
def toggle(slot_id: int, db: Session = Depends(get_db), me: User = Depends(require_admin)):
    return slot_store.toggle_slot(db, slot_id)


@router.post("/initialize", response_model=InitializeOut)
def initialize(payload: InitializeIn, db: Session = Depends(get_db), me: User = Depends(require_admin)):
    created, skipped = slot_store.initialize_week(db, payload.start_date)
    # non alzare eccezioni sui duplicati: torna conteggi chiari per l'UI
    return InitializeOut(week=sunday_of_week(payload.start_date), created=created, skipped=skipped)
