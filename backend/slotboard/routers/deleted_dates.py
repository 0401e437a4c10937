from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..core.weeks import parse_date_key
from ..database import get_db
from ..deps import require_admin
from ..models.user import User
from ..schemas.calendar import DeletedDateIn, DeletedDateOut, MessageOut
from ..services.visibility import hide_date, list_hidden, restore_date

router = APIRouter(prefix="/api/deleted-dates", tags=["deleted-dates"])

@router.get("", response_model=List[str])
def hidden_dates(db: Session = Depends(get_db)):
    return list_hidden(db)

@router.post("", response_model=DeletedDateOut, status_code=status.HTTP_201_CREATED)
def hide(payload: DeletedDateIn, db: Session = Depends(get_db), me: User = Depends(require_admin)):
    return hide_date(db, payload.date)

@router.delete("/{date}", response_model=MessageOut)
def restore(date: str, db: Session = Depends(get_db), me: User = Depends(require_admin)):
    try:
        day = parse_date_key(date)
    except ValueError as e:
        raise HTTPException(400, str(e))
    restore_date(db, day)
    return MessageOut(msg="Date restored successfully")
