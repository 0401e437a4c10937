from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import require_admin
from ..models.user import User
from ..schemas.calendar import DateTitleIn, DateTitleOut
from ..services.titles import list_titles, upsert_title

router = APIRouter(prefix="/api/date-titles", tags=["date-titles"])

@router.get("", response_model=List[DateTitleOut])
def all_titles(db: Session = Depends(get_db)):
    return list_titles(db)

@router.post("", response_model=DateTitleOut)
def save_title(
    payload: DateTitleIn,
    response: Response,
    db: Session = Depends(get_db),
    me: User = Depends(require_admin),
):
    rec, created = upsert_title(db, payload.date, payload.title)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return rec
