import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.deleted_date import DeletedDate

logger = logging.getLogger(__name__)


def list_hidden(db: Session) -> list[str]:
    return [row.date for row in db.query(DeletedDate).order_by(DeletedDate.date.asc()).all()]


def hide_date(db: Session, day: date) -> DeletedDate:
    key = day.isoformat()
    if db.query(DeletedDate).filter(DeletedDate.date == key).first():
        raise HTTPException(400, "Date already deleted")

    rec = DeletedDate(date=key)
    db.add(rec)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(400, "Date already deleted")
    db.refresh(rec)
    logger.info("Date %s hidden", key)
    return rec


def restore_date(db: Session, day: date) -> None:
    key = day.isoformat()
    deleted = db.query(DeletedDate).filter(DeletedDate.date == key).delete(synchronize_session=False)
    if not deleted:
        raise HTTPException(404, "Date not found in deleted list")
    db.commit()
    logger.info("Date %s restored", key)
