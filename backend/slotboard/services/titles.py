import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.date_title import DateTitle

logger = logging.getLogger(__name__)


def list_titles(db: Session) -> list[DateTitle]:
    return db.query(DateTitle).order_by(DateTitle.date.asc()).all()


def _find(db: Session, key: str) -> DateTitle | None:
    return db.query(DateTitle).filter(DateTitle.date == key).first()


def upsert_title(db: Session, day: date, title: str) -> tuple[DateTitle, bool]:
    """Crea o sovrascrive il titolo di `day`. Ritorna (record, creato)."""
    key = day.isoformat()
    logger.info("Saving date title for %s: %s", key, title)

    rec = _find(db, key)
    if rec:
        rec.title = title
        db.commit()
        db.refresh(rec)
        return rec, False

    rec = DateTitle(date=key, title=title)
    db.add(rec)
    try:
        db.commit()
    except IntegrityError:
        # creato nel frattempo da un'altra richiesta: diventa un update
        db.rollback()
        rec = _find(db, key)
        rec.title = title
        db.commit()
        db.refresh(rec)
        return rec, False

    db.refresh(rec)
    return rec, True
