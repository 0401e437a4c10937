import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..core.security import create_access_token, hash_password, verify_password
from ..models.user import User

logger = logging.getLogger(__name__)


def authenticate(db: Session, username: str, password: str) -> tuple[str, User]:
    """
    Verifica username/password e ritorna (token, utente).
    Utente inesistente e password errata danno lo stesso 401.
    """
    logger.info("Login attempt for username: %s", username)
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials for username: %s", username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(user_id=user.id, is_admin=user.is_admin)
    logger.info("Login successful for user: %s", username)
    return token, user


def create_admin(db: Session, username: str, password: str) -> User:
    """Ricrea l'account admin (rimuove quello esistente con lo stesso username)."""
    db.query(User).filter(User.username == username).delete(synchronize_session=False)
    user = User(username=username, password_hash=hash_password(password), is_admin=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
