from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.auth import LoginIn, LoginOut, UserOut
from ..services.credentials import authenticate
from ..deps import get_current_user

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    token, user = authenticate(db, payload.username, payload.password)
    return LoginOut(token=token, user=UserOut.model_validate(user))

@router.get("/me", response_model=UserOut)
def me(current: User = Depends(get_current_user)):
    return current
