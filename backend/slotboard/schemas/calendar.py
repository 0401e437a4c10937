import datetime as dt

from pydantic import BaseModel, Field


# -----------------------------
# TITOLI (date -> titolo)
# -----------------------------

class DateTitleIn(BaseModel):
    date: dt.date
    title: str = Field(min_length=1)

class DateTitleOut(BaseModel):
    date: str
    title: str
    class Config:
        from_attributes = True

# -----------------------------
# DATE NASCOSTE (soft-delete)
# -----------------------------

class DeletedDateIn(BaseModel):
    date: dt.date

class DeletedDateOut(BaseModel):
    date: str
    class Config:
        from_attributes = True

class MessageOut(BaseModel):
    ok: bool = True
    msg: str
