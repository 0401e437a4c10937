import datetime as dt

from pydantic import BaseModel, Field, field_validator


class SlotOut(BaseModel):
    id: int
    date: dt.datetime
    hour: int
    slot_number: int = Field(alias="slotNumber")
    is_available: bool = Field(alias="isAvailable")

    class Config:
        from_attributes = True
        populate_by_name = True

    @field_validator("date")
    @classmethod
    def _as_utc(cls, v: dt.datetime) -> dt.datetime:
        # il DB restituisce istanti UTC naive
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v


class InitializeIn(BaseModel):
    """Inizializzazione esplicita: qualsiasi data della settimana."""
    start_date: dt.date = Field(alias="startDate")

    class Config:
        populate_by_name = True


class InitializeOut(BaseModel):
    ok: bool = True
    week: dt.date
    created: int
    skipped: int
