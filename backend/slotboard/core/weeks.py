"""
Chiave settimana: la domenica che apre la settimana di una data.

Unica definizione condivisa da API e client. Le date senza orario sono date di
calendario; un datetime con timezone viene letto nel suo orario locale (non
convertito in UTC), quindi domenica 01:00+07:00 resta domenica.
Gli istanti degli slot sono in UTC naive, come salvati nel DB.
"""
from datetime import date, datetime, time, timedelta

FIRST_HOUR = 10
LAST_HOUR = 17
SLOTS_PER_HOUR = 4  # :00 :15 :30 :45
SLOT_MINUTES = 15
SLOTS_PER_WEEK = (LAST_HOUR - FIRST_HOUR + 1) * SLOTS_PER_HOUR


def parse_date_key(value: str) -> date:
    """Accetta 'YYYY-MM-DD' oppure un timestamp ISO-8601 completo."""
    text = (value or "").strip()
    if not text:
        raise ValueError("Missing date")
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None


def to_calendar_date(value: date | datetime | str) -> date:
    # datetime è sottoclasse di date: va controllato prima
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date_key(value)
    raise TypeError(f"Unsupported date value: {type(value).__name__}")


def date_key(value: date | datetime | str) -> str:
    return to_calendar_date(value).isoformat()


def sunday_of_week(value: date | datetime | str) -> date:
    d = to_calendar_date(value)
    # weekday(): lun=0 ... dom=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def next_sunday(value: date | datetime | str) -> date:
    """La data stessa se è domenica, altrimenti la domenica successiva."""
    d = to_calendar_date(value)
    return d + timedelta(days=(6 - d.weekday()) % 7)


def shift_week(sunday: date, weeks: int) -> date:
    return sunday + timedelta(weeks=weeks)


def upcoming_sundays(start: date | datetime | str, count: int) -> list[date]:
    first = next_sunday(start)
    return [shift_week(first, i) for i in range(count)]


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[giorno 00:00, giorno+1 00:00) in UTC naive."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def slot_start(sunday: date, hour: int, slot_number: int) -> datetime:
    if not FIRST_HOUR <= hour <= LAST_HOUR:
        raise ValueError(f"hour out of range: {hour}")
    if not 0 <= slot_number < SLOTS_PER_HOUR:
        raise ValueError(f"slot_number out of range: {slot_number}")
    return datetime.combine(sunday, time(hour, slot_number * SLOT_MINUTES))


def week_layout(sunday: date) -> list[tuple[int, int, datetime]]:
    """Le 32 combinazioni (hour, slot_number, inizio) in ordine."""
    return [
        (hour, n, slot_start(sunday, hour, n))
        for hour in range(FIRST_HOUR, LAST_HOUR + 1)
        for n in range(SLOTS_PER_HOUR)
    ]
