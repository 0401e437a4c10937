from datetime import date

from ..core.weeks import SLOT_MINUTES


def format_time(hour: int, slot_number: int) -> str:
    return f"{hour:02d}:{slot_number * SLOT_MINUTES:02d}"


def format_day(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def render_week(sunday: date, slots: list[dict], title: str | None = None, columns: int = 4) -> str:
    """Griglia testuale: una riga per ora, `columns` slot per riga."""
    header = format_day(sunday)
    if title:
        header = f"{header} - {title}"
    lines = [header, "=" * len(header)]

    if not slots:
        lines.append("(no slots)")
        return "\n".join(lines)

    cells = [
        f"{format_time(s['hour'], s['slotNumber'])} {'Available' if s['isAvailable'] else 'Unavailable':<11}"
        f" #{s['id']}"
        for s in slots
    ]
    for i in range(0, len(cells), columns):
        lines.append("   ".join(cells[i:i + columns]).rstrip())
    return "\n".join(lines)
