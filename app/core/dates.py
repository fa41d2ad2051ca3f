"""
Fechas del backend.

Flask serializa las fechas como RFC 1123 ("Mon, 05 Jan 2026 00:00:00 GMT")
y algunos endpoints las devuelven en ISO 8601; aquí se aceptan ambas.
"""

from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime

from app.config import get_settings

settings = get_settings()


def parse_date(value) -> datetime | None:
    """Convierte el valor del backend a datetime (aware, UTC). None si no se puede."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError):
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value) -> str:
    """dd/mm/yyyy, o cadena vacía si la fecha no es válida."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime(settings.REPORT_LOCALE_DATE_FORMAT)


def is_same_month(value, now: datetime | None = None) -> bool:
    parsed = parse_date(value)
    if parsed is None:
        return False
    now = now or datetime.now(timezone.utc)
    return parsed.year == now.year and parsed.month == now.month


def time_ago(value, now: datetime | None = None) -> str:
    """Tiempo relativo en español: 'Hace 3 días', 'Hace 2 h', 'Hace 5 min'."""
    parsed = parse_date(value)
    if parsed is None:
        return "Recientemente"
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    minutes = int((now - parsed).total_seconds() // 60)
    if minutes < 0:
        return "Recientemente"
    days = minutes // (60 * 24)
    if days > 0:
        return f"Hace {days} día{'s' if days > 1 else ''}"
    hours = minutes // 60
    if hours > 0:
        return f"Hace {hours} h"
    if minutes > 0:
        return f"Hace {minutes} min"
    return "Hace un momento"


def today_stamp() -> str:
    """Fecha actual YYYY-MM-DD para nombres de archivo."""
    return date.today().isoformat()
