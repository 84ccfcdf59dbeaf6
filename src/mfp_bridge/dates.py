"""Calendar helpers for diary dates."""

from datetime import date, timedelta


def today() -> str:
    """Return today's local date as ``YYYY-MM-DD``."""
    return date.today().isoformat()


def parse_day(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value}") from exc


def days_between(start: str, end: str) -> list[str]:
    """Return every day from start to end inclusive."""
    first = parse_day(start)
    last = parse_day(end)
    return [
        (first + timedelta(days=offset)).isoformat()
        for offset in range((last - first).days + 1)
    ]
