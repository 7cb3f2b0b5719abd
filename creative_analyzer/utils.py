import time
from datetime import date, datetime, timezone


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def now_iso() -> str:
    """Current UTC time as ISO-8601 (e.g. 2024-01-01T10:00:00.000Z)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_day(value: str | None) -> date | None:
    """Parse a report day ("2024-01-01" or a full ISO timestamp). None if unparsable."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
