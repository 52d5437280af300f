"""Display helpers for release metadata."""
from datetime import datetime

SIZE_UNITS = ["B", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """Format a byte count with 1024-based units, e.g. "1.5 MB"."""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[unit]}"


def format_date(timestamp: str) -> str:
    """Format an ISO 8601 timestamp as "Jan 5, 2024"."""
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_number(n: int) -> str:
    return f"{n:,}"
