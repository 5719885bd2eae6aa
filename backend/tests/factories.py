"""
Shared test constants and helpers.
"""

from datetime import date

# Fixed "today" so date-sensitive KPIs are deterministic
TODAY = date(2025, 12, 26)
YESTERDAY = "2025-12-25"


def stamp(clock: str, day: date = TODAY) -> str:
    """Naive local ISO timestamp on `day`, e.g. stamp("10:00:00")."""
    return f"{day.isoformat()}T{clock}"
