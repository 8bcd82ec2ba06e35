from __future__ import annotations
from typing import Dict, Optional

from .periods import DateLike, format_date

# Major Indian holidays for 2026. Some dates follow the lunar calendar and are approximate.
HOLIDAYS: Dict[str, str] = {
    "2026-01-26": "Republic Day",
    "2026-03-03": "Holi",
    "2026-03-20": "Eid-ul-Fitr",
    "2026-04-14": "Ambedkar Jayanti",
    "2026-08-15": "Independence Day",
    "2026-10-02": "Gandhi Jayanti",
    "2026-10-20": "Dussehra",
    "2026-11-08": "Diwali",
    "2026-12-25": "Christmas",
}


def holiday_for(d: DateLike | str) -> Optional[str]:
    """Holiday label for a date, datetime or YYYY-MM-DD string."""
    key = d if isinstance(d, str) else format_date(d)
    return HOLIDAYS.get(key)
