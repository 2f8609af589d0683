"""
Relative due-date resolution.

Phrases are resolved against an explicit reference instant so results are
reproducible. Calendar arithmetic is done with ``timedelta`` which rolls
month and year boundaries over correctly.
"""

import re
from datetime import datetime, timedelta
from typing import Optional

RELATIVE_DAYS_PATTERN = re.compile(r'in\s+(\d{1,2})\s+days?\b')


def extract_due_date(prompt: str, now: datetime, max_days: int = 99) -> Optional[datetime]:
    """
    Resolve a due date from the full prompt.

    Args:
        prompt: Original command text (not a single clause)
        now: Reference instant
        max_days: Largest "in N days" offset honoured

    Returns:
        Absolute timestamp, or None when no date phrase is present
    """
    lower = prompt.lower()

    if 'today' in lower:
        return now
    if 'tomorrow' in lower:
        return now + timedelta(days=1)

    match = RELATIVE_DAYS_PATTERN.search(lower)
    if match:
        days = int(match.group(1))
        if days <= max_days:
            return now + timedelta(days=days)

    return None
