"""Monthly expiration schedule and expiry display helpers.

Listed monthly options expire on the third Friday of the month. All dates
are ISO ``YYYY-MM-DD`` strings so they can key a chain directly.
"""

import logging
from datetime import date, timedelta
from typing import List

logger = logging.getLogger("chain_synth.expirations")

DEFAULT_EXPIRATION_COUNT = 5
FALLBACK_DAYS_AHEAD = 7
FRIDAY = 4


def third_friday(year: int, month: int) -> date:
    """Third Friday of the given month (first Friday + 14 days)."""
    first = date(year, month, 1)
    days_until_friday = (FRIDAY - first.weekday()) % 7
    return first + timedelta(days=days_until_friday + 14)


def get_next_expirations(
    count: int = DEFAULT_EXPIRATION_COUNT,
    today: date | None = None,
) -> List[str]:
    """Next ``count`` monthly expirations strictly after ``today``.

    Scans at most ``2 * count`` months starting with the current one. The
    current month's third Friday is skipped once it is today or past.

    Args:
        count: Number of expirations wanted
        today: Reference date (defaults to date.today())

    Returns:
        Strictly increasing ISO dates. If nothing qualifies, a single date
        FALLBACK_DAYS_AHEAD days out.

    Example:
        >>> get_next_expirations(3, today=date(2026, 10, 19))
        ['2026-11-20', '2026-12-18', '2027-01-15']
    """
    today = today or date.today()
    year, month = today.year, today.month

    expirations: List[str] = []
    for _ in range(count * 2):
        expiry = third_friday(year, month)
        iso = expiry.isoformat()
        if expiry > today and iso not in expirations:
            expirations.append(iso)
            if len(expirations) >= count:
                break

        month += 1
        if month > 12:
            month = 1
            year += 1

    if not expirations:
        fallback = (today + timedelta(days=FALLBACK_DAYS_AHEAD)).isoformat()
        logger.warning("No monthly expiration found after %s, using %s", today, fallback)
        return [fallback]

    return expirations


def days_to_expiry(expiry: str, today: date | None = None) -> int:
    """Calendar days from ``today`` to ``expiry`` (negative once past)."""
    today = today or date.today()
    return (date.fromisoformat(expiry) - today).days


def format_expiry_label(expiry: str) -> str:
    """Long label, e.g. '2026-11-20' -> 'Nov 20, 2026'."""
    d = date.fromisoformat(expiry)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_expiry_short(expiry: str, today: date | None = None) -> str:
    """Compact days-to-expiry label: 'Expired', '1 DTE' or 'N DTE'."""
    days = days_to_expiry(expiry, today)
    if days <= 0:
        return "Expired"
    if days == 1:
        return "1 DTE"
    return f"{days} DTE"
