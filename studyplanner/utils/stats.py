from datetime import date, timedelta
from typing import Iterable, Optional, Sequence


def summarize_progress(statuses: Iterable[str]) -> dict:
    """Count tasks by status.

    ``statuses`` holds one status string per task. Empty input gives all zeros.
    """
    counts = {"total": 0, "completed": 0, "in_progress": 0, "pending": 0}
    for status in statuses:
        counts["total"] += 1
        if status in counts:
            counts[status] += 1
    return counts


def compute_streaks(dates: Sequence[date], today: Optional[date] = None) -> dict:
    """Current/longest study streak from distinct session dates, most recent first.

    The current streak only counts runs that include ``today`` itself: position
    ``i`` must equal ``today - i days``, so a user whose last session was
    yesterday has a current streak of 0.
    """
    if today is None:
        today = date.today()

    current = 0
    for i, d in enumerate(dates):
        if d != today - timedelta(days=i):
            break
        current += 1

    longest = 1 if dates else 0
    run = 1
    for prev, curr in zip(dates, dates[1:]):
        if prev - curr == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return {
        "current_streak": current,
        "longest_streak": longest,
        "total_study_days": len(dates),
    }
