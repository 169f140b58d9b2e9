"""
Statistics Deriver Module.

Turns a user's raw mood history into a UserStats summary.
All window and streak arithmetic works on calendar dates, so two entries on
the same day always count as one active day regardless of time of day.
"""
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from ..config import MoodPolicy
from ..logger import log, Component
from .types import MoodEvent, UserStats

MOOD_MIN = 1
MOOD_MAX = 10

IMPROVEMENT_WINDOW = 7
CONSISTENCY_WINDOW_DAYS = 28


def event_date(created_at: datetime, now: datetime) -> date:
    """Calendar date of a timestamp, seen from the timezone of `now`."""
    if created_at.tzinfo is not None and now.tzinfo is not None:
        created_at = created_at.astimezone(now.tzinfo)
    return created_at.date()


def event_sort_key(created_at: datetime) -> float:
    """Orderable instant for a timestamp. Naive values are read as local time."""
    return created_at.timestamp()


def _sanitize(events: Iterable[MoodEvent], policy: MoodPolicy) -> list[MoodEvent]:
    """Drop or clamp events whose mood is outside the 1-10 scale."""
    clean = []
    for event in events:
        if MOOD_MIN <= event.mood <= MOOD_MAX:
            clean.append(event)
            continue

        log.warn("Malformed mood value", component=Component.STATS,
                 event=event.id, mood=event.mood, policy=policy.value)
        if policy is MoodPolicy.CLAMP:
            clean.append(replace(event, mood=max(MOOD_MIN, min(MOOD_MAX, event.mood))))
    return clean


def calculate_streaks(unique_dates: list[date], today: date) -> tuple[int, int]:
    """
    Calculate current and longest streak.

    Args:
        unique_dates: Distinct active dates, newest first
        today: Anchor date for the current streak

    Returns:
        tuple: (current_streak, longest_streak)
    """
    if not unique_dates:
        return 0, 0

    # Current streak: position i must be exactly i days before today
    current = 0
    past_dates = [d for d in unique_dates if d <= today]
    for i, day in enumerate(past_dates):
        if (today - day).days == i:
            current += 1
        else:
            break

    # Longest streak: the run still open when the loop ends counts too
    longest = 0
    run = 1
    for newer, older in zip(unique_dates, unique_dates[1:]):
        if (newer - older).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    return current, longest


def calculate_mood_improvement(events_desc: list[MoodEvent], window: int = IMPROVEMENT_WINDOW) -> float:
    """Mean of the latest `window` entries minus mean of the `window` before them."""
    if len(events_desc) < window * 2:
        return 0.0

    recent = events_desc[:window]
    previous = events_desc[window:window * 2]

    recent_avg = sum(e.mood for e in recent) / len(recent)
    previous_avg = sum(e.mood for e in previous) / len(previous)

    return recent_avg - previous_avg


def calculate_weekly_consistency(
    active_dates: set[date],
    today: date,
    window_days: int = CONSISTENCY_WINDOW_DAYS
) -> float:
    """Share of days with an entry in the trailing window ending today."""
    in_window = {d for d in active_dates if 0 <= (today - d).days < window_days}
    if not in_window:
        return 0.0
    return len(in_window) / window_days


def derive_stats(
    events: Iterable[MoodEvent],
    now: Optional[datetime] = None,
    mood_policy: MoodPolicy = MoodPolicy.EXCLUDE,
    improvement_window: int = IMPROVEMENT_WINDOW,
    consistency_window_days: int = CONSISTENCY_WINDOW_DAYS
) -> UserStats:
    """
    Derive a UserStats summary from mood history.

    The input may be unsorted and is never mutated. An empty history gives
    the all-zero summary.
    """
    now = now or datetime.now()
    valid = _sanitize(events, mood_policy)

    if not valid:
        return UserStats()

    events_desc = sorted(valid, key=lambda e: event_sort_key(e.created_at), reverse=True)
    today = event_date(now, now)

    dates = [event_date(e.created_at, now) for e in events_desc]
    active_dates = set(dates)
    unique_dates = sorted(active_dates, reverse=True)

    current_streak, longest_streak = calculate_streaks(unique_dates, today)

    stats = UserStats(
        total_entries=len(events_desc),
        current_streak=current_streak,
        longest_streak=longest_streak,
        average_mood=sum(e.mood for e in events_desc) / len(events_desc),
        mood_improvement=calculate_mood_improvement(events_desc, improvement_window),
        journal_entries=sum(1 for e in events_desc if e.has_journal),
        ai_interactions=sum(1 for e in events_desc if e.has_ai_response),
        days_active=len(active_dates),
        weekly_consistency=calculate_weekly_consistency(active_dates, today, consistency_window_days)
    )

    log.stats("Derived stats",
              entries=stats.total_entries,
              streak=stats.current_streak,
              longest=stats.longest_streak,
              days=stats.days_active)
    return stats
