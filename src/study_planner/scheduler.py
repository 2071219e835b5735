"""Greedy day-by-day study scheduler.

Chapters are ordered by exam date (soonest first) then priority (highest
first), and poured into consecutive calendar days of ``daily_hours`` each.
A chapter that doesn't fit in what is left of a day spills into the next.
"""
import logging
import math
from datetime import date, timedelta
from typing import Iterable, NamedTuple, Optional

from study_planner.models import StudySession, Subject, as_date

logger = logging.getLogger(__name__)

# Float residue below this is treated as zero.
EPSILON = 1e-9


class InvalidBudgetError(ValueError):
    """Raised when the daily study budget is not a positive number."""


class InvalidChapterError(ValueError):
    """Raised when a chapter's estimated hours are negative or not a finite number."""


class ChapterSlot(NamedTuple):
    subject_name: str
    exam_date: Optional[date]
    color: str
    chapter_name: str
    priority: int
    estimated_hours: float


class _Cursor(NamedTuple):
    day: date
    hours_left: float


def flatten_chapters(subjects: Iterable[Subject]) -> list[ChapterSlot]:
    """One slot per chapter, in subject-then-chapter insertion order."""
    return [
        ChapterSlot(
            subject_name=subject.name,
            exam_date=as_date(subject.exam_date),
            color=subject.color,
            chapter_name=chapter.name,
            priority=chapter.priority,
            estimated_hours=chapter.estimated_hours,
        )
        for subject in subjects
        for chapter in subject.chapters
    ]


def sort_key(slot: ChapterSlot) -> tuple[date, int]:
    # A subject without an exam date is treated as the most urgent.
    return (slot.exam_date or date.min, -slot.priority)


def _check_budget(daily_hours) -> float:
    if isinstance(daily_hours, bool) or not isinstance(daily_hours, (int, float)):
        raise InvalidBudgetError(f"daily_hours must be a number, got {daily_hours!r}")
    if math.isnan(daily_hours) or daily_hours <= 0:
        raise InvalidBudgetError(f"daily_hours must be positive, got {daily_hours!r}")
    return daily_hours


def _check_hours(slots: list[ChapterSlot]) -> None:
    for slot in slots:
        hours = slot.estimated_hours
        if (
            isinstance(hours, bool)
            or not isinstance(hours, (int, float))
            or not math.isfinite(hours)
            or hours < 0
        ):
            raise InvalidChapterError(
                f"{slot.subject_name}/{slot.chapter_name}: estimated_hours must be "
                f"a finite non-negative number, got {hours!r}"
            )


def _spend(cursor: _Cursor, hours: float, daily_hours: float) -> _Cursor:
    """Cursor after spending ``hours`` on the current day."""
    left = cursor.hours_left - hours
    if left <= EPSILON:
        return _Cursor(cursor.day + timedelta(days=1), daily_hours)
    return _Cursor(cursor.day, left)


def generate_plan(
    subjects: Iterable[Subject],
    daily_hours: float,
    today: Optional[date] = None,
) -> list[StudySession]:
    """Build the full list of study sessions for ``subjects``.

    Args:
        subjects: Subjects with their chapters, in insertion order.
        daily_hours: Study hours available per calendar day. Must be > 0.
        today: First day of the plan; defaults to ``date.today()``.

    Returns:
        Sessions in the order produced, which is also date order.

    Raises:
        InvalidBudgetError: If ``daily_hours`` is not a positive number.
        InvalidChapterError: If a chapter's hours are negative or not finite.
    """
    daily_hours = _check_budget(daily_hours)
    slots = flatten_chapters(subjects)
    _check_hours(slots)
    slots.sort(key=sort_key)
    if not slots:
        return []

    cursor = _Cursor(as_date(today or date.today()), daily_hours)
    plan = []
    for slot in slots:
        remaining = slot.estimated_hours
        # A remainder at or below EPSILON is float residue, not study time.
        while remaining > EPSILON:
            take = min(remaining, cursor.hours_left)
            plan.append(StudySession(
                date=cursor.day,
                subject_name=slot.subject_name,
                chapter_name=slot.chapter_name,
                hours=take,
                color=slot.color,
            ))
            remaining -= take
            cursor = _spend(cursor, take, daily_hours)

    logger.debug(
        "Planned %d chapters into %d sessions through %s",
        len(slots), len(plan), plan[-1].date if plan else None,
    )
    return plan
