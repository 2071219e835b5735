"""Read-only statistics over a generated plan."""
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from study_planner.models import StudySession, Subject, as_date


def hours_by_date(plan: list[StudySession]) -> dict[date, float]:
    totals = defaultdict(float)
    for session in plan:
        totals[session.date] += session.hours
    return dict(totals)


def hours_by_subject(plan: list[StudySession]) -> dict[str, float]:
    totals = defaultdict(float)
    for session in plan:
        totals[session.subject_name] += session.hours
    return dict(totals)


def hours_by_chapter(plan: list[StudySession]) -> dict[tuple[str, str], float]:
    """Total planned hours keyed by (subject name, chapter name)."""
    totals = defaultdict(float)
    for session in plan:
        totals[(session.subject_name, session.chapter_name)] += session.hours
    return dict(totals)


def plan_end_date(plan: list[StudySession]) -> Optional[date]:
    return plan[-1].date if plan else None


def total_hours(subjects: Iterable[Subject]) -> float:
    return sum(c.estimated_hours for s in subjects for c in s.chapters)


def days_until_exam(subject: Subject, today: Optional[date] = None) -> Optional[int]:
    """Days from ``today`` to the exam; negative once it has passed, None without a date."""
    exam_date = as_date(subject.exam_date)
    if exam_date is None:
        return None
    return (exam_date - as_date(today or date.today())).days


def sessions_after_exam(plan: list[StudySession], subjects: Iterable[Subject]) -> list[StudySession]:
    """Sessions that fall on or after their subject's exam date.

    Subjects are matched by name, as that is all a session carries. When
    several subjects share a name, the earliest of their exam dates is used,
    so a session is flagged if it is late for any of them.
    """
    exam_dates = {}
    for subject in subjects:
        exam_date = as_date(subject.exam_date)
        if exam_date is None:
            continue
        known = exam_dates.get(subject.name)
        exam_dates[subject.name] = exam_date if known is None else min(known, exam_date)
    return [
        session for session in plan
        if session.subject_name in exam_dates and session.date >= exam_dates[session.subject_name]
    ]
