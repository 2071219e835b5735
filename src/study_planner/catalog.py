"""Subject and chapter catalog.

The catalog is an immutable value: every mutation returns the next catalog
and leaves the one passed in untouched. Invalid requests (blank names,
missing exam dates, unknown ids) are ignored and the same catalog comes back.
"""
import logging
import math
import random
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional

from study_planner.config import COLOR_PALETTE, MAX_PRIORITY, MIN_PRIORITY
from study_planner.models import Catalog, Chapter, Subject, as_date

logger = logging.getLogger(__name__)

_default_rng = random.Random()


def new_catalog() -> Catalog:
    return Catalog()


def get_subject(catalog: Catalog, subject_id: Optional[str]) -> Optional[Subject]:
    for subject in catalog.subjects:
        if subject.id == subject_id:
            return subject
    return None


def active_subject(catalog: Catalog) -> Optional[Subject]:
    return get_subject(catalog, catalog.active_subject_id)


def _clean_name(name) -> str:
    return name.strip() if isinstance(name, str) else ""


def _new_id(rng: random.Random) -> str:
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex


def add_subject(
    catalog: Catalog,
    name: str,
    exam_date: Optional[date],
    rng: Optional[random.Random] = None,
) -> Catalog:
    """Add a subject and make it the active one.

    The color is drawn from COLOR_PALETTE with ``rng`` so a seeded generator
    gives repeatable ids and colors.
    """
    name = _clean_name(name)
    if not name or not isinstance(exam_date, date):
        logger.debug("Ignoring add_subject(name=%r, exam_date=%r)", name, exam_date)
        return catalog
    rng = rng or _default_rng
    subject = Subject(
        id=_new_id(rng),
        name=name,
        exam_date=as_date(exam_date),
        color=rng.choice(COLOR_PALETTE),
    )
    logger.debug("Added subject %s (%s)", subject.name, subject.id)
    return Catalog(subjects=catalog.subjects + (subject,), active_subject_id=subject.id)


def remove_subject(catalog: Catalog, subject_id: str) -> Catalog:
    """Remove a subject and its chapters.

    If it was active, the first remaining subject becomes active.
    """
    if get_subject(catalog, subject_id) is None:
        logger.debug("Ignoring remove_subject for unknown id %r", subject_id)
        return catalog
    remaining = tuple(s for s in catalog.subjects if s.id != subject_id)
    active_id = catalog.active_subject_id
    if active_id == subject_id:
        active_id = remaining[0].id if remaining else None
    return Catalog(subjects=remaining, active_subject_id=active_id)


def select_subject(catalog: Catalog, subject_id: str) -> Catalog:
    if get_subject(catalog, subject_id) is None:
        logger.debug("Ignoring select_subject for unknown id %r", subject_id)
        return catalog
    return replace(catalog, active_subject_id=subject_id)


def _replace_subject(catalog: Catalog, subject: Subject) -> Catalog:
    subjects = tuple(subject if s.id == subject.id else s for s in catalog.subjects)
    return replace(catalog, subjects=subjects)


def _valid_priority(priority) -> bool:
    return (
        isinstance(priority, int)
        and not isinstance(priority, bool)
        and MIN_PRIORITY <= priority <= MAX_PRIORITY
    )


def _valid_hours(hours) -> bool:
    return (
        isinstance(hours, (int, float))
        and not isinstance(hours, bool)
        and math.isfinite(hours)
        and hours >= 0
    )


def add_chapter(
    catalog: Catalog,
    name: str,
    priority: int,
    estimated_hours: float,
    subject_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Catalog:
    """Append a chapter to ``subject_id``, or to the active subject when omitted."""
    name = _clean_name(name)
    subject = get_subject(catalog, subject_id or catalog.active_subject_id)
    if not name or subject is None:
        logger.debug("Ignoring add_chapter(name=%r) with no target subject", name)
        return catalog
    if not _valid_priority(priority) or not _valid_hours(estimated_hours):
        logger.debug(
            "Ignoring add_chapter(priority=%r, estimated_hours=%r)", priority, estimated_hours
        )
        return catalog
    chapter = Chapter(
        id=_new_id(rng or _default_rng),
        name=name,
        priority=priority,
        estimated_hours=estimated_hours,
    )
    subject = replace(subject, chapters=subject.chapters + (chapter,))
    return _replace_subject(catalog, subject)


def remove_chapter(catalog: Catalog, subject_id: str, chapter_id: str) -> Catalog:
    subject = get_subject(catalog, subject_id)
    if subject is None or not any(c.id == chapter_id for c in subject.chapters):
        logger.debug("Ignoring remove_chapter(%r, %r)", subject_id, chapter_id)
        return catalog
    chapters = tuple(c for c in subject.chapters if c.id != chapter_id)
    return _replace_subject(catalog, replace(subject, chapters=chapters))
