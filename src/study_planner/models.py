"""Data classes for the study planner domain model."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Chapter:
    id: str
    name: str
    priority: int
    estimated_hours: float


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    exam_date: Optional[date]
    color: str
    chapters: tuple[Chapter, ...] = ()


@dataclass(frozen=True)
class StudySession:
    date: date
    subject_name: str
    chapter_name: str
    hours: float
    color: str

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()

    def to_dict(self) -> dict:
        return {
            "date": self.iso_date,
            "subject_name": self.subject_name,
            "chapter_name": self.chapter_name,
            "hours": self.hours,
            "color": self.color,
        }


@dataclass(frozen=True)
class Catalog:
    subjects: tuple[Subject, ...] = field(default_factory=tuple)
    active_subject_id: Optional[str] = None


def as_date(value: Optional[date]) -> Optional[date]:
    """Drop the time part of a datetime; plain dates and None pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value
