import random
from datetime import date

import pytest

from study_planner.catalog import add_chapter, add_subject, new_catalog


@pytest.fixture
def rng():
    """Seeded generator so ids and colors repeat between runs."""
    return random.Random(42)


@pytest.fixture
def today():
    return date(2026, 3, 2)


@pytest.fixture
def sample_catalog(rng):
    """Math (exam 2026-03-20) with two chapters, Physics (exam 2026-03-10) with one."""
    catalog = new_catalog()
    catalog = add_subject(catalog, "Math", date(2026, 3, 20), rng=rng)
    catalog = add_chapter(catalog, "Algebra", 3, 3, rng=rng)
    catalog = add_chapter(catalog, "Calculus", 5, 4, rng=rng)
    catalog = add_subject(catalog, "Physics", date(2026, 3, 10), rng=rng)
    catalog = add_chapter(catalog, "Optics", 2, 2.5, rng=rng)
    return catalog
