"""Planner defaults, overridable from the environment."""
import math
import os

# Rich color names, one per subject badge.
COLOR_PALETTE = (
    "red",
    "green",
    "blue",
    "magenta",
    "cyan",
    "yellow",
    "bright_red",
    "bright_blue",
)

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = 3

DEFAULT_DAILY_HOURS = 4.0
DAILY_HOURS_ENV = "STUDY_PLANNER_DAILY_HOURS"
LOG_LEVEL_ENV = "STUDY_PLANNER_LOG_LEVEL"


def get_default_daily_hours() -> float:
    """Daily budget from STUDY_PLANNER_DAILY_HOURS, else DEFAULT_DAILY_HOURS."""
    raw = os.environ.get(DAILY_HOURS_ENV)
    if not raw:
        return DEFAULT_DAILY_HOURS
    try:
        hours = float(raw)
    except ValueError:
        return DEFAULT_DAILY_HOURS
    return hours if math.isfinite(hours) and hours > 0 else DEFAULT_DAILY_HOURS


def get_log_level() -> str | None:
    level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    return level or None
