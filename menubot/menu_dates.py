from datetime import date
from typing import List, Tuple

from .config import Config


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
DANISH_WEEKDAYS = ["mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"]

# page layout of the weekly menu document
GREEN_NOON_DANISH_PAGE = 0
GREEN_NOON_ENGLISH_PAGE = 1
FULL_NOON_DANISH_PAGE = 2
FULL_NOON_ENGLISH_PAGE = 3


def _sunday_based_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def get_week_number(day: date) -> int:
    """Week count since January 1st, offset by the weekday January 1st falls on (Sunday = 0)."""
    first_of_jan = date(day.year, 1, 1)
    days_since = (day - first_of_jan).days
    return (days_since + _sunday_based_weekday(first_of_jan) + 1) // 7


def get_week_marker(day: date) -> str:
    return f"_u{get_week_number(day)}"


def get_weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def get_danish_weekday(day: date) -> str:
    return DANISH_WEEKDAYS[day.weekday()]


def get_weekday_markers(day: date) -> Tuple[str, str]:
    danish = get_danish_weekday(day)
    return danish, danish[:3]


def is_full_noon(day: date, config: Config) -> bool:
    return get_weekday_name(day) in config.full_noon_days


def is_green_noon(day: date, config: Config) -> bool:
    if config.green_noon_days is None:
        return not is_full_noon(day, config)
    return get_weekday_name(day) in config.green_noon_days


def get_page_indices(day: date, config: Config) -> List[int]:
    indices = []
    if is_green_noon(day, config):
        indices.append(GREEN_NOON_DANISH_PAGE if config.is_danish else GREEN_NOON_ENGLISH_PAGE)
    if is_full_noon(day, config):
        indices.append(FULL_NOON_DANISH_PAGE if config.is_danish else FULL_NOON_ENGLISH_PAGE)
    return indices
