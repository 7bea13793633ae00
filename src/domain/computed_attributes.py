"""Profile attributes derived from stored dates.

Nothing here reads the wall clock: callers pass ``today`` so the results are
reproducible.
"""

from datetime import date, datetime
from typing import Optional


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_birth_year(birth_date: Optional[str]) -> Optional[int]:
    """Year part of a YYYYMMDD birth date, or None when unknown."""
    if not birth_date:
        return None
    return int(birth_date[:4])


def compute_age(birth_date: Optional[str], today: date) -> Optional[int]:
    """Age in full years on ``today``.

    One year is subtracted while this year's birthday has not happened yet.
    Returns None when the birth date is unknown.
    """
    if not birth_date:
        return None

    today = _as_date(today)
    year = int(birth_date[:4])
    month = int(birth_date[4:6])
    day = int(birth_date[6:8])

    age = today.year - year
    if (today.month, today.day) < (month, day):
        age -= 1
    return age


def compute_days_since_joined(created_at: Optional[datetime], today: date) -> int:
    """Calendar days since joining, counting the joining day as day 1."""
    if created_at is None:
        return 1
    joined = _as_date(created_at)
    return (_as_date(today) - joined).days + 1


ADULT_AGE = 19


def compute_is_adult(birth_date: Optional[str], today: date) -> Optional[bool]:
    """Whether the user is at least 19 on ``today``; None when unknown."""
    age = compute_age(birth_date, today)
    if age is None:
        return None
    return age >= ADULT_AGE


def compute_age_group(birth_date: Optional[str], today: date) -> Optional[str]:
    """Age bracket label: 10대, 20대, 30대 or 40대 이상.

    Anyone under 20 falls in 10대. Returns None when the birth date is unknown.
    """
    age = compute_age(birth_date, today)
    if age is None:
        return None
    if age < 20:
        return "10대"
    if age < 30:
        return "20대"
    if age < 40:
        return "30대"
    return "40대 이상"


def compute_service_usage_period(created_at: Optional[datetime], today: date) -> str:
    """Membership day label, e.g. ``3일차`` on the third day."""
    return f"{compute_days_since_joined(created_at, today)}일차"
