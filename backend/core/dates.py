# core/dates.py
from datetime import datetime, timezone
from typing import Optional

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def to_storage_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC datetime as kept in the database"""
    if value is None:
        return None
    return _as_utc(value).replace(tzinfo=None)

def _add_years(value: datetime, years: int) -> datetime:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return value.replace(year=value.year + years, day=28)

def get_current_age(
    date_of_birth: datetime,
    date_of_death: Optional[datetime] = None,
    now: Optional[datetime] = None
) -> int:
    """
    Age in whole years. For a deceased author the age is the difference
    between the year of death and the year of birth.
    """
    if date_of_death is not None:
        return date_of_death.year - date_of_birth.year

    birth = _as_utc(date_of_birth)
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    age = current.year - birth.year
    if current < _add_years(birth, age):
        age -= 1
    return age
