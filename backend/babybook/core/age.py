import calendar
from datetime import date, datetime
from typing import Optional, Tuple, Union


def parse_birth_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def age_parts(birth: date, today: date) -> Tuple[int, int, int]:
    """
    Calendar difference between ``birth`` and ``today`` as (years, months, days).

    Days borrow the length of the month before ``today``'s month, then months
    borrow from years.
    """
    years = today.year - birth.year
    months = today.month - birth.month
    days = today.day - birth.day

    if days < 0:
        months -= 1
        prev_year, prev_month = (today.year, today.month - 1) if today.month > 1 else (today.year - 1, 12)
        days += calendar.monthrange(prev_year, prev_month)[1]
    if months < 0:
        years -= 1
        months += 12

    return years, months, days


def format_age(birth_date: Union[str, date, datetime], today: Optional[date] = None) -> str:
    years, months, days = age_parts(parse_birth_date(birth_date), today or date.today())

    if years > 0:
        return f"{years}y {months}m {days}d"
    if months > 0:
        return f"{months} months {days} days"
    return f"{days} days old"
