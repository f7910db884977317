import calendar
from datetime import date, datetime
from typing import Union

def _occurrence(date_of_birth: date, year: int) -> date:
    """the birthday as observed in `year`; feb 29 falls on mar 1 outside leap years"""
    if date_of_birth.month == 2 and date_of_birth.day == 29 and not calendar.isleap(year):
        return date(year, 3, 1)
    return date_of_birth.replace(year=year)

def days_until_birthday(date_of_birth: Union[date, str], today: date) -> int:
    """whole calendar days from today until the next birthday, 0 on the day itself"""
    if isinstance(date_of_birth, str):
        date_of_birth = datetime.strptime(date_of_birth, "%Y-%m-%d").date()
    if isinstance(today, datetime):
        today = today.date()

    birthday = _occurrence(date_of_birth, today.year)
    if birthday < today:
        birthday = _occurrence(date_of_birth, today.year + 1)
    return (birthday - today).days

def birthday_message(name: str, days: int) -> str:
    if days == 0:
        return f"Hello, {name}! Happy birthday!"
    return f"Hello, {name}! Your birthday is in {days} day(s)"
