"""
input validation for usernames and dates of birth

username rules are checked in order and the first failing rule decides the
reported message, so a name that is too long and contains digits reports the
length error.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from birthdays.core.errors import ValidationError
from birthdays.core.logging_config import get_logger

logger = get_logger(__name__)

MAX_USERNAME_LENGTH = 255
DATE_FORMAT = "%Y-%m-%d"
DATE_OF_BIRTH_MESSAGE = "Date of birth must be before today and in YYYY-MM-DD format."

_LETTERS_ONLY = re.compile(r"[A-Za-z]+")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass
class ValidationResult:
    valid: bool
    message: Optional[str] = None
    status_code: Optional[int] = None


# (rule that must hold, message reported when it does not)
USERNAME_RULES: list[tuple[Callable[[str], bool], str]] = [
    (lambda name: name != "", "Username cannot be empty."),
    (lambda name: len(name) <= MAX_USERNAME_LENGTH,
     f"Username is too long. Maximum length is {MAX_USERNAME_LENGTH} characters."),
    (lambda name: _LETTERS_ONLY.fullmatch(name) is not None, "Invalid username. Only letters are allowed."),
]


def validate_username(username: str) -> ValidationResult:
    for rule, message in USERNAME_RULES:
        if not rule(username):
            logger.warning(f"rejected username {username[:MAX_USERNAME_LENGTH]!r}: {message}")
            return ValidationResult(valid=False, message=message, status_code=ValidationError.status_code)
    return ValidationResult(valid=True)


def parse_date_of_birth(value, today: date) -> date:
    """parse a YYYY-MM-DD string and reject dates after today"""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        logger.warning(f"rejected date of birth {value!r}: not YYYY-MM-DD")
        raise ValidationError(DATE_OF_BIRTH_MESSAGE)

    try:
        date_of_birth = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        logger.warning(f"rejected date of birth {value!r}: not a calendar date")
        raise ValidationError(DATE_OF_BIRTH_MESSAGE)

    if date_of_birth > today:
        logger.warning(f"rejected date of birth {date_of_birth}: after {today}")
        raise ValidationError(DATE_OF_BIRTH_MESSAGE)

    return date_of_birth
