from datetime import date

from birthdays.core.errors import ConflictError, NotFoundError
from birthdays.core.logging_config import get_logger
from birthdays.models import User
from birthdays.services.countdown import birthday_message, days_until_birthday
from birthdays.services.user_store import UserStore

logger = get_logger(__name__)

def save_birthday(store: UserStore, name: str, date_of_birth: date) -> User:
    """
    create the user or overwrite their date of birth

    the unique constraint on name is authoritative: when a concurrent request
    creates the same name between our lookup and our insert, the conflict is
    retried as an update.
    """
    existing = store.find_by_name(name)
    if existing is not None:
        return store.update(existing, date_of_birth)

    try:
        return store.create(name, date_of_birth)
    except ConflictError:
        logger.warning(f"concurrent create for {name!r}, retrying as update")

    existing = store.find_by_name(name)
    if existing is None:
        # deleted externally after winning the race
        raise ConflictError(f"user {name!r} disappeared after a create conflict")
    return store.update(existing, date_of_birth)

def get_birthday_message(store: UserStore, name: str, today: date) -> str:
    """greeting for the user with the countdown to their next birthday"""
    user = store.find_by_name(name)
    if user is None:
        raise NotFoundError(f"user {name!r} not found")
    return birthday_message(user.name, days_until_birthday(user.date_of_birth, today))
