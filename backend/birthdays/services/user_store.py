from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from birthdays.core.errors import ConflictError, StoreError
from birthdays.core.logging_config import get_logger
from birthdays.models import User, utc_now

logger = get_logger(__name__)


class UserStore:
    """
    thin adapter over the users table

    the store never decides between create and update, callers do. a create
    that hits the unique constraint on name raises ConflictError, any other
    database failure raises StoreError after rolling the session back.
    """

    def __init__(self, session: Session):
        self.session = session

    def find_by_name(self, name: str) -> Optional[User]:
        try:
            return self.session.exec(select(User).where(User.name == name)).first()
        except SQLAlchemyError as e:
            self._fail("find", name, e)

    def create(self, name: str, date_of_birth: date) -> User:
        user = User(name=name, date_of_birth=date_of_birth)
        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info(f"user {name!r} already exists, create rejected")
            raise ConflictError(f"user {name!r} already exists") from e
        except SQLAlchemyError as e:
            self._fail("create", name, e)
        self.session.refresh(user)
        logger.info(f"created user {name!r}")
        return user

    def update(self, user: User, date_of_birth: date) -> User:
        logger.debug(f"updating user {user.name!r}: {user.date_of_birth} -> {date_of_birth}")
        user.date_of_birth = date_of_birth
        user.updated_at = utc_now()
        try:
            self.session.add(user)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("update", user.name, e)
        self.session.refresh(user)
        logger.info(f"updated user {user.name!r}")
        return user

    def _fail(self, operation: str, name: str, error: Exception):
        self.session.rollback()
        logger.error(f"{operation} failed for user {name!r}: {error}", exc_info=True)
        raise StoreError(f"{operation} failed for user {name!r}") from error
