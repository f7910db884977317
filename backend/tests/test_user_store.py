from datetime import date, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from birthdays.core.errors import ConflictError, NotFoundError, StoreError
from birthdays.models import User
from birthdays.services.birthdays import get_birthday_message, save_birthday
from birthdays.services.user_store import UserStore


def test_find_missing_user(store):
    assert store.find_by_name("Alice") is None


def test_create_and_find(store):
    created = store.create("Alice", date(1990, 5, 15))
    assert created.id is not None

    found = store.find_by_name("Alice")
    assert found.id == created.id
    assert found.date_of_birth == date(1990, 5, 15)


def test_names_are_case_sensitive(store):
    store.create("Alice", date(1990, 5, 15))
    assert store.find_by_name("alice") is None


def test_create_duplicate_name_conflicts(store, session):
    store.create("Alice", date(1990, 5, 15))
    with pytest.raises(ConflictError):
        store.create("Alice", date(1991, 1, 1))

    # session is usable again after the rollback
    assert len(session.exec(select(User)).all()) == 1
    assert store.find_by_name("Alice").date_of_birth == date(1990, 5, 15)


def test_update(store):
    user = store.create("Alice", date(1990, 5, 15))
    created_at = user.created_at

    updated = store.update(user, date(1991, 7, 26))
    assert updated.date_of_birth == date(1991, 7, 26)
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_database_failure_raises_store_error(store, session, monkeypatch):
    def broken_exec(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(session, "exec", broken_exec)
    with pytest.raises(StoreError):
        store.find_by_name("Alice")


def test_save_birthday_creates_then_updates(store, session):
    save_birthday(store, "Alice", date(1990, 5, 15))
    save_birthday(store, "Alice", date(1991, 7, 26))

    users = session.exec(select(User)).all()
    assert len(users) == 1
    assert users[0].date_of_birth == date(1991, 7, 26)


class RacingStore(UserStore):
    """misses the first lookup, as if another request created the user right after it"""

    def __init__(self, session):
        super().__init__(session)
        self.lookups = 0

    def find_by_name(self, name):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return super().find_by_name(name)


def test_save_birthday_retries_conflict_as_update(store, session):
    store.create("Alice", date(1990, 5, 15))

    racing = RacingStore(session)
    user = save_birthday(racing, "Alice", date(1991, 7, 26))

    assert user.date_of_birth == date(1991, 7, 26)
    assert racing.lookups == 2
    assert len(session.exec(select(User)).all()) == 1


def test_get_birthday_message(store):
    store.create("David", date(1985, 7, 25))
    assert get_birthday_message(store, "David", date(2024, 7, 25)) == "Hello, David! Happy birthday!"
    assert get_birthday_message(store, "David", date(2024, 7, 24)) == "Hello, David! Your birthday is in 1 day(s)"


def test_get_birthday_message_unknown_user(store):
    with pytest.raises(NotFoundError):
        get_birthday_message(store, "Frank", date(2024, 7, 25))


def test_new_user_timestamps_are_timezone_aware():
    user = User(name="Alice", date_of_birth=date(1990, 5, 15))
    assert user.created_at.tzinfo is timezone.utc
    assert user.updated_at.tzinfo is timezone.utc


def test_update_failure_raises_store_error_and_rolls_back(store, session, monkeypatch):
    user = store.create("Alice", date(1990, 5, 15))
    rollbacks = []
    rollback = session.rollback

    def broken_commit():
        raise OperationalError("UPDATE", {}, Exception("connection lost"))

    def tracking_rollback():
        rollbacks.append(1)
        rollback()

    monkeypatch.setattr(session, "commit", broken_commit)
    monkeypatch.setattr(session, "rollback", tracking_rollback)

    with pytest.raises(StoreError):
        store.update(user, date(1991, 7, 26))
    assert rollbacks == [1]

    monkeypatch.undo()
    assert store.find_by_name("Alice").date_of_birth == date(1990, 5, 15)
