# tests/unit/uow/test_uow.py
from __future__ import annotations

import pytest

from ecommerce.models.user import User
from ecommerce.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


def test_rw_uow_commits_on_success(session):
    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(email="rw@example.com", name="Rw", password="secret123"))

    assert session.query(User).filter_by(email="rw@example.com").count() == 1


def test_rw_uow_rolls_back_on_error(session):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(email="boom@example.com", name="Boom", password="secret123"))
            raise RuntimeError("boom")

    assert session.query(User).filter_by(email="boom@example.com").count() == 0


def test_ro_uow_reads():
    user = UserFactory()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        found = uow.users.get_active_by_public_id(user.public_id)

    assert found is not None
    assert found.email == user.email


def test_ro_uow_blocks_flush():
    with pytest.raises(RuntimeError, match="flush blocked"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.users.add(User(email="ro@example.com", name="Ro", password="secret123"))


def test_ro_uow_forbids_commit():
    with pytest.raises(RuntimeError, match="does not allow commit"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.commit()


def test_ro_uow_removes_guard_on_exit(session):
    with SQLAlchemyReadOnlyUnitOfWork():
        pass

    session.add(User(email="after@example.com", name="After", password="secret123"))
    session.flush()


def test_ro_uow_back_to_back_lookups():
    user = UserFactory()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        first = uow.users.get_active_by_public_id(user.public_id)
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        second = uow.users.get_active_by_email(user.email)

    assert first is not None and second is not None
    assert first.public_id == second.public_id


def test_rw_uow_after_ro_uow(session):
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.users.get_active_by_email("later@example.com") is None

    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(email="later@example.com", name="Later", password="secret123"))

    assert session.query(User).filter_by(email="later@example.com").count() == 1
