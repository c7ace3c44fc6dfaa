import sqlite3
from datetime import date

import pytest

from daylog.action.repository import (
    ActionRepo,
    CategoryRepo,
    RecordNotFoundError,
    connect,
)
from daylog.action.service import ActionService, CategoryService


@pytest.fixture
def conn():
    connection = connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def category_service(conn):
    return CategoryService(CategoryRepo(conn))


@pytest.fixture
def action_service(conn):
    return ActionService(ActionRepo(conn))


def test_category_lifecycle(category_service):
    cat = category_service.create("Work")
    assert category_service.list() == [cat]
    renamed = category_service.update(cat.id, "Job")
    assert renamed.name == "Job"
    assert category_service.list() == [renamed]
    category_service.delete(cat.id)
    assert category_service.list() == []


def test_category_update_missing_raises(category_service):
    with pytest.raises(RecordNotFoundError):
        category_service.update(99, "Nothing")


def test_add_and_list_actions(category_service, action_service):
    cat = category_service.create("Sport")
    day = date(2024, 6, 15)
    act = action_service.add(day, cat.id, 1.25)
    assert act.id > 0
    assert (act.date, act.category_id, act.hours) == (day, cat.id, 1.25)
    listed = action_service.list(day)
    assert [a.id for a in listed] == [act.id]
    assert listed[0].category == cat


def test_add_negative_hours_raises(category_service, action_service):
    cat = category_service.create("Sport")
    with pytest.raises(sqlite3.IntegrityError):
        action_service.add(date(2024, 6, 15), cat.id, -0.5)


def test_update_and_delete_action(category_service, action_service):
    cat = category_service.create("Sport")
    day = date(2024, 6, 15)
    act = action_service.add(day, cat.id, 1.0)
    assert action_service.update(act.id, 3.0).hours == 3.0
    action_service.delete(act.id)
    assert action_service.list(day) == []


def test_update_missing_action_raises(action_service):
    with pytest.raises(RecordNotFoundError):
        action_service.update(5, 2.0)