import sqlite3
from datetime import date

import pytest

from daylog.action.models import ActionCategory, DayAction
from daylog.action.repository import (
    ActionRepo,
    CategoryRepo,
    RecordNotFoundError,
    connect,
)


@pytest.fixture
def conn():
    connection = connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def categories(conn):
    return CategoryRepo(conn)


@pytest.fixture
def actions(conn):
    return ActionRepo(conn)


def test_created_categories_are_listed_in_order(categories):
    first = categories.create("Work")
    second = categories.create("Sport")
    assert first.id < second.id
    assert categories.list() == [first, second]


def test_duplicate_category_name_is_rejected(categories):
    categories.create("Work")
    with pytest.raises(sqlite3.IntegrityError):
        categories.create("Work")


def test_update_category_renames(categories):
    cat = categories.create("Work")
    updated = categories.update(cat.id, "Job")
    assert updated == ActionCategory(id=cat.id, name="Job")
    assert categories.list() == [updated]


def test_update_missing_category_raises(categories):
    with pytest.raises(RecordNotFoundError):
        categories.update(42, "Nothing")


def test_delete_category(categories):
    cat = categories.create("Work")
    keep = categories.create("Sport")
    categories.delete(cat.id)
    assert categories.list() == [keep]


def test_delete_missing_category_leaves_table_alone(categories):
    cat = categories.create("Work")
    categories.delete(cat.id + 100)
    assert categories.list() == [cat]


def test_actions_are_listed_by_date_with_category(categories, actions):
    cat = categories.create("Reading")
    day = date(2024, 3, 10)
    created = actions.create(DayAction(date=day, category_id=cat.id, hours=2.5))
    actions.create(DayAction(date=date(2024, 3, 11), category_id=cat.id, hours=1.0))

    listed = actions.list_by_date(day)
    assert listed == [
        DayAction(id=created.id, date=day, category_id=cat.id, hours=2.5, category=cat)
    ]


def test_create_assigns_increasing_ids(categories, actions):
    cat = categories.create("Reading")
    day = date(2024, 1, 1)
    first = actions.create(DayAction(date=day, category_id=cat.id, hours=1.0))
    second = actions.create(DayAction(date=day, category_id=cat.id, hours=3.0))
    assert 0 < first.id < second.id
    assert [a.id for a in actions.list_by_date(day)] == [first.id, second.id]


def test_negative_hours_are_rejected(categories, actions):
    cat = categories.create("Reading")
    with pytest.raises(sqlite3.IntegrityError):
        actions.create(DayAction(date=date(2024, 1, 1), category_id=cat.id, hours=-1.0))


def test_update_hours(categories, actions):
    cat = categories.create("Reading")
    day = date(2024, 2, 2)
    act = actions.create(DayAction(date=day, category_id=cat.id, hours=1.0))
    updated = actions.update_hours(act.id, 4.0)
    assert updated.hours == 4.0
    assert updated.date == day
    assert actions.list_by_date(day)[0].hours == 4.0


def test_update_hours_missing_raises(actions):
    with pytest.raises(RecordNotFoundError):
        actions.update_hours(7, 1.0)


def test_delete_action(categories, actions):
    cat = categories.create("Reading")
    day = date(2024, 2, 2)
    act = actions.create(DayAction(date=day, category_id=cat.id, hours=1.0))
    actions.delete(act.id)
    assert actions.list_by_date(day) == []


def test_data_persists_in_file(tmp_path):
    path = str(tmp_path / "actions.db")
    first = connect(path)
    cat = CategoryRepo(first).create("Work")
    first.close()

    second = connect(path)
    assert CategoryRepo(second).list() == [cat]
    second.close()