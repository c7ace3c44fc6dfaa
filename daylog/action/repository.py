"""SQLite storage for action categories and day actions."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from datetime import date, datetime

from daylog.action.models import ActionCategory, DayAction

_SCHEMA = """
CREATE TABLE IF NOT EXISTS action_categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS day_actions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    category_id INTEGER NOT NULL REFERENCES action_categories(id),
    hours REAL NOT NULL CHECK (hours >= 0)
);
"""


class RecordNotFoundError(LookupError):
    """Raised when a requested row does not exist."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


def connect(path: str) -> sqlite3.Connection:
    """Open the database at ``path`` in WAL mode and create the tables."""
    conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.executescript(_SCHEMA)
    return conn


def _day_key(day: date) -> str:
    return (day.date() if isinstance(day, datetime) else day).isoformat()


def _action(row: sqlite3.Row, **changes) -> DayAction:
    action = DayAction(
        id=row["id"],
        date=date.fromisoformat(row["date"]),
        category_id=row["category_id"],
        hours=row["hours"],
    )
    return replace(action, **changes)


class CategoryRepo:
    """Rows of the ``action_categories`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def list(self) -> list[ActionCategory]:
        rows = self._conn.execute("SELECT id, name FROM action_categories ORDER BY id")
        return [ActionCategory(id=row["id"], name=row["name"]) for row in rows]

    def create(self, name: str) -> ActionCategory:
        cursor = self._conn.execute("INSERT INTO action_categories (name) VALUES (?)", (name,))
        return ActionCategory(id=cursor.lastrowid, name=name)

    def update(self, category_id: int, name: str) -> ActionCategory:
        row = self._conn.execute(
            "SELECT id FROM action_categories WHERE id = ?", (category_id,)
        ).fetchone()
        if row is None:
            raise RecordNotFoundError()
        self._conn.execute("UPDATE action_categories SET name = ? WHERE id = ?", (name, row["id"]))
        return ActionCategory(id=row["id"], name=name)

    def delete(self, category_id: int) -> None:
        self._conn.execute("DELETE FROM action_categories WHERE id = ?", (category_id,))


class ActionRepo:
    """Rows of the ``day_actions`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def list_by_date(self, day: date) -> list[DayAction]:
        """Return the actions of ``day`` with their categories loaded."""
        rows = self._conn.execute(
            """
            SELECT a.id, a.date, a.category_id, a.hours,
                   c.id AS cat_id, c.name AS cat_name
            FROM day_actions AS a
            LEFT JOIN action_categories AS c ON c.id = a.category_id
            WHERE a.date = ?
            ORDER BY a.id
            """,
            (_day_key(day),),
        )
        return [
            _action(
                row,
                category=ActionCategory(id=row["cat_id"], name=row["cat_name"])
                if row["cat_id"] is not None
                else ActionCategory(),
            )
            for row in rows
        ]

    def create(self, action: DayAction) -> DayAction:
        """Insert ``action`` and return it with its new id."""
        cursor = self._conn.execute(
            "INSERT INTO day_actions (date, category_id, hours) VALUES (?, ?, ?)",
            (_day_key(action.date), action.category_id, action.hours),
        )
        return replace(action, id=cursor.lastrowid)

    def update_hours(self, action_id: int, hours: float) -> DayAction:
        row = self._conn.execute(
            "SELECT id, date, category_id, hours FROM day_actions WHERE id = ?", (action_id,)
        ).fetchone()
        if row is None:
            raise RecordNotFoundError()
        self._conn.execute("UPDATE day_actions SET hours = ? WHERE id = ?", (hours, row["id"]))
        return _action(row, hours=hours)

    def delete(self, action_id: int) -> None:
        self._conn.execute("DELETE FROM day_actions WHERE id = ?", (action_id,))