"""SQLite storage for users and refresh tokens."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from datetime import datetime, timezone

from daylog.auth.models import RefreshToken, User

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT
);
CREATE TABLE IF NOT EXISTS refresh_tokens (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    token TEXT NOT NULL UNIQUE,
    expires_at TEXT NOT NULL,
    revoked INTEGER NOT NULL DEFAULT 0
);
CREATE INDEX IF NOT EXISTS idx_refresh_tokens_user_id ON refresh_tokens (user_id);
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


def _to_db(moment: datetime) -> str:
    # UTC with fixed precision, so that text comparison orders correctly.
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(sep=" ", timespec="microseconds")


class UserRepo:
    """Rows of the ``users`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def create(self, user: User) -> User:
        """Insert ``user`` and return it with its id and creation time."""
        created = datetime.now(timezone.utc)
        cursor = self._conn.execute(
            "INSERT INTO users (username, password_hash, created_at) VALUES (?, ?, ?)",
            (user.username, user.password_hash, _to_db(created)),
        )
        return replace(user, id=cursor.lastrowid, created_at=created)

    def find_by_username(self, username: str) -> User | None:
        """Return the user called ``username``, or None if there is none."""
        row = self._conn.execute(
            "SELECT * FROM users WHERE username = ? ORDER BY id LIMIT 1", (username,)
        ).fetchone()
        if row is None:
            return None
        created = row["created_at"]
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=datetime.fromisoformat(created) if created is not None else None,
        )


class TokenRepo:
    """Rows of the ``refresh_tokens`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def create(self, token: RefreshToken) -> RefreshToken:
        """Insert ``token`` and return it with its new id."""
        cursor = self._conn.execute(
            "INSERT INTO refresh_tokens (user_id, token, expires_at, revoked) VALUES (?, ?, ?, ?)",
            (token.user_id, token.token, _to_db(token.expires_at), int(token.revoked)),
        )
        return replace(token, id=cursor.lastrowid)

    def find(self, token: str) -> RefreshToken:
        row = self._conn.execute(
            "SELECT * FROM refresh_tokens WHERE token = ? ORDER BY id LIMIT 1", (token,)
        ).fetchone()
        if row is None:
            raise RecordNotFoundError()
        return RefreshToken(
            id=row["id"],
            user_id=row["user_id"],
            token=row["token"],
            expires_at=datetime.fromisoformat(row["expires_at"]),
            revoked=bool(row["revoked"]),
        )

    def revoke(self, token_id: int) -> None:
        self._conn.execute("UPDATE refresh_tokens SET revoked = 1 WHERE id = ?", (token_id,))

    def delete_expired(self, now: datetime) -> None:
        """Remove every token that expired before ``now``."""
        self._conn.execute("DELETE FROM refresh_tokens WHERE expires_at < ?", (_to_db(now),))