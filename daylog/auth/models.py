"""Records kept by the auth service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A registered account; ``created_at`` is filled in when stored."""

    username: str
    password_hash: str
    id: int = 0
    created_at: datetime | None = None


@dataclass
class RefreshToken:
    """A refresh token issued to a user."""

    user_id: int
    token: str
    expires_at: datetime
    revoked: bool = False
    id: int = 0