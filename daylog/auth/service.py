"""Registration, login and refresh-token rotation."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from time import time_ns

import bcrypt
import jwt

from daylog.auth.models import RefreshToken, User
from daylog.auth.repository import RecordNotFoundError, TokenRepo, UserRepo

_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
_BCRYPT_COST = 10
_BCRYPT_MAX_BYTES = 72
_REFRESH_TOKEN_LENGTH = 32


class AuthError(Exception):
    """Base class of the errors the auth service reports."""


class UserExistsError(AuthError):
    def __init__(self) -> None:
        super().__init__("user already exists")


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid credentials")


class TokenNotFoundError(AuthError):
    def __init__(self) -> None:
        super().__init__("refresh token not found")


class TokenRevokedError(AuthError):
    def __init__(self) -> None:
        super().__init__("refresh token revoked")


class TokenExpiredError(AuthError):
    def __init__(self) -> None:
        super().__init__("refresh token expired")


def generate_random_string(n: int) -> str:
    """Return ``n`` letters and digits, each chosen by the nanosecond clock."""
    return "".join(_LETTERS[time_ns() % len(_LETTERS)] for _ in range(n))


def _id_as_character(user_id: int) -> str:
    # Login tokens carry the user id as the character with that code point.
    if 0 <= user_id <= 0x10FFFF and not 0xD800 <= user_id <= 0xDFFF:
        return chr(user_id)
    return "\ufffd"


def _hash_password(password: str) -> str:
    raw = password.encode()
    if len(raw) > _BCRYPT_MAX_BYTES:
        # Too long to hash: the account is stored without a usable hash.
        return ""
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=_BCRYPT_COST)).decode()


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


class AuthService:
    """Issues access JWTs and rotating refresh tokens."""

    def __init__(
        self,
        users: UserRepo,
        tokens: TokenRepo,
        secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._secret = secret.encode()
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl

    def _sign_access(self, subject: str) -> str:
        expires = datetime.now(timezone.utc) + self._access_ttl
        claims = {"sub": subject, "exp": int(expires.timestamp())}
        return jwt.encode(claims, self._secret, algorithm="HS256")

    def _issue_refresh(self, user_id: int) -> RefreshToken:
        token = RefreshToken(
            user_id=user_id,
            token=generate_random_string(_REFRESH_TOKEN_LENGTH),
            expires_at=datetime.now(timezone.utc) + self._refresh_ttl,
        )
        return self._tokens.create(token)

    def _find_token(self, token: str) -> RefreshToken:
        try:
            return self._tokens.find(token)
        except (RecordNotFoundError, sqlite3.Error):
            raise TokenNotFoundError() from None

    def register(self, username: str, password: str) -> None:
        """Create an account; raise UserExistsError if the name is taken."""
        if self._users.find_by_username(username) is not None:
            raise UserExistsError()
        self._users.create(User(username=username, password_hash=_hash_password(password)))

    def login(self, username: str, password: str) -> tuple[str, str]:
        """Check the credentials and return an access JWT and a refresh token."""
        try:
            user = self._users.find_by_username(username)
        except sqlite3.Error:
            raise InvalidCredentialsError() from None
        if user is None or not _password_matches(user.password_hash, password):
            raise InvalidCredentialsError()
        access = self._sign_access(_id_as_character(user.id))
        refresh = self._issue_refresh(user.id)
        return access, refresh.token

    def refresh(self, old_token: str) -> tuple[str, str]:
        """Revoke ``old_token`` and return a new access JWT and refresh token."""
        stored = self._find_token(old_token)
        if stored.revoked:
            raise TokenRevokedError()
        if datetime.now(timezone.utc) > stored.expires_at:
            raise TokenExpiredError()

        self._tokens.revoke(stored.id)
        access = self._sign_access(str(stored.user_id))
        refresh = self._issue_refresh(stored.user_id)
        return access, refresh.token

    def logout(self, refresh_token: str) -> None:
        """Revoke ``refresh_token``."""
        stored = self._find_token(refresh_token)
        self._tokens.revoke(stored.id)