"""Settings for the auth service, read from the environment."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv

_INTEGER = re.compile(r"[+-]?[0-9]+")
_JWT_ENV = "JWT_SECRET"


class ConfigError(ValueError):
    """Raised when the environment holds an unusable setting."""


@dataclass(frozen=True)
class AuthConfig:
    port: str
    db_path: str
    jwt_secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta


def _int(environ: Mapping[str, str], key: str, default: str) -> int:
    text = environ.get(key) or default
    if not _INTEGER.fullmatch(text):
        raise ConfigError(f'{key} invalid: parsing "{text}": invalid syntax')
    if not -(2**63) <= int(text) < 2**63:
        raise ConfigError(f'{key} invalid: parsing "{text}": value out of range')
    return int(text)


def load(environ: Mapping[str, str] | None = None) -> AuthConfig:
    """Build the configuration from ``environ``, or from ``.env`` and the process environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    jwt_secret = environ.get(_JWT_ENV) or ""
    if not jwt_secret:
        raise ConfigError("JWT_SECRET must be set")

    return AuthConfig(
        port=environ.get("AUTH_PORT") or "8080",
        db_path=environ.get("AUTH_DB_PATH") or "./data/auth.db",
        jwt_secret=jwt_secret,
        access_ttl=timedelta(seconds=_int(environ, "ACCESS_TTL_SEC", "900")),
        refresh_ttl=timedelta(hours=_int(environ, "REFRESH_TTL_HOURS", "24")),
    )