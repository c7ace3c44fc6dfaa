"""Settings for the action service, read from the environment."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ConfigError(ValueError):
    """Raised when the environment holds an unusable setting."""


@dataclass(frozen=True)
class ActionConfig:
    port: str
    db_path: str
    cache_ttl: timedelta
    log_level: str


def load(environ: Mapping[str, str] | None = None) -> ActionConfig:
    """Build the configuration from ``environ``, or from ``.env`` and the process environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    ttl_text = environ.get("CACHE_TTL_SEC") or "60"
    if not _INTEGER.fullmatch(ttl_text) or not -(2**63) <= int(ttl_text) < 2**63:
        raise ConfigError(f'CACHE_TTL_SEC must be integer, got "{ttl_text}"')

    return ActionConfig(
        port=environ.get("ACTION_PORT") or "8081",
        db_path=environ.get("ACTION_DB_PATH") or ".data/action.db",
        cache_ttl=timedelta(seconds=int(ttl_text)),
        log_level=environ.get("LOG_LEVEL") or "info",
    )