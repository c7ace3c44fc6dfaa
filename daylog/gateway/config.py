"""Settings for the API gateway, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

_JWT_ENV = "JWT_SECRET"


class ConfigError(ValueError):
    """Raised when the environment lacks a required setting."""


@dataclass(frozen=True)
class GatewayConfig:
    port: str
    calendar_service: str
    action_service: str
    habit_service: str
    metrics_service: str
    auth_service: str
    jwt_secret: str


def load(environ: Mapping[str, str] | None = None) -> GatewayConfig:
    """Build the configuration from ``environ``, or from ``.env`` and the process environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    config = GatewayConfig(
        port=environ.get("GATEWAY_PORT") or "80",
        calendar_service=environ.get("CALENDAR_SERVICE_URL") or "",
        action_service=environ.get("ACTION_SERVICE_URL") or "",
        habit_service=environ.get("HABIT_SERVICE_URL") or "",
        metrics_service=environ.get("METRICS_SERVICE_URL") or "",
        auth_service=environ.get("AUTH_SERVICE_URL") or "",
        jwt_secret=environ.get(_JWT_ENV) or "",
    )
    if not all(
        (
            config.calendar_service,
            config.action_service,
            config.habit_service,
            config.auth_service,
            config.metrics_service,
        )
    ):
        raise ConfigError("one or more service URLs are not set")
    if not config.jwt_secret:
        raise ConfigError("JWT_SECRET must be set")
    return config