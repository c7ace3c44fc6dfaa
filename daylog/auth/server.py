"""HTTP server of the auth service."""

from __future__ import annotations

import argparse
import logging
import sqlite3
from collections.abc import Sequence

from flask import Flask

from daylog.auth.config import AuthConfig, ConfigError, load
from daylog.auth.handlers import AuthHandler
from daylog.auth.repository import TokenRepo, UserRepo, connect
from daylog.auth.service import AuthService

_log = logging.getLogger(__name__)


def create_app(config: AuthConfig) -> Flask:
    """Open the database named by ``config`` and build the application around it."""
    conn = connect(config.db_path)
    service = AuthService(
        UserRepo(conn), TokenRepo(conn), config.jwt_secret, config.access_ttl, config.refresh_ttl
    )
    handler = AuthHandler(service)

    app = Flask(__name__)
    app.extensions["daylog.db"] = conn
    app.add_url_rule("/api/v1/auth/register", "register", handler.register, methods=["POST"])
    app.add_url_rule("/api/v1/auth/login", "login", handler.login, methods=["POST"])
    app.add_url_rule("/api/v1/auth/refresh", "refresh", handler.refresh, methods=["POST"])
    app.add_url_rule("/api/v1/auth/logout", "logout", handler.logout, methods=["POST"])
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Load the configuration and serve the auth API until interrupted."""
    parser = argparse.ArgumentParser(prog="daylog-auth", description="Serve the auth API.")
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        config = load()
    except ConfigError as exc:
        _log.critical("config load failed: %s", exc)
        raise SystemExit(1) from None

    try:
        app = create_app(config)
    except sqlite3.Error as exc:
        _log.critical("db connect failed: %s", exc)
        raise SystemExit(1) from None

    try:
        app.run(host="0.0.0.0", port=int(config.port))
    except (ValueError, OSError) as exc:
        _log.critical("server run failed: %s", exc)
        raise SystemExit(1) from None