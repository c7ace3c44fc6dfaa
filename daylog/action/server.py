"""HTTP server of the action service."""

from __future__ import annotations

import argparse
import logging
import sqlite3
from collections.abc import Sequence
from datetime import datetime
from typing import NoReturn

from flask import Flask, jsonify

from daylog.action.config import ActionConfig, ConfigError, load
from daylog.action.handlers import ActionHandler, CategoryHandler
from daylog.action.repository import ActionRepo, CategoryRepo, connect
from daylog.action.service import ActionService, CategoryService

_log = logging.getLogger(__name__)


def health():
    return jsonify({"status": "ok", "time": datetime.now().astimezone().isoformat()}), 200


def create_app(config: ActionConfig) -> Flask:
    """Open the database named by ``config`` and build the application around it."""
    conn = connect(config.db_path)
    categories = CategoryHandler(CategoryService(CategoryRepo(conn)))
    actions = ActionHandler(ActionService(ActionRepo(conn)))

    app = Flask(__name__)
    app.extensions["daylog.db"] = conn
    for rule, view, method in (
        ("/health", health, "GET"),
        ("/api/v1/categories", categories.list_categories, "GET"),
        ("/api/v1/categories", categories.create_category, "POST"),
        ("/api/v1/days/<date>/actions", actions.list_actions, "GET"),
        ("/api/v1/days/<date>/actions", actions.add_action, "POST"),
    ):
        app.add_url_rule(rule, view.__name__, view, methods=[method])
    return app


def _fatal(what: str, exc: Exception) -> NoReturn:
    _log.critical("%s: %s", what, exc)
    raise SystemExit(1)


def main(argv: Sequence[str] | None = None) -> None:
    """Load the configuration and serve the action API until interrupted."""
    argparse.ArgumentParser(prog="daylog-action", description="Serve the day action API.").parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        config = load()
    except ConfigError as exc:
        _fatal("config load error", exc)
    try:
        app = create_app(config)
    except sqlite3.Error as exc:
        _fatal("db connect error", exc)
    try:
        app.run(host="0.0.0.0", port=int(config.port))
    except (ValueError, OSError) as exc:
        _fatal("server run error", exc)