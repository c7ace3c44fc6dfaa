"""HTTP server of the API gateway."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime

from flask import Flask, jsonify

from daylog.gateway.config import ConfigError, GatewayConfig, load
from daylog.gateway.middleware import install_logging, require_auth
from daylog.gateway.routes import register, reverse_proxy

_log = logging.getLogger(__name__)


def _health():
    return jsonify({"status": "ok", "time": datetime.now().astimezone().isoformat()}), 200


def create_app(config: GatewayConfig) -> Flask:
    """Build the gateway: open auth routes, then everything else behind JWT checks."""
    app = Flask(__name__)
    install_logging(app)

    for name in ("register", "login", "refresh"):
        app.add_url_rule(
            f"/api/v1/auth/{name}",
            f"auth_{name}",
            reverse_proxy(config.auth_service),
            methods=["POST"],
        )

    guard = require_auth(config.jwt_secret)
    app.add_url_rule(
        "/api/v1/auth/logout",
        "auth_logout",
        guard(reverse_proxy(config.auth_service)),
        methods=["POST"],
    )
    app.add_url_rule("/health", "health", guard(_health), methods=["GET"])
    register(app, config)
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Load the configuration and serve the gateway until interrupted."""
    parser = argparse.ArgumentParser(prog="daylog-gateway", description="Serve the API gateway.")
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        config = load()
    except ConfigError as exc:
        _log.critical("config load error: %s", exc)
        raise SystemExit(1) from None

    app = create_app(config)
    try:
        app.run(host="0.0.0.0", port=int(config.port))
    except (ValueError, OSError) as exc:
        _log.critical("server run error: %s", exc)
        raise SystemExit(1) from None