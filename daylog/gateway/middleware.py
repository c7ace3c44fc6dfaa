"""Authentication and request logging for the gateway."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable

import jwt
from flask import Flask, g, jsonify, request

_log = logging.getLogger("daylog.gateway")
_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


def require_auth(secret: str) -> Callable[[Callable], Callable]:
    """Return a decorator that rejects requests without a valid bearer JWT."""
    key = secret.encode()

    def decorator(view: Callable) -> Callable:
        @functools.wraps(view)
        def wrapped(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            parts = header.split(" ", 1)
            if len(parts) != 2 or parts[0] != "Bearer":
                return jsonify({"error": "invalid auth header"}), 401
            try:
                jwt.decode(
                    parts[1],
                    key,
                    algorithms=_HMAC_ALGORITHMS,
                    options={"verify_aud": False, "verify_iss": False},
                )
            except jwt.PyJWTError:
                return jsonify({"error": "invalid token"}), 401
            return view(*args, **kwargs)

        return wrapped

    return decorator


def _format_duration(seconds: float) -> str:
    nanos = seconds * 1e9
    for limit, unit, scale in ((1e3, "ns", 1), (1e6, "µs", 1e3), (1e9, "ms", 1e6)):
        if nanos < limit:
            return f"{nanos / scale:.3f}".rstrip("0").rstrip(".") + unit
    return f"{seconds:.6f}".rstrip("0").rstrip(".") + "s"


def install_logging(app: Flask) -> None:
    """Log method, path, status and latency of every request handled by ``app``."""

    @app.before_request
    def _start_timer() -> None:
        g.daylog_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        start = g.get("daylog_start", time.perf_counter())
        latency = _format_duration(time.perf_counter() - start)
        _log.info(
            "%s %s -> %d (%s)", request.method, request.path, response.status_code, latency
        )
        return response