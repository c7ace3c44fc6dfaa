"""Forwarding of API requests to the backing services."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urljoin, urlsplit

import requests
from flask import Flask, Response, jsonify, request

from daylog.gateway.config import GatewayConfig
from daylog.gateway.middleware import require_auth

_SKIP_REQUEST = {"host"}
_SKIP_RESPONSE = {"content-encoding", "content-length", "transfer-encoding", "connection"}


def reverse_proxy(target_url: str) -> Callable[..., object]:
    """Return a view that forwards the current request to ``target_url``."""
    try:
        urlsplit(target_url)
    except ValueError:
        raise ValueError("invalid service URL: " + target_url) from None

    def proxy(**_params):
        dest = urljoin(target_url, request.path)
        query = request.query_string.decode("latin-1")
        if query:
            dest = f"{dest}?{query}"
        headers = [(k, v) for k, v in request.headers.items() if k.lower() not in _SKIP_REQUEST]
        try:
            upstream = requests.request(
                request.method, dest, data=request.get_data(), headers=dict(headers)
            )
        except requests.RequestException as exc:
            return jsonify({"error": str(exc)}), 502
        out_headers = [
            (k, v) for k, v in upstream.headers.items() if k.lower() not in _SKIP_RESPONSE
        ]
        return Response(upstream.content, status=upstream.status_code, headers=out_headers)

    return proxy


_ROUTES = (
    ("calendar_service", "/days/<date>", ["GET", "PUT"]),
    ("calendar_service", "/days", ["GET"]),
    ("action_service", "/days/<date>/actions", ["GET", "POST"]),
    ("action_service", "/days/<date>/actions/<id>", ["GET", "PUT", "DELETE"]),
    ("habit_service", "/habits", ["GET", "POST"]),
    ("habit_service", "/habits/<id>", ["PUT", "DELETE"]),
    ("habit_service", "/habits/<id>/entries", ["POST"]),
    ("habit_service", "/habits/<id>/entries/<date>", ["DELETE"]),
    ("metrics_service", "/metrics", ["GET"]),
    ("metrics_service", "/metrics/report", ["GET"]),
)


def register(app: Flask, config: GatewayConfig) -> None:
    """Map every ``/api/v1`` service route to its service, behind JWT authentication."""
    guard = require_auth(config.jwt_secret)
    for attr, path, methods in _ROUTES:
        view = guard(reverse_proxy(getattr(config, attr)))
        endpoint = "proxy:" + path
        app.add_url_rule("/api/v1" + path, endpoint, view, methods=methods)