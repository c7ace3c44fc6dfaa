"""HTTP handlers of the auth service."""

from __future__ import annotations

import json
import sqlite3
from typing import Any

from flask import jsonify, request

from daylog.auth.service import AuthError, AuthService, UserExistsError

_FAILURES = (AuthError, sqlite3.Error)


class _BindError(ValueError):
    """Raised when a request body does not hold the required fields."""


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _bind(*names: str) -> dict[str, str]:
    """Decode the JSON body and check that every named string field is non-empty."""
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        payload: Any = json.loads(raw)
    except ValueError as exc:
        raise _BindError(f"invalid JSON body: {exc}") from None
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise _BindError("request body must be a JSON object")

    values: dict[str, str] = {}
    for name in names:
        value = payload.get(name)
        if value is not None and not isinstance(value, str):
            raise _BindError(f"field {name!r} must be of type str")
        if not value:
            raise _BindError(
                f"Key: '{name}' Error:Field validation for '{name}' failed on the 'required' tag"
            )
        values[name] = value
    return values


class AuthHandler:
    """HTTP endpoints for registration, login, refresh and logout."""

    def __init__(self, service: AuthService) -> None:
        self._service = service

    def register(self):
        try:
            body = _bind("username", "password")
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            self._service.register(body["username"], body["password"])
        except UserExistsError as exc:
            return _error(str(exc), 409)
        except _FAILURES as exc:
            return _error(str(exc), 500)
        return "", 201

    def login(self):
        try:
            body = _bind("username", "password")
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            access, refresh = self._service.login(body["username"], body["password"])
        except _FAILURES as exc:
            return _error(str(exc), 401)
        return jsonify({"access_token": access, "refresh_token": refresh}), 200

    def refresh(self):
        try:
            body = _bind("refresh_token")
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            access, refresh = self._service.refresh(body["refresh_token"])
        except _FAILURES as exc:
            return _error(str(exc), 401)
        return jsonify({"access_token": access, "refresh_token": refresh}), 200

    def logout(self):
        try:
            body = _bind("refresh_token")
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            self._service.logout(body["refresh_token"])
        except _FAILURES as exc:
            return _error(str(exc), 400)
        return "", 204