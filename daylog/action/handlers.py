"""HTTP handlers of the action service."""

from __future__ import annotations

import json
import re
import sqlite3
from datetime import date
from typing import Any

from flask import jsonify, request

from daylog.action.repository import RecordNotFoundError
from daylog.action.service import ActionService, CategoryService

_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_STORAGE_ERRORS = (sqlite3.Error, RecordNotFoundError)


class _BindError(ValueError):
    """Raised when a request body does not hold the required fields."""


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _parse_day(text: str) -> date | None:
    if not _DATE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _parse_id(text: str) -> int | None:
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _matches(value: Any, kind: type) -> bool:
    if kind is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, kind)


def _bind(fields: dict[str, type]) -> dict[str, Any]:
    """Decode the JSON body and check that every field is present and non-zero."""
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise _BindError(f"invalid JSON body: {exc}") from None
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise _BindError("request body must be a JSON object")

    values: dict[str, Any] = {}
    for key, kind in fields.items():
        value = payload.get(key)
        if value is not None and not _matches(value, kind):
            raise _BindError(f"field {key!r} must be of type {kind.__name__}")
        if not value:
            raise _BindError(
                f"Key: '{key}' Error:Field validation for '{key}' failed on the 'required' tag"
            )
        values[key] = float(value) if kind is float else value
    return values


class CategoryHandler:
    """HTTP endpoints for action categories."""

    def __init__(self, service: CategoryService) -> None:
        self._service = service

    def list_categories(self):
        try:
            categories = self._service.list()
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify([category.to_dict() for category in categories]), 200

    def create_category(self):
        try:
            body = _bind({"name": str})
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            category = self._service.create(body["name"])
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify(category.to_dict()), 201

    def update_category(self, id: str):
        category_id = _parse_id(id)
        if category_id is None:
            return _error("invalid id", 400)
        try:
            body = _bind({"name": str})
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            category = self._service.update(category_id, body["name"])
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify(category.to_dict()), 200

    def delete_category(self, id: str):
        category_id = _parse_id(id)
        if category_id is None:
            return _error("invalid id", 400)
        try:
            self._service.delete(category_id)
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return "", 204


class ActionHandler:
    """HTTP endpoints for the actions recorded on a day."""

    def __init__(self, service: ActionService) -> None:
        self._service = service

    def list_actions(self, date: str):
        day = _parse_day(date)
        if day is None:
            return _error("invalid date format", 400)
        try:
            actions = self._service.list(day)
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify([action.to_dict() for action in actions]), 200

    def add_action(self, date: str):
        """Record an action on the day.

        The request body is not consulted: the action is stored with no
        category and zero hours.
        """
        day = _parse_day(date)
        if day is None:
            return _error("invalid date format", 400)
        try:
            action = self._service.add(day, 0, 0.0)
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify(action.to_dict()), 201

    def update_action(self, date: str, id: str):
        action_id = _parse_id(id)
        if action_id is None:
            return _error("invalid id", 400)
        try:
            body = _bind({"hours": float})
        except _BindError as exc:
            return _error(str(exc), 400)
        try:
            action = self._service.update(action_id, body["hours"])
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return jsonify(action.to_dict()), 200

    def delete_action(self, date: str, id: str):
        action_id = _parse_id(id)
        if action_id is None:
            return _error("invalid id", 400)
        try:
            self._service.delete(action_id)
        except _STORAGE_ERRORS as exc:
            return _error(str(exc), 500)
        return "", 204