"""Operations on categories and day actions."""

from __future__ import annotations

from datetime import date

from daylog.action.models import ActionCategory, DayAction
from daylog.action.repository import ActionRepo, CategoryRepo


class CategoryService:
    """Manages action categories."""

    def __init__(self, repo: CategoryRepo) -> None:
        self._repo = repo

    def list(self) -> list[ActionCategory]:
        return self._repo.list()

    def create(self, name: str) -> ActionCategory:
        return self._repo.create(name)

    def update(self, category_id: int, name: str) -> ActionCategory:
        return self._repo.update(category_id, name)

    def delete(self, category_id: int) -> None:
        self._repo.delete(category_id)


class ActionService:
    """Manages the hours recorded per day."""

    def __init__(self, repo: ActionRepo) -> None:
        self._repo = repo

    def list(self, day: date) -> list[DayAction]:
        return self._repo.list_by_date(day)

    def add(self, day: date, category_id: int, hours: float) -> DayAction:
        return self._repo.create(DayAction(date=day, category_id=category_id, hours=hours))

    def update(self, action_id: int, hours: float) -> DayAction:
        return self._repo.update_hours(action_id, hours)

    def delete(self, action_id: int) -> None:
        self._repo.delete(action_id)