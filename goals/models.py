from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict

from goals.constants import DEFAULT_RATING, GOAL_KEYS


def today_iso() -> str:
    return date.today().isoformat()


def month_key(day_iso: str) -> str:
    return str(day_iso)[:7]


def default_ratings() -> Dict[str, int]:
    return {key: DEFAULT_RATING for key in GOAL_KEYS}


def empty_notes() -> Dict[str, str]:
    return {key: "" for key in GOAL_KEYS}


def zero_summary() -> Dict[str, int]:
    return {key: 0 for key in GOAL_KEYS}


def _coerce_rating(value, default=DEFAULT_RATING):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class DailyEntry:
    """One day's ratings and notes.

    Instances are values: the form replaces its draft with a new entry on
    every edit and only hands the current one to the store on save.
    """

    date: str
    rating: Dict[str, int] = field(default_factory=default_ratings)
    notes: Dict[str, str] = field(default_factory=empty_notes)

    @classmethod
    def default(cls, day_iso: str) -> "DailyEntry":
        return cls(date=day_iso)

    @classmethod
    def from_document(cls, day_iso: str, data: Dict[str, Any] | None) -> "DailyEntry":
        if not data:
            return cls.default(day_iso)
        raw_rating = data.get("rating") or {}
        raw_notes = data.get("notes") or {}
        rating = {key: _coerce_rating(raw_rating.get(key)) for key in GOAL_KEYS}
        notes = {key: str(raw_notes.get(key) or "") for key in GOAL_KEYS}
        return cls(date=day_iso, rating=rating, notes=notes)

    def with_rating(self, goal_key: str, value) -> "DailyEntry":
        rating = dict(self.rating)
        rating[goal_key] = _coerce_rating(value, self.rating.get(goal_key, DEFAULT_RATING))
        return replace(self, rating=rating)

    def with_note(self, goal_key: str, text: str) -> "DailyEntry":
        notes = dict(self.notes)
        notes[goal_key] = text or ""
        return replace(self, notes=notes)

    def to_document(self, updated_at: str) -> Dict[str, Any]:
        return {
            "date": self.date,
            "rating": dict(self.rating),
            "notes": dict(self.notes),
            "updatedAt": updated_at,
        }
