"""Form state for the daily check-in, independent of how it is rendered.

The form keeps a draft ``DailyEntry`` that edits replace freely; only
``save`` writes it to the store, followed by a recompute of that month's
summary.
"""
from __future__ import annotations

import logging
import random
from enum import Enum

from goals import metrics
from goals.constants import GOAL_KEYS, MANTRAS
from goals.data import repositories
from goals.models import DailyEntry, month_key, today_iso

logger = logging.getLogger(__name__)


class AppState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


def resolve_app_state(session):
    if not session.ready:
        return AppState.LOADING
    if session.user is None:
        return AppState.UNAUTHENTICATED
    return AppState.AUTHENTICATED


def pick_mantras(rng=None):
    rng = rng or random
    return {key: rng.choice(MANTRAS[key]) for key in GOAL_KEYS}


class EntryForm:
    def __init__(self, session, today_getter=today_iso):
        self.session = session
        self._today = today_getter
        self.selected_date = self._today()
        self.draft = DailyEntry.default(self.selected_date)
        self.month_summary = None
        self.status = ""
        self.saving = False
        self.loaded_key = None
        self._unsubscribe = session.subscribe(self._on_auth_change)
        if session.user_id:
            self.load()

    @property
    def state(self):
        return resolve_app_state(self.session)

    @property
    def month(self):
        return month_key(self.selected_date)

    @property
    def needs_load(self):
        user_id = self.session.user_id
        return bool(user_id) and self.loaded_key != (user_id, self.selected_date)

    def _on_auth_change(self, user):
        if user is None:
            self.reset()
            return
        if self.loaded_key and self.loaded_key[0] == user.uid:
            return
        self.reset()
        self.load()

    def reset(self):
        self.selected_date = self._today()
        self.draft = DailyEntry.default(self.selected_date)
        self.month_summary = None
        self.status = ""
        self.saving = False
        self.loaded_key = None

    def select_date(self, day_iso):
        self.selected_date = day_iso
        self.load()

    def ensure_loaded(self):
        if self.needs_load:
            self.load()

    def load(self):
        user_id = self.session.user_id
        if not user_id:
            return
        day_iso = self.selected_date
        self.status = ""
        self.draft = DailyEntry.default(day_iso)
        self.loaded_key = (user_id, day_iso)
        try:
            self.draft = repositories.load_entry(user_id, day_iso)
        except Exception as exc:
            logger.exception("Failed to load entry %s", day_iso)
            self.status = f"Load error: {exc}"

        try:
            self.month_summary = repositories.load_month_summary(user_id, month_key(day_iso))
        except Exception as exc:
            logger.exception("Failed to load month summary for %s", month_key(day_iso))
            self.month_summary = None
            if not self.status:
                self.status = f"Load error: {exc}"

    def set_rating(self, goal_key, value):
        self.draft = self.draft.with_rating(goal_key, value)

    def set_note(self, goal_key, text):
        self.draft = self.draft.with_note(goal_key, text)

    def save(self):
        user_id = self.session.user_id
        if not user_id:
            return False
        self.saving = True
        self.status = ""
        entry = self.draft
        try:
            repositories.save_entry(user_id, entry)
            self.month_summary = metrics.recompute_month(user_id, month_key(entry.date))
        except Exception as exc:
            logger.exception("Failed to save entry %s", entry.date)
            self.status = f"Save error: {exc}"
            return False
        finally:
            self.saving = False
        self.status = "Saved ✓"
        return True

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
