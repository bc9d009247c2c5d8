import logging
from datetime import datetime, timezone

from goals.constants import ENTRIES_COLLECTION, GOAL_KEYS, MONTHS_COLLECTION, USERS_COLLECTION
from goals.data.documents import document_path
from goals.models import DailyEntry, zero_summary

logger = logging.getLogger(__name__)

_STORE_GETTER = None


def configure(store_getter):
    global _STORE_GETTER
    _STORE_GETTER = store_getter


def _store():
    if _STORE_GETTER is None:
        raise RuntimeError("repositories not configured")
    return _STORE_GETTER()


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


def entries_collection(user_id):
    return document_path(USERS_COLLECTION, user_id, ENTRIES_COLLECTION)


def entry_path(user_id, day_iso):
    return document_path(entries_collection(user_id), day_iso)


def month_path(user_id, month):
    return document_path(USERS_COLLECTION, user_id, MONTHS_COLLECTION, month)


def load_entry(user_id, day_iso):
    data = _store().get(entry_path(user_id, day_iso))
    return DailyEntry.from_document(day_iso, data)


def save_entry(user_id, entry):
    document = entry.to_document(updated_at=_now_iso())
    _store().set(entry_path(user_id, entry.date), document, merge=True)
    logger.info("Saved entry %s for user %s", entry.date, user_id)
    return document


def list_entries(user_id):
    return _store().list_collection(entries_collection(user_id), order_by="date")


def load_month_summary(user_id, month):
    data = _store().get(month_path(user_id, month))
    summary = zero_summary()
    if not data:
        return summary
    for key in GOAL_KEYS:
        try:
            summary[key] = int(data.get(key, 0) or 0)
        except (TypeError, ValueError):
            summary[key] = 0
    return summary


def save_month_summary(user_id, month, summary):
    _store().set(month_path(user_id, month), dict(summary), merge=True)
