from __future__ import annotations

import logging
import math

from goals.constants import GOAL_KEYS, MAX_RATING
from goals.data import repositories
from goals.models import month_key

logger = logging.getLogger(__name__)


def _rating_value(entry, goal_key):
    rating = entry.get("rating") or {}
    try:
        value = float(rating.get(goal_key, 0) or 0)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def completion_percent(total, count):
    if count == 0:
        return 0
    # Half-up rounding; Python's round() would send 22.5 to 22.
    return int(math.floor(total * 100 / (MAX_RATING * count) + 0.5))


def entries_in_month(entries, month):
    return [entry for entry in entries if month_key(entry.get("date") or "") == month]


def compute_month_summary(entries, month):
    matching = entries_in_month(entries, month)
    count = len(matching)
    totals = {key: 0.0 for key in GOAL_KEYS}
    for entry in matching:
        for key in GOAL_KEYS:
            totals[key] += _rating_value(entry, key)
    return {key: completion_percent(totals[key], count) for key in GOAL_KEYS}


def recompute_month(user_id, month):
    """Rebuild and store the summary for one month from every entry of the user."""
    entries = repositories.list_entries(user_id)
    summary = compute_month_summary(entries, month)
    repositories.save_month_summary(user_id, month, summary)
    logger.info("Recomputed %s for user %s from %d entries", month, user_id, len(entries))
    return summary
