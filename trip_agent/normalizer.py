from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional

from .models import DEFAULT_TRIP_STYLE, UNKNOWN_DESTINATION, DayPlan, Itinerary

LIST_FIELDS = ("activities", "food_recommendations", "travel_tips")
_LABEL_KEYS = ("title", "name", "description", "text")


def _as_number(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if _as_number(value) is not None:
        return str(value)
    return None


def _item_text(item: Any) -> Optional[str]:
    if item is None:
        return None
    if isinstance(item, str):
        return item.strip() or None
    if isinstance(item, dict):
        for key in _LABEL_KEYS:
            label = item.get(key)
            if isinstance(label, str) and label.strip():
                return label.strip()
    return json.dumps(item, ensure_ascii=False)


def _string_list(value: Any) -> List[str]:
    if isinstance(value, list):
        items = value
    elif value:
        items = [value]
    else:
        return []
    return [text for text in (_item_text(item) for item in items) if text]


def _total_days(value: Any, day_count: int) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            # covers non-ASCII digit glyphs and the int-string length limit
            value = None
    total = _as_number(value)
    if not total or total < 0:
        return day_count
    return total


def _normalize_day(entry: Any, position: int, destination: str) -> DayPlan:
    day = dict(entry) if isinstance(entry, dict) else {}
    number = _as_number(day.get("day"))
    day["day"] = number if number is not None else position
    day["city"] = _as_text(day.get("city")) or destination or f"Day {day['day']}"
    for field in LIST_FIELDS:
        day[field] = _string_list(day.get(field))
    return DayPlan.model_validate(day)


def normalize_itinerary(parsed: Any) -> Itinerary:
    """Coerce a loosely shaped model reply into a complete ``Itinerary``.

    Never raises. Missing or malformed fields get defaults, day order is kept,
    and keys the model added beyond the schema are carried through.
    """
    out: Dict[str, Any] = dict(parsed) if isinstance(parsed, dict) else {}

    out["destination"] = _as_text(out.get("destination")) or UNKNOWN_DESTINATION
    out["trip_style"] = _as_text(out.get("trip_style")) or DEFAULT_TRIP_STYLE

    days = out.get("daily_itinerary")
    if not isinstance(days, list):
        days = []
    out["daily_itinerary"] = [
        _normalize_day(entry, index, out["destination"])
        for index, entry in enumerate(days, start=1)
    ]
    out["total_days"] = _total_days(out.get("total_days"), len(out["daily_itinerary"]))

    return Itinerary.model_validate(out)
