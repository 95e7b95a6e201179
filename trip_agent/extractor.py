import json
import re
from typing import Any, Dict, Optional

_FENCE_RE = re.compile(r"```(?:json)?\n?", flags=re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text)


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def extract_json(raw_text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Recover a single JSON object from model output.

    Markdown fences are removed first. If the cleaned text does not parse on
    its own, the span from the first ``{`` to the last ``}`` is tried. Braces
    inside surrounding prose can widen that span; such replies yield ``None``.
    Returns ``None`` instead of raising when nothing usable is found.
    """
    if not raw_text:
        return None
    cleaned = strip_code_fences(raw_text)

    parsed = _loads_object(cleaned)
    if parsed is not None:
        return parsed

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    return _loads_object(cleaned[start : end + 1])
