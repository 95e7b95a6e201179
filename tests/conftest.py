import os
import sys
from typing import Any, List, Optional, Tuple

import pytest

# Project root, so trip_agent imports without an editable install.
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from trip_agent.config import Settings


OVERLOAD_MESSAGE = "503 UNAVAILABLE. The model is overloaded. Please try again later."

TOKYO_REPLY = """```json
{
  "destination": "Tokyo",
  "trip_style": "Foodie",
  "total_days": 2,
  "daily_itinerary": [
    {"day": 1, "city": "Tokyo", "activities": ["Tsukiji outer market"], "food_recommendations": ["Sushi"], "travel_tips": ["Get a Suica card"]},
    {"day": 2, "city": "Tokyo", "activities": "Ramen crawl in Shinjuku"}
  ]
}
```"""


class FakeGenerator:
    """Plays back scripted outcomes: strings are returned, exceptions raised."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[Tuple[str, Optional[bytes], Optional[str]]] = []

    async def generate(self, prompt_text, image_bytes=None, image_mime_type=None):
        self.calls.append((prompt_text, image_bytes, image_mime_type))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class SleepRecorder:
    def __init__(self) -> None:
        self.delays_ms: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays_ms.append(seconds * 1000)


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def no_key_settings():
    return Settings(gemini_api_key="")


@pytest.fixture
def sleeper():
    return SleepRecorder()
