from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Protocol

from pydantic import ValidationError

from .config import Settings
from .errors import ConfigurationError, InvalidRequest, MalformedResponse
from .extractor import extract_json
from .models import Itinerary, ItineraryRequest
from .normalizer import normalize_itinerary
from .retry import RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)


class Generator(Protocol):
    async def generate(
        self,
        prompt_text: str,
        image_bytes: Optional[bytes] = None,
        image_mime_type: Optional[str] = None,
    ) -> str: ...


def build_prompt(prompt: str, days: Optional[int] = None, trip_style: Optional[str] = None) -> str:
    constraints = []
    if days:
        constraints.append(f"total_days={days}")
    if trip_style and trip_style.strip():
        constraints.append(f"trip_style={trip_style.strip()}")
    if not constraints:
        return prompt
    return f"{prompt}\n\nConstraints: {'; '.join(constraints)}. Respond only with the itinerary JSON."


class TripPlanner:
    """Turns a trip description into a normalized itinerary.

    Holds only its collaborators, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        settings: Settings,
        generator: Generator,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.settings = settings
        self.generator = generator
        self.policy = RetryPolicy(max_retries=settings.max_retries, base_delay_ms=settings.base_delay_ms)
        self._sleep = sleep
        self._rand = rand

    async def plan_trip(
        self,
        prompt_text: str,
        image_bytes: Optional[bytes] = None,
        image_mime_type: Optional[str] = None,
    ) -> Itinerary:
        if not self.settings.has_credential:
            raise ConfigurationError("GEMINI_API_KEY is required")
        try:
            request = ItineraryRequest(
                prompt_text=prompt_text,
                image_bytes=image_bytes or None,
                image_mime_type=image_mime_type,
            )
        except ValidationError as exc:
            raise InvalidRequest("Missing prompt") from exc

        raw = await call_with_retry(
            lambda: self.generator.generate(
                request.prompt_text,
                request.image_bytes,
                request.mime_type if request.image_bytes else None,
            ),
            policy=self.policy,
            sleep=self._sleep,
            rand=self._rand,
        )

        parsed = extract_json(raw)
        if parsed is None:
            logger.debug("Unparseable model output: %.200s", raw)
            raise MalformedResponse()
        return normalize_itinerary(parsed)
