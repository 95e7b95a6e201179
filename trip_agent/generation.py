from __future__ import annotations

import logging
from typing import Any, List, Optional

import google.genai as genai
import httpx
from google.genai import errors, types

from .config import Settings
from .errors import ConfigurationError, UpstreamError
from .models import DEFAULT_IMAGE_MIME
from .schema import system_instruction

logger = logging.getLogger(__name__)


def response_text(response: Any) -> str:
    """Text of a Gemini reply, falling back to every candidate's text parts."""
    raw_text = getattr(response, "text", None)
    if raw_text:
        return raw_text
    chunks: List[str] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            text = getattr(part, "text", None)
            if text:
                chunks.append(text)
    return "\n".join(chunks)


class GeminiGenerator:
    """Sends one multimodal generate_content request per call."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.settings.has_credential:
                raise ConfigurationError("GEMINI_API_KEY not set in environment")
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def aclose(self) -> None:
        """Release the Gemini client's connection pools, if one was built."""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aio.aclose()
        client.close()

    def build_contents(
        self,
        prompt_text: str,
        image_bytes: Optional[bytes] = None,
        image_mime_type: Optional[str] = None,
    ) -> List[types.Content]:
        parts = [types.Part.from_text(text=prompt_text)]
        if image_bytes:
            parts.append(
                types.Part.from_bytes(data=image_bytes, mime_type=image_mime_type or DEFAULT_IMAGE_MIME)
            )
        return [types.Content(role="user", parts=parts)]

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction(),
            automatic_function_calling=types.AutomaticFunctionCallingConfig(disable=True),
            temperature=self.settings.temperature,
            max_output_tokens=self.settings.max_output_tokens,
        )

    async def generate(
        self,
        prompt_text: str,
        image_bytes: Optional[bytes] = None,
        image_mime_type: Optional[str] = None,
    ) -> str:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.settings.model_name,
                contents=self.build_contents(prompt_text, image_bytes, image_mime_type),
                config=self.build_config(),
            )
        except errors.APIError as exc:
            raise UpstreamError(str(exc), upstream_status=exc.code) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(str(exc)) from exc
        except Exception as exc:
            raise UpstreamError(str(exc) or type(exc).__name__) from exc
        text = response_text(response)
        logger.info("Gemini returned %d characters", len(text))
        return text
