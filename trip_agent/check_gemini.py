import json
import sys

import google.genai as genai
import httpx
from google.genai import errors, types

from .config import Settings

TEST_PROMPT = 'Respond with JSON only: {"test": "success", "message": "Gemini is working"}'


def main() -> int:
    settings = Settings.from_env()
    print("Testing Gemini API...")
    print("API Key:", "found" if settings.has_credential else "missing")
    if not settings.has_credential:
        print("GEMINI_API_KEY not set in .env", file=sys.stderr)
        return 1

    client = genai.Client(api_key=settings.gemini_api_key)
    print(f"\nCalling {settings.model_name} with test prompt...")
    try:
        response = client.models.generate_content(
            model=settings.model_name,
            contents=[types.Content(role="user", parts=[types.Part.from_text(text=TEST_PROMPT)])],
        )
    except errors.APIError as exc:
        print("\nGemini API error:", file=sys.stderr)
        print("Message:", exc.message, file=sys.stderr)
        print("Code:", exc.code or "N/A", file=sys.stderr)
        return 1
    except httpx.HTTPError as exc:
        print("\nGemini transport error:", file=sys.stderr)
        print("Message:", exc, file=sys.stderr)
        return 1

    text = getattr(response, "text", None) or ""
    print("\nResponse text:", text)
    try:
        print("Valid JSON parsed:", json.loads(text))
    except ValueError:
        print("Response is not JSON:", text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
