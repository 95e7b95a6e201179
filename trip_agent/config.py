import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


class Settings(BaseModel):
    gemini_api_key: str = ""
    model_name: str = DEFAULT_MODEL
    temperature: float = 0.7
    max_output_tokens: int = 8192
    max_retries: int = Field(default=4, ge=0)
    base_delay_ms: int = Field(default=600, ge=0)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        return cls(
            gemini_api_key=(os.getenv("GEMINI_API_KEY") or "").strip(),
            model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
            max_output_tokens=int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "8192")),
            max_retries=int(os.getenv("PLANNER_MAX_RETRIES", "4")),
            base_delay_ms=int(os.getenv("PLANNER_BASE_DELAY_MS", "600")),
            cors_origins=[origin.strip() for origin in origins if origin.strip()],
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        )

    @property
    def has_credential(self) -> bool:
        return bool(self.gemini_api_key)
