from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_DESTINATION = "Unknown destination"
DEFAULT_TRIP_STYLE = "Leisure"
DEFAULT_IMAGE_MIME = "image/jpeg"


class ItineraryRequest(BaseModel):
    prompt_text: str
    image_bytes: Optional[bytes] = None
    image_mime_type: Optional[str] = None

    @field_validator("prompt_text")
    @classmethod
    def ensure_prompt(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Missing prompt")
        return value

    @property
    def mime_type(self) -> str:
        return self.image_mime_type or DEFAULT_IMAGE_MIME


class DayPlan(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: int
    city: str
    activities: List[str] = Field(default_factory=list)
    food_recommendations: List[str] = Field(default_factory=list)
    travel_tips: List[str] = Field(default_factory=list)


class Itinerary(BaseModel):
    model_config = ConfigDict(extra="allow")

    destination: str = UNKNOWN_DESTINATION
    trip_style: str = DEFAULT_TRIP_STYLE
    total_days: int = Field(default=0, ge=0)
    daily_itinerary: List[DayPlan] = Field(default_factory=list)
