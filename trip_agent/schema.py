import json

# Advisory only: shown to the model, never used to validate its reply.
GENERATE_ITINERARY_SCHEMA = {
    "name": "generate_itinerary",
    "description": "Generate a structured travel itinerary JSON using the prompt and image aesthetics",
    "parameters": {
        "type": "object",
        "properties": {
            "destination": {"type": "string", "description": "Primary destination or region"},
            "trip_style": {
                "type": "string",
                "description": "Trip vibe / style (e.g., romantic, adventure, foodie)",
            },
            "total_days": {"type": "number", "description": "Total number of days"},
            "daily_itinerary": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "day": {"type": "number"},
                        "city": {"type": "string"},
                        "activities": {"type": "array", "items": {"type": "string"}},
                        "food_recommendations": {"type": "array", "items": {"type": "string"}},
                        "travel_tips": {"type": "array", "items": {"type": "string"}},
                    },
                    "required": ["day", "city", "activities"],
                },
            },
        },
        "required": ["destination", "trip_style", "total_days", "daily_itinerary"],
    },
}


def system_instruction() -> str:
    return (
        "You are an expert travel planner. Use the user's natural-language prompt and the "
        "provided image aesthetics to craft a travel itinerary. "
        "Always produce a single JSON object that matches the generate_itinerary schema exactly "
        "(destination, trip_style, total_days, daily_itinerary). "
        "Do NOT include text, explanations, or markdown outside the JSON. The JSON must be parseable.\n"
        f"Schema: {json.dumps(GENERATE_ITINERARY_SCHEMA['parameters'], separators=(',', ':'))}"
    )
