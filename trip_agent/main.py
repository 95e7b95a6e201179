# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import re
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import PlannerError
from .generation import GeminiGenerator
from .planner import TripPlanner, build_prompt

API_PREFIX = "/api/v1"
_LEADING_INT_RE = re.compile(r"\s*\+?([0-9]+)")

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_generator() -> GeminiGenerator:
    return GeminiGenerator(get_settings())


def get_planner(
    settings: Settings = Depends(get_settings),
    generator: GeminiGenerator = Depends(get_generator),
) -> TripPlanner:
    return TripPlanner(settings, generator)


def parse_days(value: Optional[str]) -> Optional[int]:
    """Leading integer of a form value ("5.5" -> 5), or None when there is none."""
    match = _LEADING_INT_RE.match(value or "")
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        return None


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    if get_generator.cache_info().currsize:
        await get_generator().aclose()


app = FastAPI(title="Agentic Travel Planner API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(str(err.get("msg", "Invalid request")) for err in exc.errors()) or "Invalid request"
    logger.warning("Rejected request: %s", message)
    return JSONResponse({"error": message}, status_code=400)


@app.get("/")
def root() -> dict[str, str]:
    return {
        "status": "ok",
        "message": "Agentic Travel Planner API is running",
        "docs": "/docs",
    }


@app.get(f"{API_PREFIX}/health")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/plan-trip")
async def plan_trip(
    prompt: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    days: Optional[str] = Form(None),
    trip_style: Optional[str] = Form(None),
    planner: TripPlanner = Depends(get_planner),
):
    if not prompt or not prompt.strip():
        return JSONResponse({"error": "Missing prompt"}, status_code=400)

    image_bytes = await image.read() if image is not None else None
    image_mime = image.content_type if image_bytes else None

    try:
        itinerary = await planner.plan_trip(build_prompt(prompt, parse_days(days), trip_style), image_bytes, image_mime)
    except PlannerError as exc:
        logger.error("Trip planning failed (%s): %s", exc.kind.value, exc, exc_info=True)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)
    except Exception as exc:
        logger.error("Trip planning failed: %s", exc, exc_info=True)
        return JSONResponse({"error": str(exc) or "Internal server error"}, status_code=500)

    return JSONResponse(itinerary.model_dump())


def serve() -> None:
    settings = get_settings()
    logger.info("Agentic Travel Planner listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
