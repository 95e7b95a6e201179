"""
Unit tests for trip_agent/planner.py

Tests cover:
- build_prompt() constraint suffix
- TripPlanner.plan_trip() end to end with a fake generator
- Error routing: configuration, malformed reply, overload, upstream failure
"""
import asyncio

import pytest

from conftest import OVERLOAD_MESSAGE, TOKYO_REPLY, FakeGenerator
from trip_agent.config import Settings
from trip_agent.errors import (
    ConfigurationError,
    ErrorKind,
    InvalidRequest,
    MalformedResponse,
    ServiceOverloaded,
    UpstreamError,
)
from trip_agent.models import Itinerary
from trip_agent.planner import TripPlanner, build_prompt


def _plan(planner, *args):
    return asyncio.run(planner.plan_trip(*args))


class TestBuildPrompt:
    def test_no_hints_returns_prompt(self):
        assert build_prompt("Lisbon weekend") == "Lisbon weekend"

    def test_appends_constraints(self):
        prompt = build_prompt("Lisbon weekend", days=3, trip_style="Adventure")
        assert prompt.startswith("Lisbon weekend\n\nConstraints: total_days=3; trip_style=Adventure.")

    def test_blank_style_is_ignored(self):
        assert "trip_style" not in build_prompt("Lisbon", days=2, trip_style="  ")


class TestPlanTrip:
    def test_end_to_end_tokyo(self, settings, sleeper):
        generator = FakeGenerator(TOKYO_REPLY)
        planner = TripPlanner(settings, generator, sleep=sleeper)

        itinerary = _plan(planner, "5 days in Tokyo, foodie style")

        assert isinstance(itinerary, Itinerary)
        assert itinerary.destination == "Tokyo"
        assert itinerary.total_days == len(itinerary.daily_itinerary) == 2
        for day in itinerary.daily_itinerary:
            assert day.activities is not None
            assert day.food_recommendations is not None
            assert day.travel_tips is not None
        assert itinerary.daily_itinerary[1].activities == ["Ramen crawl in Shinjuku"]
        assert itinerary.daily_itinerary[1].food_recommendations == []
        assert sleeper.delays_ms == []

    def test_forwards_image_with_default_mime(self, settings, sleeper):
        generator = FakeGenerator('{"destination": "Bali"}')
        _plan(TripPlanner(settings, generator, sleep=sleeper), "beach trip", b"img")
        assert generator.calls == [("beach trip", b"img", "image/jpeg")]

    def test_no_image_sends_no_mime(self, settings, sleeper):
        generator = FakeGenerator('{"destination": "Bali"}')
        _plan(TripPlanner(settings, generator, sleep=sleeper), "beach trip", None, "image/png")
        assert generator.calls == [("beach trip", None, None)]

    def test_missing_credential_fails_before_generation(self, no_key_settings, sleeper):
        generator = FakeGenerator("{}")
        with pytest.raises(ConfigurationError):
            _plan(TripPlanner(no_key_settings, generator, sleep=sleeper), "Rome")
        assert generator.calls == []

    @pytest.mark.parametrize("prompt", ["", "   \n"])
    def test_blank_prompt_is_invalid_request(self, settings, sleeper, prompt):
        generator = FakeGenerator("{}")
        with pytest.raises(InvalidRequest) as excinfo:
            _plan(TripPlanner(settings, generator, sleep=sleeper), prompt)
        assert excinfo.value.kind is ErrorKind.INVALID_REQUEST
        assert excinfo.value.status_code == 400
        assert generator.calls == []

    def test_unparseable_reply_is_not_retried(self, settings, sleeper):
        generator = FakeGenerator("Sorry, I cannot help with that.")
        with pytest.raises(MalformedResponse):
            _plan(TripPlanner(settings, generator, sleep=sleeper), "Rome")
        assert len(generator.calls) == 1
        assert sleeper.delays_ms == []

    def test_overload_then_success(self, settings, sleeper):
        generator = FakeGenerator(UpstreamError(OVERLOAD_MESSAGE), TOKYO_REPLY)
        itinerary = _plan(TripPlanner(settings, generator, sleep=sleeper), "Tokyo")
        assert itinerary.destination == "Tokyo"
        assert len(sleeper.delays_ms) == 1

    def test_persistent_overload(self, settings, sleeper):
        generator = FakeGenerator(UpstreamError(OVERLOAD_MESSAGE))
        with pytest.raises(ServiceOverloaded):
            _plan(TripPlanner(settings, generator, sleep=sleeper), "Tokyo")
        assert len(generator.calls) == settings.max_retries + 1

    def test_upstream_failure_propagates(self, settings, sleeper):
        failure = UpstreamError("403 PERMISSION_DENIED", upstream_status=403)
        generator = FakeGenerator(failure)
        with pytest.raises(UpstreamError) as excinfo:
            _plan(TripPlanner(settings, generator, sleep=sleeper), "Tokyo")
        assert excinfo.value is failure

    def test_retry_policy_comes_from_settings(self):
        planner = TripPlanner(Settings(gemini_api_key="k", max_retries=1, base_delay_ms=10), FakeGenerator("{}"))
        assert planner.policy.max_retries == 1
        assert planner.policy.base_delay_ms == 10
