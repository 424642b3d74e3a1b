"""Tests for request validation and the response wire shape."""

import pytest

from trip_planner.domain.errors import InvalidTripRequestError
from trip_planner.domain.models import TripRequest

VALID = {
    "destination": "Kyoto",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "budget": 4500,
    "companions": 2,
    "preferences": "food",
}


class TestTripRequest:
    def test_from_payload(self):
        request = TripRequest.from_payload(VALID)
        assert request == TripRequest("Kyoto", "2025-04-01", "2025-04-03", 4500, 2, "food")

    def test_preferences_optional(self):
        payload = {k: v for k, v in VALID.items() if k != "preferences"}
        request = TripRequest.from_payload(payload)
        assert request.preferences is None
        assert request.preferences_text == "no particular preferences"

    def test_same_day_trip_allowed(self):
        request = TripRequest.from_payload({**VALID, "endDate": "2025-04-01"})
        assert request.start_date == request.end_date

    @pytest.mark.parametrize(
        "key", ["destination", "startDate", "endDate", "budget", "companions"]
    )
    def test_missing_field(self, key):
        payload = {k: v for k, v in VALID.items() if k != key}
        with pytest.raises(InvalidTripRequestError) as exc_info:
            TripRequest.from_payload(payload)
        assert exc_info.value.field_name == key

    @pytest.mark.parametrize(
        "override,field_name",
        [
            ({"startDate": "01/04/2025"}, "startDate"),
            ({"endDate": "2025-02-30"}, "endDate"),
            ({"startDate": "2025-04-05"}, "startDate"),
            ({"budget": 99}, "budget"),
            ({"budget": True}, "budget"),
            ({"budget": "4500"}, "budget"),
            ({"companions": 0}, "companions"),
            ({"companions": 11}, "companions"),
            ({"destination": "   "}, "destination"),
            ({"preferences": ["food"]}, "preferences"),
        ],
    )
    def test_invalid_payload(self, override, field_name):
        with pytest.raises(InvalidTripRequestError) as exc_info:
            TripRequest.from_payload({**VALID, **override})
        assert exc_info.value.field_name == field_name

    def test_bounds_are_inclusive(self):
        TripRequest("Oslo", "2025-01-01", "2025-01-02", budget=100, companions=1)
        TripRequest("Oslo", "2025-01-01", "2025-01-02", budget=100, companions=10)

    def test_preferences_text_is_stripped(self):
        request = TripRequest("Oslo", "2025-01-01", "2025-01-02", 500, 1, "  museums ")
        assert request.preferences_text == "museums"
