import pytest

from route_planner.exceptions import DirectionsError, InvalidInputLocation
from route_planner.models.stop import Stop


def directions_for(coordinates):
    """Minimal ORS-style GeoJSON with one segment per leg."""
    legs = len(coordinates) - 1
    return {
        "type": "FeatureCollection",
        "features": [{
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [c.to_lnglat() for c in coordinates]},
            "properties": {
                "segments": [{"distance": 1500.0 * (i + 1), "duration": 600.0 * (i + 1)} for i in range(legs)],
            },
        }],
    }


class FakeORSClient:
    """Stands in for ORSClient: line distances, canned directions and geocoding."""

    def __init__(self, places=None, fail_directions=False):
        self.places = places or {}
        self.fail_directions = fail_directions
        self.measure_calls = 0
        self.direction_requests = []

    def measure(self, origin, candidates):
        self.measure_calls += 1
        return [abs(c.lat - origin.lat) + abs(c.lng - origin.lng) for c in candidates]

    def get_route_details(self, coordinates):
        self.direction_requests.append(list(coordinates))
        if self.fail_directions:
            raise DirectionsError("directions unavailable")
        return directions_for(coordinates)

    def geocode(self, text):
        if text not in self.places:
            raise InvalidInputLocation(f"Geocode was not successful for '{text}'")
        lat, lng = self.places[text]
        return Stop.at(lat, lng, label=text, address=f"{text}, Somewhere")


@pytest.fixture
def failing_client():
    return FakeORSClient(fail_directions=True)


@pytest.fixture
def fake_client():
    return FakeORSClient(places={
        "depot": (0.0, 0.0),
        "far": (0.0, 0.3),
        "near": (0.0, 0.1),
        "middle": (0.0, 0.2),
    })
