from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..exceptions import InvalidInputLocation


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self):
        if not (-90 <= self.lat <= 90 and -180 <= self.lng <= 180):
            raise InvalidInputLocation(f"Coordinate out of range: lat={self.lat}, lng={self.lng}")

    @classmethod
    def from_dict(cls, value: Dict) -> "Coordinate":
        """Build from a persisted {"lat": .., "lng": ..} object"""
        try:
            return cls(float(value["lat"]), float(value["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidInputLocation(f"Invalid location object: {value!r}") from e

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    def to_lnglat(self) -> List[float]:
        """Coordinates as [longitude, latitude] for ORS / GeoJSON"""
        return [self.lng, self.lat]

    def __str__(self) -> str:
        return f"({self.lat:.5f}, {self.lng:.5f})"


@dataclass(frozen=True)
class Stop:
    """A location to visit, with optional display metadata."""

    coordinate: Coordinate
    label: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def at(cls, lat: float, lng: float, label: Optional[str] = None, address: Optional[str] = None) -> "Stop":
        return cls(Coordinate(lat, lng), label=label, address=address)

    @property
    def display_name(self) -> str:
        return self.address or self.label or str(self.coordinate)


@dataclass
class Route:
    """Ordered visiting sequence; the first stop is the origin."""

    stops: List[Stop] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stops)

    def __iter__(self):
        return iter(self.stops)

    def __getitem__(self, index):
        return self.stops[index]

    @property
    def origin(self) -> Optional[Stop]:
        return self.stops[0] if self.stops else None

    @property
    def destination(self) -> Optional[Stop]:
        return self.stops[-1] if self.stops else None

    @property
    def waypoints(self) -> List[Stop]:
        return self.stops[1:-1]

    def coordinates(self) -> List[Coordinate]:
        return [stop.coordinate for stop in self.stops]

    def labels(self) -> List[str]:
        """Marker labels: Start, 1-based position for interior stops, End"""
        last = len(self.stops) - 1
        labels = []
        for index in range(len(self.stops)):
            if index == 0:
                labels.append("Start")
            elif index == last:
                labels.append("End")
            else:
                labels.append(str(index))
        return labels


def stops_from_coordinates(locations: Sequence[Dict]) -> List[Stop]:
    """Turn persisted {lat, lng} objects into stops, keeping their order"""
    return [Stop(Coordinate.from_dict(location)) for location in locations]
