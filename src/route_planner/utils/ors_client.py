import logging
from typing import Dict, List, Optional, Sequence

import openrouteservice as ors
import requests
from openrouteservice import exceptions as ors_exceptions

from .. import config
from ..exceptions import DirectionsError, InvalidInputLocation, MeasurementFailure
from ..models.stop import Coordinate, Stop

logger = logging.getLogger(__name__)

ORS_ERRORS = (
    ors_exceptions.ApiError,
    ors_exceptions.HTTPError,
    ors_exceptions.Timeout,
    ors_exceptions.ValidationError,
    requests.exceptions.RequestException,
)


class ORSClient:
    """openrouteservice adapter: distance matrix, directions and geocoding.

    Coordinates go in and out as ``Coordinate`` (lat, lng); the [lng, lat]
    order ORS expects never leaves this class.
    """

    def __init__(self, client=None, profile: str = config.ORS_PROFILE):
        self._client = client
        self.profile = profile

    def _connect(self, error_cls):
        """The underlying ors.Client, created on first use"""
        if self._client is None:
            try:
                self._client = ors.Client(
                    key=config.ORS_API_KEY,
                    base_url=config.ORS_API_URL,
                    timeout=config.ORS_TIMEOUT,
                )
            except ValueError as e:
                logger.error(f"Cannot create ORS client: {e}")
                raise error_cls(f"openrouteservice is not configured: {e}") from e
        return self._client

    def _format_coordinates(self, coordinates: Sequence[Coordinate]) -> List[List[float]]:
        """Format coordinates as [longitude, latitude] for ORS API"""
        return [coordinate.to_lnglat() for coordinate in coordinates]

    def measure(self, origin: Coordinate, candidates: Sequence[Coordinate]) -> List[float]:
        """Driving distances in meters from ``origin`` to each candidate"""
        if not candidates:
            raise MeasurementFailure("No candidates to measure")

        locations = self._format_coordinates([origin, *candidates])
        logger.debug(f"Requesting distances from {origin} to {len(candidates)} candidates")
        try:
            matrix = self._connect(MeasurementFailure).distance_matrix(
                locations=locations,
                profile=self.profile,
                sources=[0],
                destinations=list(range(1, len(locations))),
                metrics=["distance"],
                units="m",
                validate=False,
            )
            distances = matrix["distances"][0]
        except ORS_ERRORS as e:
            logger.error(f"Matrix calculation failed: {e}")
            raise MeasurementFailure(f"Error calculating distances: {e}") from e
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected matrix response: {e}")
            raise MeasurementFailure(f"Malformed distance matrix response: {e}") from e

        if any(distance is None for distance in distances):
            unreachable = [idx for idx, distance in enumerate(distances) if distance is None]
            raise MeasurementFailure(f"No route from {origin} to candidates {unreachable}")

        return [float(distance) for distance in distances]

    def get_route_details(self, coordinates: Sequence[Coordinate]) -> Dict:
        """Driving directions through ``coordinates`` as a GeoJSON FeatureCollection"""
        if len(coordinates) < 2:
            raise DirectionsError("At least two coordinates are required for directions")
        try:
            return self._connect(DirectionsError).directions(
                coordinates=self._format_coordinates(coordinates),
                profile=self.profile,
                format="geojson",
                instructions=True,
                validate=False,
            )
        except ORS_ERRORS as e:
            logger.error(f"Directions request failed: {e}")
            raise DirectionsError(f"Error getting route: {e}") from e

    def geocode(self, text: str) -> Stop:
        """Resolve free text into a stop carrying the formatted address"""
        query = (text or "").strip()
        if not query:
            raise InvalidInputLocation("Please enter a valid location.")

        try:
            result = self._connect(InvalidInputLocation).pelias_search(text=query, size=1, validate=False)
        except ORS_ERRORS as e:
            logger.error(f"Geocoding error for '{query}': {e}")
            raise InvalidInputLocation(f"Geocode was not successful for '{query}': {e}") from e

        features = (result or {}).get("features") or []
        if not features:
            logger.warning(f"No results found for place: {query}")
            raise InvalidInputLocation(f"Geocode was not successful for '{query}': ZERO_RESULTS")

        feature = features[0]
        lng, lat = feature["geometry"]["coordinates"][:2]
        address: Optional[str] = feature.get("properties", {}).get("label")
        logger.debug(f"Geocoded '{query}' to {lat}, {lng}")
        return Stop(Coordinate(float(lat), float(lng)), label=query, address=address or query)
