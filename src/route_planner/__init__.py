"""Greedy nearest-neighbour route planning over a pluggable distance oracle."""

from .exceptions import (
    DirectionsError,
    EmptyCandidateSet,
    InvalidInputLocation,
    MeasurementFailure,
    ResultLengthMismatch,
    RouteIntegrityError,
    RoutePlannerError,
)
from .models.distance_oracle import DistanceOracle, HaversineOracle, MatrixOracle
from .models.route_optimizer import RouteOptimizer, find_nearest
from .models.stop import Coordinate, Route, Stop

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "DirectionsError",
    "DistanceOracle",
    "EmptyCandidateSet",
    "HaversineOracle",
    "InvalidInputLocation",
    "MatrixOracle",
    "MeasurementFailure",
    "ResultLengthMismatch",
    "Route",
    "RouteIntegrityError",
    "RouteOptimizer",
    "RoutePlannerError",
    "Stop",
    "find_nearest",
]
