import logging
from typing import List, Sequence, Tuple

from ..exceptions import EmptyCandidateSet, MeasurementFailure, ResultLengthMismatch, RoutePlannerError
from ..utils.route_validator import validate_route
from .distance_oracle import DistanceOracle
from .stop import Coordinate, Route, Stop

logger = logging.getLogger(__name__)


def find_nearest(oracle: DistanceOracle, origin: Coordinate, remaining: Sequence[Stop]) -> Tuple[Stop, int]:
    """Return the stop in ``remaining`` closest to ``origin`` and its index.

    The oracle is queried exactly once. Ties go to the earliest candidate.
    """
    if not remaining:
        raise EmptyCandidateSet("No remaining stops to choose from")

    candidates = [stop.coordinate for stop in remaining]
    try:
        distances = oracle.measure(origin, candidates)
    except RoutePlannerError:
        raise
    except Exception as e:
        logger.error(f"Distance measurement failed: {e}")
        raise MeasurementFailure(f"Error measuring distances from {origin}: {e}") from e

    if distances is None or len(distances) != len(candidates):
        received = 0 if distances is None else len(distances)
        logger.error(f"Oracle returned {received} distances for {len(candidates)} candidates")
        raise ResultLengthMismatch(len(candidates), received)

    nearest_idx = 0
    for idx in range(1, len(distances)):
        if distances[idx] < distances[nearest_idx]:
            nearest_idx = idx

    logger.debug(f"Nearest to {origin}: index {nearest_idx} at {distances[nearest_idx]}")
    return remaining[nearest_idx], nearest_idx


class RouteOptimizer:
    """Orders stops with the greedy nearest-neighbour heuristic.

    Holds nothing but the oracle; every call to ``optimize_route`` works on
    its own copy of the stops.
    """

    def __init__(self, oracle: DistanceOracle):
        self.oracle = oracle

    def find_nearest(self, origin: Coordinate, remaining: Sequence[Stop]) -> Tuple[Stop, int]:
        return find_nearest(self.oracle, origin, remaining)

    def optimize_route(self, origin: Stop, stops: Sequence[Stop]) -> Route:
        """Build a route from ``origin`` through every stop in ``stops``.

        Any oracle failure aborts the whole run; no partial route is returned.
        """
        route: List[Stop] = [origin]
        if not stops:
            return Route(route)

        # (input position, stop); positions identify stops that share a coordinate
        remaining: List[Tuple[int, Stop]] = list(enumerate(stops))
        visit_order: List[int] = []

        try:
            while remaining:
                current = route[-1]
                _, idx = self.find_nearest(current.coordinate, [stop for _, stop in remaining])
                position, nearest = remaining.pop(idx)
                route.append(nearest)
                visit_order.append(position)

                if len(route) % 10 == 0 or not remaining:
                    logger.debug(f"Progress: {len(route) - 1}/{len(stops)} stops sequenced")
        except Exception as e:
            logger.error(f"Route optimization failed: {e}")
            raise

        validate_route(visit_order, len(stops))
        logger.info(f"Sequenced {len(stops)} stops from {origin.display_name}")
        return Route(route)
