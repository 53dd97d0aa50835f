import logging
from typing import List, Protocol, Sequence

import numpy as np

from ..exceptions import MeasurementFailure
from .stop import Coordinate

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000.0


class DistanceOracle(Protocol):
    """Anything that can measure travel cost from one origin to many candidates.

    ``measure`` returns one number per candidate, in candidate order, or
    raises ``MeasurementFailure``. Units are up to the implementation as
    long as values from a single call are comparable.
    """

    def measure(self, origin: Coordinate, candidates: Sequence[Coordinate]) -> List[float]:
        ...


class HaversineOracle:
    """Straight-line (great-circle) distances in meters"""

    def measure(self, origin: Coordinate, candidates: Sequence[Coordinate]) -> List[float]:
        if not candidates:
            raise MeasurementFailure("No candidates to measure")

        lat1, lon1 = np.radians(origin.lat), np.radians(origin.lng)
        lat2 = np.radians([c.lat for c in candidates])
        lon2 = np.radians([c.lng for c in candidates])

        dlat = lat2 - lat1
        dlon = lon2 - lon1
        a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
        distances = 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(a))
        return distances.tolist()


class MatrixOracle:
    """Distances looked up in a precomputed square matrix.

    ``coordinates[i]`` is the location of row/column ``i`` of ``matrix``.
    """

    def __init__(self, coordinates: Sequence[Coordinate], matrix: Sequence[Sequence[float]]):
        self.matrix = np.asarray(matrix, dtype=float)
        if self.matrix.shape != (len(coordinates), len(coordinates)):
            raise ValueError(
                f"Matrix shape {self.matrix.shape} does not match {len(coordinates)} coordinates"
            )
        self._index = {}
        for idx, coordinate in enumerate(coordinates):
            self._index.setdefault(coordinate, idx)

    def _lookup(self, coordinate: Coordinate) -> int:
        try:
            return self._index[coordinate]
        except KeyError:
            raise MeasurementFailure(f"Coordinate {coordinate} not in distance matrix") from None

    def measure(self, origin: Coordinate, candidates: Sequence[Coordinate]) -> List[float]:
        if not candidates:
            raise MeasurementFailure("No candidates to measure")
        row = self._lookup(origin)
        columns = [self._lookup(c) for c in candidates]
        return self.matrix[row, columns].tolist()
