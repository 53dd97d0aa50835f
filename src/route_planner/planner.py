"""Application layer: the add / clear / submit flow around the route optimizer.

A ``PlannerSession`` owns everything the browser page used to keep in
globals: the pending stops, the persisted locations and the latest
rendered route. Each sequencing run gets a run number; clearing the
session or starting another run supersedes it, and a superseded run's
result is dropped instead of being rendered.
"""

import logging
from typing import List, Optional, Sequence

from . import config
from .exceptions import RoutePlannerError
from .models.route_optimizer import RouteOptimizer
from .models.stop import Route, Stop, stops_from_coordinates
from .utils.location_store import LocationStore
from .utils.map_visualizer import MapVisualizer

logger = logging.getLogger(__name__)


class PlannerSession:
    def __init__(self, ors_client, store: LocationStore, oracle=None,
                 output_file: str = config.OUTPUT_MAP):
        self.ors_client = ors_client
        self.store = store
        self.optimizer = RouteOptimizer(oracle or ors_client)
        self.output_file = output_file
        self.stops: List[Stop] = []
        self.route: Optional[Route] = None
        self._run_id = 0

    def add_location(self, text: str) -> Stop:
        """Geocode ``text`` and append it to the pending stops"""
        stop = self.ors_client.geocode(text)
        self.stops.append(stop)
        logger.info(f"Added location: {stop.display_name}")
        return stop

    def add_stop(self, stop: Stop) -> None:
        self.stops.append(stop)

    def clear(self) -> None:
        """Drop pending stops, stored locations and the rendered route"""
        self._run_id += 1
        self.stops = []
        self.route = None
        self.store.clear()

    def submit(self) -> Optional[Route]:
        """Persist the pending stops and sequence them"""
        if not self.stops:
            logger.warning("No locations to submit")
            return None
        self.store.save([stop.coordinate for stop in self.stops])
        return self.calculate_and_display_route(list(self.stops))

    def restore(self) -> Optional[Route]:
        """Re-run the stored locations from a previous session, if any"""
        locations = self.store.load()
        if not locations:
            return None
        logger.info(f"Restoring {len(locations)} stored locations")
        return self.calculate_and_display_route(stops_from_coordinates(locations))

    def is_current(self, run_id: int) -> bool:
        return run_id == self._run_id

    def calculate_and_display_route(self, stops: Sequence[Stop]) -> Optional[Route]:
        """Sequence ``stops`` (first one is the origin) and render the map.

        Returns None when a newer run or a clear superseded this one.
        """
        if not stops:
            return None

        self._run_id += 1
        run_id = self._run_id
        self.route = None

        try:
            route = self.optimizer.optimize_route(stops[0], stops[1:])
        except RoutePlannerError as e:
            logger.error(f"Route calculation failed: {e}")
            raise

        if not self.is_current(run_id):
            logger.info(f"Discarding result of superseded run {run_id}")
            return None

        MapVisualizer(route, self.ors_client).generate_map(self.output_file)
        self.route = route
        self.stops = list(route)
        return route
