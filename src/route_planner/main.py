import sys
import argparse
import logging

from . import config
from .exceptions import RoutePlannerError
from .models.distance_oracle import HaversineOracle
from .planner import PlannerSession
from .utils.data_loader import StopDataLoader
from .utils.location_store import LocationStore
from .utils.ors_client import ORSClient
from .utils.route_validator import RouteValidator

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Nearest-neighbour route planner')
    parser.add_argument('--add', action='append', default=[], metavar='ADDRESS',
                      help='Location to geocode and add (repeatable, first one is the start)')
    parser.add_argument('--data', help='CSV file with latitude/longitude columns')
    parser.add_argument('--clear', action='store_true',
                      help='Forget stored locations and exit')
    parser.add_argument('--store', default=config.STORE_PATH,
                      help='Path to the stored locations file')
    parser.add_argument('--output', default=config.OUTPUT_MAP,
                      help='Output HTML map file')
    parser.add_argument('--oracle', choices=['ors', 'haversine'], default='ors',
                      help='Distance source used to order the stops')
    parser.add_argument('--debug', action='store_true',
                      help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        store = LocationStore(args.store)
        if args.clear:
            store.clear()
            logger.info("Stored locations cleared")
            return

        ors_client = ORSClient()
        oracle = HaversineOracle() if args.oracle == 'haversine' else ors_client
        session = PlannerSession(ors_client, store, oracle=oracle, output_file=args.output)

        if args.data:
            for stop in StopDataLoader(args.data).get_stops():
                session.add_stop(stop)
        for address in args.add:
            session.add_location(address)

        if session.stops:
            input_stops = list(session.stops)
            route = session.submit()
        else:
            input_stops = None
            route = session.restore()

        if route is None:
            logger.info("Nothing to plan: add locations with --add or --data")
            return

        for label, stop in zip(route.labels(), route):
            logger.info(f"{label}: {stop.display_name}")
        if input_stops:
            try:
                RouteValidator(route, input_stops, oracle).compare_methods()
            except RoutePlannerError as e:
                logger.warning(f"Route analysis skipped: {e}")

    except KeyboardInterrupt:
        logger.info("\nProcessing interrupted by user")
        sys.exit(0)
    except RoutePlannerError as e:
        logger.error(f"Route planning failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
