import logging
from typing import Dict, List, Sequence

from tabulate import tabulate

from ..exceptions import RouteIntegrityError

logger = logging.getLogger(__name__)


def validate_route(visit_order: Sequence[int], total_stops: int) -> None:
    """Check that ``visit_order`` visits every input position exactly once.

    ``visit_order`` holds the input index of each stop placed after the origin.
    """
    if len(visit_order) != total_stops:
        raise RouteIntegrityError(f"Route visits {len(visit_order)} stops, expected {total_stops}")

    seen = set()
    for position in visit_order:
        if position in seen:
            raise RouteIntegrityError(f"Stop {position} visited more than once")
        if not 0 <= position < total_stops:
            raise RouteIntegrityError(f"Unknown stop index {position}")
        seen.add(position)


class RouteValidator:
    """Compares the sequenced route against the order the stops were entered in."""

    def __init__(self, route, input_stops, oracle):
        self.route = route
        self.input_stops = list(input_stops)
        self.oracle = oracle

    def calculate_metrics(self, stops) -> Dict[str, float]:
        """Total and per-leg distance for visiting ``stops`` in order"""
        legs: List[float] = []
        for current, nxt in zip(stops, stops[1:]):
            legs.append(self.oracle.measure(current.coordinate, [nxt.coordinate])[0])

        total_distance = sum(legs)
        return {
            "num_stops": len(stops),
            "total_distance": total_distance,
            "longest_leg": max(legs) if legs else 0.0,
            "avg_leg": total_distance / len(legs) if legs else 0.0,
        }

    def compare_methods(self) -> List[list]:
        """Nearest neighbour vs. input order, printed as a grid table"""
        metrics_by_method = {
            "Nearest Neighbor": self.calculate_metrics(list(self.route)),
            "Input Order": self.calculate_metrics(self.input_stops),
        }

        baseline = metrics_by_method["Input Order"]["total_distance"]
        results = []
        for method, metrics in metrics_by_method.items():
            saving = (
                f"{(baseline - metrics['total_distance']) / baseline * 100:.1f}%"
                if baseline > 0 else "N/A"
            )
            results.append([
                method,
                f"{metrics['total_distance'] / 1000:.2f}",
                metrics["num_stops"],
                f"{metrics['longest_leg'] / 1000:.2f}",
                f"{metrics['avg_leg'] / 1000:.2f}",
                saving,
            ])

        headers = ["Method", "Distance (km)", "Stops", "Longest Leg (km)", "Avg Leg (km)", "Saving"]
        print("\nRoute Analysis:")
        print(tabulate(results, headers=headers, tablefmt="grid"))
        return results
