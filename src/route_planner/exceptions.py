class RoutePlannerError(Exception):
    """Base class for route planner errors."""


class EmptyCandidateSet(RoutePlannerError):
    """Nearest stop requested from an empty candidate list."""


class MeasurementFailure(RoutePlannerError):
    """The distance oracle could not produce distances."""


class ResultLengthMismatch(RoutePlannerError):
    """The distance oracle returned a different number of distances than candidates."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"Expected {expected} distances, received {received}")


class InvalidInputLocation(RoutePlannerError):
    """A location could not be validated or geocoded."""


class RouteIntegrityError(RoutePlannerError):
    """A sequenced route is not the origin followed by a permutation of the stops."""


class DirectionsError(RoutePlannerError):
    """Turn-by-turn directions could not be retrieved."""
