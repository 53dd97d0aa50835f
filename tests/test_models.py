import pytest

from route_planner.exceptions import InvalidInputLocation, MeasurementFailure
from route_planner.models.distance_oracle import HaversineOracle, MatrixOracle
from route_planner.models.stop import Coordinate, Route, Stop, stops_from_coordinates


def test_coordinate_equality_and_conversions():
    coordinate = Coordinate(48.8566, 2.3522)

    assert coordinate == Coordinate(48.8566, 2.3522)
    assert coordinate.to_dict() == {"lat": 48.8566, "lng": 2.3522}
    assert coordinate.to_lnglat() == [2.3522, 48.8566]
    assert Coordinate.from_dict({"lat": "48.8566", "lng": 2.3522}) == coordinate


@pytest.mark.parametrize("value", [{"lat": 1.0}, {"lat": "x", "lng": 2}, None])
def test_coordinate_from_bad_dict(value):
    with pytest.raises(InvalidInputLocation):
        Coordinate.from_dict(value)


def test_coordinate_out_of_range():
    with pytest.raises(InvalidInputLocation):
        Coordinate(91.0, 0.0)


def test_route_labels():
    stops = [Stop.at(0, i) for i in range(4)]

    assert Route(stops).labels() == ["Start", "1", "2", "End"]
    assert Route(stops[:2]).labels() == ["Start", "End"]
    assert Route(stops[:1]).labels() == ["Start"]
    assert Route(stops).waypoints == stops[1:3]


def test_stops_from_coordinates_keeps_order():
    stops = stops_from_coordinates([{"lat": 1, "lng": 2}, {"lat": 3, "lng": 4}])

    assert [stop.coordinate for stop in stops] == [Coordinate(1, 2), Coordinate(3, 4)]
    assert stops[0].display_name == "(1.00000, 2.00000)"


def test_haversine_oracle_distances():
    origin = Coordinate(0.0, 0.0)
    distances = HaversineOracle().measure(origin, [Coordinate(0.0, 1.0), Coordinate(0.0, 0.0)])

    # one degree of longitude at the equator
    assert distances[0] == pytest.approx(111195, rel=1e-3)
    assert distances[1] == 0


def test_matrix_oracle_lookup():
    a, b, c = Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)
    oracle = MatrixOracle([a, b, c], [[0, 5, 9], [4, 0, 2], [8, 3, 0]])

    assert oracle.measure(b, [c, a]) == [2, 4]

    with pytest.raises(MeasurementFailure):
        oracle.measure(Coordinate(5, 5), [a])


def test_matrix_oracle_shape_mismatch():
    with pytest.raises(ValueError):
        MatrixOracle([Coordinate(0, 0)], [[0, 1], [1, 0]])
