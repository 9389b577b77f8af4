import math

import pytest

from turnroute.errors import DimensionMismatchError
from turnroute.models.domain import Point, Vector
from turnroute.services.geometry import (
    common_dimension,
    distance,
    distance_matrix,
    dot,
    length,
    route_length,
    route_valid,
    turn_valid,
    vector_between,
)


def _p(*coords: float) -> Point:
    return Point.of(*coords)


def test_vector_between_subtracts_start_from_end():
    vector = vector_between(_p(1, 2, 3), _p(4, 6, 3))

    assert vector == Vector((3.0, 4.0, 0.0))
    assert length(vector) == 5.0


def test_distance_is_symmetric_and_euclidean():
    a, b = _p(0, 0), _p(3, 4)

    assert distance(a, b) == 5.0
    assert distance(b, a) == 5.0
    assert distance(a, a) == 0.0


def test_dimension_mismatch_raises():
    with pytest.raises(DimensionMismatchError):
        vector_between(_p(0, 0), _p(0, 0, 0))
    with pytest.raises(DimensionMismatchError):
        distance(_p(1), _p(1, 2))
    with pytest.raises(DimensionMismatchError):
        dot(Vector((1.0, 0.0)), Vector((1.0,)))
    with pytest.raises(DimensionMismatchError):
        turn_valid(_p(0, 0), _p(1, 0), _p(1, 1, 1))


def test_dot_and_cos():
    v1 = Vector((1.0, 0.0))
    v2 = Vector((0.0, 2.0))

    assert dot(v1, v2) == 0.0
    assert v1.cos(Vector((-3.0, 0.0))) == -1.0
    with pytest.raises(ValueError):
        v1.cos(Vector((0.0, 0.0)))


def test_zero_dimensional_points():
    assert distance(Point(()), Point(())) == 0.0
    assert turn_valid(Point(()), Point(()), Point(()))


def test_straight_line_turn_is_valid():
    # vectors (-1, 0) and (1, 0) give dot = -1
    assert turn_valid(_p(0, 0), _p(1, 0), _p(2, 0))


def test_right_angle_turn_is_valid_inclusive_boundary():
    assert turn_valid(_p(0, 0), _p(1, 0), _p(1, 1))


def test_acute_turn_is_invalid():
    assert not turn_valid(_p(0, 0), _p(1, 0), _p(0, 0.5))


def test_tolerance_widens_accepted_band():
    p, q, r = _p(0, 0), _p(1, 0), _p(1.5, 1)
    # dot((-1, 0), (-0.25, 1)) == 0.25
    r_back = _p(0.75, 1)

    assert turn_valid(p, q, r)
    assert not turn_valid(p, q, r_back)
    assert turn_valid(p, q, r_back, tolerance=0.25)


def test_route_valid_short_routes_are_trivially_valid():
    assert route_valid([])
    assert route_valid([_p(0, 0)])
    assert route_valid([_p(0, 0), _p(5, 5)])


def test_route_valid_checks_every_triple():
    good = [_p(0, 0), _p(1, 0), _p(1, 1), _p(0, 1)]
    bad = [_p(0, 0), _p(1, 0), _p(1, 1), _p(0.5, 0)]

    assert route_valid(good)
    assert not route_valid(bad)


@pytest.mark.parametrize(
    "route",
    [
        [(0, 0), (1, 0), (1, 1), (0, 1)],
        [(0, 0), (2, 1), (0, 1), (3, 3)],
        [(0, 0, 0), (1, 0, 0), (1, 1, 0), (1, 1, 1), (0, 1, 1)],
    ],
)
def test_route_reversal_preserves_validity_and_length(route):
    points = [Point(coords) for coords in route]
    reversed_points = list(reversed(points))

    assert route_valid(points) == route_valid(reversed_points)
    assert math.isclose(route_length(points), route_length(reversed_points))


def test_route_length_sums_legs():
    assert route_length([_p(0, 0), _p(1, 0), _p(1, 1), _p(0, 1)]) == 3.0
    assert route_length([_p(2, 2)]) == 0.0


def test_distance_matrix_matches_distance():
    points = [_p(0, 0), _p(3, 4), _p(6, 8)]
    matrix = distance_matrix(points)

    assert matrix[0][1] == 5.0
    assert matrix[2][0] == 10.0
    assert all(matrix[i][i] == 0.0 for i in range(3))


def test_common_dimension():
    assert common_dimension([]) is None
    assert common_dimension([_p(1, 2), _p(3, 4)]) == 2
    with pytest.raises(DimensionMismatchError):
        common_dimension([_p(1, 2), _p(3)])


def test_point_rendering_and_equality():
    point = Point((1, 2.5))

    assert str(point) == "1.0 2.5"
    assert point == _p(1.0, 2.5)
    assert point.dimension == 2
    assert len({point, _p(1, 2.5)}) == 1
