import math

import numpy as np
import pytest

from tessera.algorithms.metrics import (
    DistanceMetric,
    canonical_position,
    periodic_distance,
    square_ease,
    standard_distance,
    wrap_difference,
)


@pytest.mark.parametrize(
    "value,w_start,w_end,eased",
    [
        (0., 0.05, 0.05, 0.),
        (1., 0.05, 0.05, 1.),
        (0.5, 0.05, 0.05, 0.5),
        (-1., 0.05, 0.05, 0.),
        (2., 0.05, 0.05, 1.),
        (0.025, 0.05, 0.05, 0.025**2 / 0.05 / 1.9),
        (0.3, 0., 0., 0.3),
        (0.5, 0.5, 0.5, 0.5),
    ]
)
def test_square_ease(value, w_start, w_end, eased):
    assert square_ease(value, w_start, w_end) == pytest.approx(eased), \
        "Incorrect eased value."


@pytest.mark.parametrize("w_start,w_end", [(0.05, 0.05), (0.2, 0.1)])
def test_square_ease_monotonicity(w_start, w_end):
    eased = square_ease(np.linspace(0., 1., 1001), w_start, w_end)
    assert np.all(np.diff(eased) >= 0), "Eased values are not monotonic."


@pytest.mark.parametrize("w_start,w_end", [(0.05, 0.05), (0.2, 0.1)])
def test_square_ease_smoothness(w_start, w_end):
    step = 1.e-7
    for junction in (w_start, 1 - w_end):
        value_below, value_at, value_above = square_ease(
            [junction - step, junction, junction + step], w_start, w_end
        )
        slope_below = (value_at - value_below) / step
        slope_above = (value_above - value_at) / step
        assert slope_below == pytest.approx(slope_above, rel=1.e-4), \
            "Eased slope is discontinuous at a junction."


def test_square_ease_invalid_widths():
    with pytest.raises(ValueError):
        square_ease(0.5, 0.6, 0.5)


@pytest.mark.parametrize(
    "diff,width,wrapped",
    [
        (0.6, 1., 0.4),
        (0.3, 1., 0.3),
        (-0.7, 1., 0.3),
        ([1.5, -0.5], [2., 2.], [0.5, 0.5]),
    ]
)
def test_wrap_difference(diff, width, wrapped):
    assert wrap_difference(diff, width) == pytest.approx(wrapped), \
        "Incorrect wrapped difference."


@pytest.mark.parametrize(
    "point1,point2,distance",
    [
        ([0., 0.], [3., 4.], 5.),
        ([[0., 0.], [1., 1.]], [1., 1.], [np.sqrt(2), 0.]),
    ]
)
def test_standard_distance(point1, point2, distance):
    assert standard_distance(point1, point2) == pytest.approx(distance), \
        "Incorrect standard distance."


@pytest.mark.parametrize(
    "periodic,distance",
    [
        ([True, False], 0.2),
        ([False, False], 0.8),
        ([True, True], 0.2),
    ]
)
def test_periodic_distance(periodic, distance):
    assert periodic_distance(
        [0.1, 0.1], [0.9, 0.1], [[0., 1.], [0., 1.]], periodic
    ) == pytest.approx(distance), "Incorrect periodic distance."


@pytest.mark.parametrize(
    "position,lower,upper,mapped",
    [
        (1.8, 0., 1., 0.8),
        (-0.25, 0., 1., 0.75),
        (0.5, 0., 1., 0.5),
        (3., -1., 1., -1.),
        ([2.5, -3.5], [0., 0.], [1., 2.], [0.5, 0.5]),
    ]
)
def test_canonical_position(position, lower, upper, mapped):
    assert canonical_position(position, lower, upper) \
        == pytest.approx(mapped), "Incorrect canonical position."


class TestDistanceMetric:

    @pytest.mark.parametrize(
        "metric,differences,distance",
        [
            (DistanceMetric.euclidean(), [3., 4.], 5.),
            (DistanceMetric.taxicab(), [3., -4.], 7.),
            (DistanceMetric.chebyshev(), [3., -4.], 4.),
            (DistanceMetric.minkowski(3), [1., 1.], 2**(1/3)),
            (DistanceMetric.minkowski(3), [-1., -1.], 2**(1/3)),
            (DistanceMetric.minkowski(1), [3., -4.], 7.),
        ]
    )
    def test___call__(self, metric, differences, distance):
        assert metric(differences) == pytest.approx(distance), \
            f"Incorrect distance for {metric}."

    def test___call___vectorised(self):
        distances = DistanceMetric.euclidean()([[3., 4.], [0., 1.], [0., 0.]])
        assert distances == pytest.approx([5., 1., 0.]), \
            "Incorrect distances for stacked differences."

    def test_custom_axis_argument(self):
        metric = DistanceMetric.custom(
            lambda diff, axis: (axis + 1) * np.abs(diff),
            lambda values: np.sum(values, axis=-1)
        )
        assert metric([1., -1.]) == pytest.approx(3.), \
            "Inner distance function does not receive the axis index."

    @pytest.mark.parametrize(
        "inner,outer,differences,distance",
        [
            (lambda d, i: math.fabs(d), max, [3., -4.], 4.),
            (lambda d, i: abs(d), max, [[3., -4.], [1., 2.]], [4., 2.]),
            (lambda d, i: abs(d), sum, [[1., 2.], [3., -4.]], [3., 7.]),
            (lambda d, i: d * d, lambda values: sum(values)**0.5, [3., 4.], 5.),
        ]
    )
    def test___call___scalar_functions(self, inner, outer, differences,
                                       distance):
        metric = DistanceMetric.custom(inner, outer)
        assert metric(differences) == pytest.approx(distance), \
            "Incorrect distance from scalar distance functions."

    @pytest.mark.parametrize(
        "name,canonical_name",
        [
            ('Euclidean', 'euclidean'),
            ('manhattan', 'taxicab'),
            ('taxicab', 'taxicab'),
            ('chessboard', 'chebyshev'),
            ('chebyshev', 'chebyshev'),
            ('minkowski', 'minkowski'),
        ]
    )
    def test_from_name(self, name, canonical_name):
        assert DistanceMetric.from_name(name).name == canonical_name, \
            "Incorrect metric variant from name."

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            DistanceMetric.from_name('hamming')

    @pytest.mark.parametrize(
        "inner,outer",
        [
            (None, np.sum),
            (np.abs, 'sum'),
        ]
    )
    def test_invalid_functions(self, inner, outer):
        with pytest.raises(TypeError):
            DistanceMetric(inner, outer)

    @pytest.mark.parametrize("power", [0, -2.])
    def test_minkowski_invalid_power(self, power):
        with pytest.raises(ValueError):
            DistanceMetric.minkowski(power)
