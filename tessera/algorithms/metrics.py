"""
Distance metrics (:mod:`~tessera.algorithms.metrics`)
===========================================================================

Compute separations between coordinate vectors in standard or periodic
(tileable) extents, and ease periodic separations near the wrap-around
junction.


**Metric variants**

.. autosummary::

    DistanceMetric

**Separations**

.. autosummary::

    wrap_difference
    standard_distance
    periodic_distance
    canonical_position

**Easing**

.. autosummary::

    square_ease

|

"""
import numpy as np

__all__ = [
    'DistanceMetric',
    'sum_values',
    'wrap_difference',
    'standard_distance',
    'periodic_distance',
    'canonical_position',
    'square_ease',
]


# Metric variants
# -----------------------------------------------------------------------------

def sum_values(values):
    """Sum values over the last axis.

    Parameters
    ----------
    values : float, array_like
        Values to be summed.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        Sum over the last axis.

    """
    return np.sum(values, axis=-1)


def _squared(diff, axis):  # pylint: disable=unused-argument
    return np.square(diff)


def _absolute(diff, axis):  # pylint: disable=unused-argument
    return np.abs(diff)


def _root_sum(values):
    return np.sqrt(np.sum(values, axis=-1))


def _maximum(values):
    return np.max(values, axis=-1)


class DistanceMetric:
    r"""Distance metric built from an inner per-axis transform and an
    outer reduction.

    The distance between positions :math:`\mathbf{p}` and
    :math:`\mathbf{q}` is

    .. math::

        d(\mathbf{p}, \mathbf{q}) = \mathrm{outer}\left(
            [\mathrm{inner}(q_0 - p_0, 0), \dots,
             \mathrm{inner}(q_{D-1} - p_{D-1}, D - 1)]
        \right) \,.

    The named variants are Euclidean, taxicab, Chebyshev and Minkowski,
    whose functions act on whole arrays of differences.  Any other pair of
    callables gives a custom metric, whose functions are called on plain
    numbers: `inner` once per coordinate difference and `outer` once per
    position on the list of transformed differences.

    Parameters
    ----------
    inner : callable
        Per-axis transform ``inner(diff, axis)`` of a coordinate difference
        along `axis`.
    outer : callable
        Reduction ``outer(values)`` of the transformed differences to a
        non-negative distance.
    name : str, optional
        Metric name (default is ``'custom'``).
    power : float or None, optional
        Minkowski power if applicable (default is `None`).
    vectorised : bool, optional
        If `True` (default is `False`), `inner` acts elementwise on arrays
        and `outer` reduces over their last axis.

    Attributes
    ----------
    inner, outer : callable
        Per-axis transform and reduction.
    name : str
        Metric name.
    power : float or None
        Minkowski power, or `None` for other metrics.
    vectorised : bool
        Whether the functions act on whole arrays.

    Raises
    ------
    TypeError
        If either `inner` or `outer` is not callable.

    """

    def __init__(self, inner, outer, name='custom', power=None,
                 vectorised=False):

        if not callable(inner):
            raise TypeError("`inner` distance function must be callable.")
        if not callable(outer):
            raise TypeError("`outer` distance function must be callable.")

        self.inner = inner
        self.outer = outer
        self.name = name
        self.power = power
        self.vectorised = vectorised

    def __str__(self):

        if self.power is None:
            return f"{self.__class__.__name__}({self.name})"
        return f"{self.__class__.__name__}({self.name}, p={self.power})"

    def __call__(self, differences):
        """Reduce coordinate differences to distances.

        Parameters
        ----------
        differences : float, array_like
            Coordinate differences with axes along the last dimension.

        Returns
        -------
        float or float :class:`numpy.ndarray`
            Distances.

        """
        differences = np.asarray(differences, dtype=float)
        if self.vectorised:
            transformed = np.stack(
                [
                    self.inner(differences[..., axis], axis)
                    for axis in range(differences.shape[-1])
                ],
                axis=-1
            )
            return self.outer(transformed)

        transformed = np.empty_like(differences)
        for axis in range(differences.shape[-1]):
            transformed[..., axis] = np.vectorize(
                lambda diff, axis=axis: self.inner(float(diff), axis),
                otypes=[float]
            )(differences[..., axis])

        if transformed.ndim == 1:
            return self._reduce(transformed)
        return np.apply_along_axis(self._reduce, -1, transformed)

    @classmethod
    def euclidean(cls):
        """Euclidean distance, ``sqrt(sum(d**2))``.

        """
        return cls(_squared, _root_sum, name='euclidean', vectorised=True)

    @classmethod
    def taxicab(cls):
        """Taxicab (Manhattan) distance, ``sum(|d|)``.

        """
        return cls(_absolute, sum_values, name='taxicab', vectorised=True)

    @classmethod
    def chebyshev(cls):
        """Chebyshev (chessboard) distance, ``max(|d|)``.

        """
        return cls(_absolute, _maximum, name='chebyshev', vectorised=True)

    @classmethod
    def minkowski(cls, power=2):
        """Minkowski distance of order `power`, ``sum(|d|**p)**(1/p)``.

        Parameters
        ----------
        power : float, optional
            Minkowski order, ``power > 0`` (default is 2).

        Returns
        -------
        :class:`DistanceMetric`
            Minkowski metric.

        Raises
        ------
        ValueError
            If `power` is not positive.

        """
        try:
            power = float(power)
        except TypeError as err:
            raise TypeError("Minkowski `power` must be a number.") from err
        if not power > 0:
            raise ValueError("Minkowski `power` must be positive.")

        def inner(diff, axis):  # pylint: disable=unused-argument
            return np.power(np.abs(diff), power)

        def outer(values):
            return np.power(np.sum(values, axis=-1), 1. / power)

        return cls(inner, outer, name='minkowski', power=power,
                   vectorised=True)

    @classmethod
    def custom(cls, inner, outer):
        """Custom metric from an inner transform and an outer reduction.

        `inner` is called as ``inner(diff, axis)`` on each coordinate
        difference and `outer` on the list of transformed differences of
        each position, so plain scalar functions such as :func:`abs`,
        :func:`max` or :func:`sum` may be used.

        """
        return cls(inner, outer, name='custom')

    @classmethod
    def from_name(cls, name, power=2):
        """Named metric variant.

        Parameters
        ----------
        name : {'euclidean', 'taxicab', 'chebyshev', 'minkowski'}
            Metric name.  Aliases 'manhattan' and 'chessboard' are
            accepted.
        power : float, optional
            Minkowski order, ignored unless `name` is 'minkowski' (default
            is 2).

        Returns
        -------
        :class:`DistanceMetric`
            Metric variant.

        """
        name = cls._alias(name)
        if name == 'minkowski':
            return cls.minkowski(power)

        return getattr(cls, name)()

    def _reduce(self, transformed):

        return float(self.outer(transformed.tolist()))

    @staticmethod
    def _alias(name):

        if not isinstance(name, str):
            raise TypeError(f"Metric name must be a string: {name}.")

        name = name.lower()
        if name.startswith('e'):
            return 'euclidean'
        if name.startswith(('t', 'manh')):
            return 'taxicab'
        if name.startswith('che'):
            return 'chebyshev'
        if name.startswith('min'):
            return 'minkowski'

        raise ValueError(f"Unknown metric `name`: {name}.")


# Separations
# -----------------------------------------------------------------------------

def wrap_difference(diff, width):
    """Wrap coordinate differences the short way around a periodic axis.

    Parameters
    ----------
    diff : float, array_like
        Coordinate differences.
    width : float, array_like
        Axis width, broadcastable against `diff`.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        Wrapped absolute differences, ``min(|diff|, width - |diff|)``.

    """
    diff = np.abs(diff)

    return np.minimum(diff, width - diff)


def standard_distance(point1, point2):
    """Euclidean distance between points.

    Parameters
    ----------
    point1, point2 : float, array_like
        Points with coordinates along the last dimension.  Leading
        dimensions broadcast.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        Euclidean distance.

    """
    diff = np.subtract(point2, point1)

    return np.sqrt(np.sum(np.square(diff), axis=-1))


def periodic_distance(point1, point2, extent, periodic):
    """Euclidean distance between points in an extent with some axes
    wrapped periodically.

    Parameters
    ----------
    point1, point2 : float, array_like
        Points with coordinates along the last dimension.  Leading
        dimensions broadcast.
    extent : float, array_like
        Extent bounds of shape ``(D, 2)``.
    periodic : bool, array_like
        Periodic flags of shape ``(D,)``.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        Distance with periodic axes measured the short way around.

    """
    extent = np.asarray(extent, dtype=float)
    periodic = np.asarray(periodic, dtype=bool)

    diff = np.subtract(point2, point1)
    width = extent[:, 1] - extent[:, 0]

    diff = np.where(periodic, wrap_difference(diff, width), diff)

    return np.sqrt(np.sum(np.square(diff), axis=-1))


def canonical_position(position, lower, upper):
    """Map coordinates into ``[lower, upper)`` periodically.

    Parameters
    ----------
    position : float, array_like
        Coordinates.
    lower, upper : float, array_like
        Period bounds, broadcastable against `position`.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        In-bounds representative coordinates.

    """
    width = np.subtract(upper, lower)

    normalised = (np.asarray(position, dtype=float) - lower) / width
    normalised = normalised - np.floor(normalised)

    return lower + width * normalised


# Easing
# -----------------------------------------------------------------------------

def square_ease(value, w_start=0.05, w_end=0.05):
    r"""Easing function which is linear except near the ends of the unit
    interval, where quadratic pieces flatten it out.

    With :math:`c = 1 / (2 - w_s - w_e)`,

    .. math::

        E(v) =
            \begin{cases}
                0 \,, & v \leq 0 \,; \\
                (c / w_s) v^2 \,, & 0 < v \leq w_s \,; \\
                2 c v - w_s c \,, & w_s < v \leq 1 - w_e \,; \\
                1 - (c / w_e) (1 - v)^2 \,, & 1 - w_e < v \leq 1 \,; \\
                1 \,, & v > 1 \,,
            \end{cases}

    which is continuous with continuous slope, and monotonically
    non-decreasing from :math:`E(0) = 0` to :math:`E(1) = 1`.

    Parameters
    ----------
    value : float, array_like
        Value(s) to be eased.
    w_start, w_end : float, optional
        Widths of the starting and ending quadratic portions (default is
        0.05 each), ``w_start + w_end <= 1``.

    Returns
    -------
    float or float :class:`numpy.ndarray`
        Eased value(s).

    Raises
    ------
    ValueError
        If `w_start` and `w_end` sum to more than 1.

    """
    if w_start + w_end > 1:
        raise ValueError("The sum of `w_start` and `w_end` cannot exceed 1.")

    common = 1. / (2. - (w_start + w_end))

    value = np.asarray(value, dtype=float)

    conditions = [
        (value > 0) & (value <= w_start),
        (value > w_start) & (value <= 1 - w_end),
        (value > 1 - w_end) & (value <= 1),
        value > 1,
    ]
    # Pieces are only evaluated where their condition holds, so zero
    # widths never divide.
    pieces = [
        lambda v: common / w_start * v**2,
        lambda v: 2 * common * v - w_start * common,
        lambda v: 1 - common / w_end * (1 - v)**2,
        1.,
        0.,
    ]

    eased = np.piecewise(value, conditions, pieces)

    return eased if eased.ndim else float(eased)
