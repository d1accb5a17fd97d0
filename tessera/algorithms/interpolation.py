"""
Inverse distance weighting (:mod:`~tessera.algorithms.interpolation`)
===========================================================================

Interpolate scattered data in arbitrary dimensions by inverse distance
weighting, with configurable distance metrics and optional periodic
(tileable) boundaries.

.. autosummary::

    InverseDistanceWeighting

|

"""
import logging
from collections import namedtuple
from collections.abc import Mapping

import numpy as np

from tessera.utils import batch_compute

from .metrics import DistanceMetric, canonical_position, square_ease

DEFAULT_PERIODIC_SMOOTHING = 0.05

_Configuration = namedtuple(
    '_Configuration',
    ['metric', 'weight_function', 'denominator_offset', 'periodic_smoothing']
)


class InverseDistanceWeighting:
    r"""Inverse distance weighting interpolator of a scalar field.

    The interpolated value at position :math:`\mathbf{x}` is

    .. math::

        f(\mathbf{x}) = \sum_i w_i z_i \,, \quad
        w_i \propto \frac{1}{d(\mathbf{x}, \mathbf{p}_i)^p + \epsilon} \,,

    where :math:`(\mathbf{p}_i, z_i)` are the data positions and values,
    :math:`d` is the distance metric, :math:`p` the power and
    :math:`\epsilon` the denominator offset.  The weights are normalised
    to unit sum, optionally transformed by a weight function and then
    renormalised.

    If a periodic extent is given, coordinates along its axes wrap around
    and their separations are eased by :func:`~.metrics.square_ease` so
    that the interpolated field has no creases where the two ways around
    the wrap are equally long.

    Notes
    -----
    The data are stored as read-only arrays and never change.  Metric and
    weight settings form a configuration snapshot that reconfiguration
    methods replace as a whole; :meth:`evaluate` reads the snapshot once,
    so concurrent evaluations are safe provided reconfiguration is done by
    a single writer.

    Parameters
    ----------
    positions : float, array_like
        Data positions of shape ``(N, D)``, or ``(N,)`` in 1-d.
    values : float, array_like
        Data values of shape ``(N,)``.
    periodic_extent : dict or None, optional
        Lower and upper bounds accessed by the index of each periodic axis
        (default is `None`).  Axes not present are not periodic.
    metric : :class:`~.metrics.DistanceMetric`, str or None, optional
        Distance metric or its name.  If `None` (default), the Euclidean
        metric is used unless both distance functions below are given.
    inner_dist_function, outer_dist_function : callable or None, optional
        Per-axis transform ``inner(diff, axis)`` of a coordinate difference
        and reduction ``outer(values)`` of the transformed differences of a
        custom metric (default is `None`).  Ignored if `metric` is given.
    weight_function : callable or None, optional
        Transform ``weight_function(w)`` of each normalised weight
        (default is `None`).
    denominator_offset : float, optional
        Offset added to the denominator of the weights (default is 0.).
    periodic_smoothing : float, optional
        Width of the eased portions of periodic separations,
        ``0 <= periodic_smoothing <= 0.5`` (default is 0.05).

    Attributes
    ----------
    dims : int
        Dimensionality.
    size : int
        Number of data points.
    extent : dict
        Periodic bounds accessed by axis index.
    is_periodic : bool
        `True` if any axis is periodic.

    Raises
    ------
    ValueError
        If `positions` and `values` differ in length, positions are not
        uniformly dimensional, or a position lies outside the periodic
        extent.

    """

    def __init__(self, positions, values, periodic_extent=None, metric=None,
                 inner_dist_function=None, outer_dist_function=None,
                 weight_function=None, denominator_offset=0.,
                 periodic_smoothing=DEFAULT_PERIODIC_SMOOTHING):

        positions, values = self._validate_data(positions, values)
        dims = positions.shape[-1]
        extent = self._validate_periodic_extent(
            periodic_extent, positions, dims
        )

        if metric is None and inner_dist_function is None \
                and outer_dist_function is None:
            metric = DistanceMetric.euclidean()
        elif metric is None:
            metric = DistanceMetric.custom(
                inner_dist_function, outer_dist_function
            )
        config = _Configuration(
            metric=self._validate_metric(metric),
            weight_function=self._validate_weight_function(weight_function),
            denominator_offset=self._validate_offset(denominator_offset),
            periodic_smoothing=self._validate_smoothing(periodic_smoothing),
        )

        self.logger = logging.getLogger(self.__class__.__name__)

        positions.flags.writeable = False
        values.flags.writeable = False

        self._positions = positions
        self._values = values
        self.dims = dims
        self.size = len(values)
        self.extent = extent
        self.is_periodic = bool(extent)

        if self.is_periodic:
            self._periodic_axes = np.array(sorted(extent))
            self._lower = np.array([extent[i][0] for i in self._periodic_axes])
            self._upper = np.array([extent[i][1] for i in self._periodic_axes])

        self._config = config

    def __str__(self):

        str_info = "size={}, dims={}, metric={}, periodic_axes={}".format(
            self.size, self.dims, self._config.metric.name,
            sorted(self.extent)
        )

        return f"{self.__class__.__name__}({str_info})"

    def __call__(self, position, power=2):

        return self.evaluate(position, power=power)

    @property
    def metric(self):
        """Current distance metric.

        Returns
        -------
        :class:`~.metrics.DistanceMetric`

        """
        return self._config.metric

    @property
    def weight_function(self):
        """Current weight function, or `None`.

        """
        return self._config.weight_function

    @property
    def denominator_offset(self):
        """Current denominator offset.

        """
        return self._config.denominator_offset

    @property
    def periodic_smoothing(self):
        """Current periodic smoothing width.

        """
        return self._config.periodic_smoothing

    def get_data(self):
        """Return the data positions and values.

        Returns
        -------
        dict
            Read-only 'positions' of shape ``(N, D)`` and 'values' of
            shape ``(N,)``.

        """
        return {'positions': self._positions, 'values': self._values}

    def evaluate(self, position, power=2):
        """Interpolate the field at a position.

        If the position coincides with data positions (so that their
        weights are infinite), the mean of the coinciding values is
        returned.

        Parameters
        ----------
        position : float, array_like
            Position of shape ``(D,)``; a scalar is accepted in 1-d.
        power : float, optional
            Power of the distances in the weights (default is 2).

        Returns
        -------
        float
            Interpolated value.

        """
        config = self._config

        position = self._validate_position(position)

        distances = self._distance(position, self._positions, config)

        with np.errstate(divide='ignore', invalid='ignore'):
            weights = 1. / (distances ** power + config.denominator_offset)
            weights = weights / np.sum(weights)

            if config.weight_function is not None:
                weights = np.vectorize(
                    config.weight_function, otypes=[float]
                )(weights)

        non_finite = ~np.isfinite(weights)
        if np.any(non_finite):
            return float(np.mean(self._values[non_finite]))

        if config.weight_function is not None:
            weights = weights / np.sum(weights)

        return float(np.dot(weights, self._values))

    def evaluate_many(self, positions, power=2, process_name=None,
                      progress=False):
        """Interpolate the field at multiple positions.

        Parameters
        ----------
        positions : float, array_like
            Positions of shape ``(M, D)``, or ``(M,)`` in 1-d.
        power : float, optional
            Power of the distances in the weights (default is 2).
        process_name : str or None, optional
            Process name shown with the progress bar (default is `None`).
        progress : bool, optional
            If `True` (default is `False`), show a progress bar.

        Returns
        -------
        float :class:`numpy.ndarray`
            Interpolated values of shape ``(M,)``.

        """
        positions = np.array(positions, dtype=float)
        if positions.ndim == 1 and self.dims == 1:
            positions = positions[:, None]

        values = batch_compute(
            positions, lambda pos: self.evaluate(pos, power=power),
            process_name=process_name, progress=progress
        )

        return np.asarray(values, dtype=float)

    # Reconfiguration
    # -------------------------------------------------------------------------

    def set_metric(self, metric):
        """Set the distance metric.

        Parameters
        ----------
        metric : :class:`~.metrics.DistanceMetric` or str
            Distance metric or its name.

        """
        self._reconfigure(metric=self._validate_metric(metric))

    def set_distance_functions(self, inner_dist_function,
                               outer_dist_function):
        """Set a custom metric from its inner and outer distance functions.

        The distance between positions ``p`` and ``q`` is
        ``outer([inner(q[0] - p[0], 0), inner(q[1] - p[1], 1), ...])``.

        Parameters
        ----------
        inner_dist_function : callable
            Per-axis transform ``inner(diff, axis)`` of a coordinate
            difference.
        outer_dist_function : callable
            Reduction of the list of transformed differences to a
            non-negative distance.

        Raises
        ------
        TypeError
            If either function is not callable.

        """
        self.set_metric(
            DistanceMetric.custom(inner_dist_function, outer_dist_function)
        )

    def use_euclidean_distance(self):
        """Use the Euclidean distance, ``sqrt(sum(d**2))``.

        """
        self.set_metric(DistanceMetric.euclidean())

    def use_taxicab_distance(self):
        """Use the taxicab (Manhattan) distance, ``sum(|d|)``.

        """
        self.set_metric(DistanceMetric.taxicab())

    def use_chessboard_distance(self):
        """Use the chessboard (Chebyshev) distance, ``max(|d|)``.

        """
        self.set_metric(DistanceMetric.chebyshev())

    def use_minkowski_distance(self, power=2):
        """Use the Minkowski distance of order `power`.

        """
        self.set_metric(DistanceMetric.minkowski(power))

    def set_weight_function(self, weight_function):
        """Set the transform applied to each normalised weight.

        Parameters
        ----------
        weight_function : callable or None
            Weight function, or `None` to use the normalised weights as
            they are.

        Raises
        ------
        TypeError
            If `weight_function` is neither callable nor `None`.

        """
        self._reconfigure(
            weight_function=self._validate_weight_function(weight_function)
        )

    def set_denominator_offset(self, denominator_offset):
        """Set the offset added to the denominator of the weights.

        Parameters
        ----------
        denominator_offset : float
            Denominator offset.

        Raises
        ------
        TypeError
            If `denominator_offset` is not a real number.

        """
        self._reconfigure(
            denominator_offset=self._validate_offset(denominator_offset)
        )

    def set_periodic_smoothing(self, smoothing):
        """Set the width of the eased portions of periodic separations.

        Parameters
        ----------
        smoothing : float
            Smoothing width, ``0 <= smoothing <= 0.5``.

        Raises
        ------
        TypeError
            If `smoothing` is not a real number.
        ValueError
            If `smoothing` is out of range.

        """
        self._reconfigure(
            periodic_smoothing=self._validate_smoothing(smoothing)
        )

    def _reconfigure(self, **settings):

        self._config = self._config._replace(**settings)

        self.logger.debug(
            "%s reconfigured: %s.", self,
            ", ".join(f"{key}={val}" for key, val in settings.items())
        )

    # Distances
    # -------------------------------------------------------------------------

    def _distance(self, position1, position2, config=None):

        config = config or self._config

        position1 = np.asarray(position1, dtype=float)
        position2 = np.asarray(position2, dtype=float)
        if not self.is_periodic:
            return config.metric(position2 - position1)

        position1 = self._map_periodically(position1)
        position2 = self._map_periodically(position2)

        diff = position2 - position1

        axes = self._periodic_axes
        half_width = (self._upper - self._lower) / 2

        wrapped = np.abs(diff[..., axes])
        wrapped = np.minimum(wrapped, 2 * half_width - wrapped)

        smoothing = config.periodic_smoothing
        diff[..., axes] = half_width * square_ease(
            wrapped / half_width, smoothing, smoothing
        )

        return config.metric(diff)

    def _map_periodically(self, position):

        position = np.array(position, dtype=float)
        position[..., self._periodic_axes] = canonical_position(
            position[..., self._periodic_axes], self._lower, self._upper
        )

        return position

    # Validation
    # -------------------------------------------------------------------------

    def _validate_position(self, position):

        position = np.atleast_1d(np.asarray(position, dtype=float))
        if position.shape != (self.dims,):
            raise ValueError(
                f"`position` has shape {position.shape} but the data are "
                f"{self.dims}-dimensional."
            )

        return position

    @staticmethod
    def _validate_data(positions, values):

        if len(positions) != len(values):
            raise ValueError(
                "`positions` and `values` must have the same length: "
                f"{len(positions)} != {len(values)}."
            )
        if not len(values):
            raise ValueError("At least one data point is required.")

        try:
            positions = np.array(positions, dtype=float)
        except ValueError as err:
            raise ValueError(
                "`positions` must all have the same dimensionality."
            ) from err
        if positions.ndim == 1:
            positions = positions[:, None]
        if positions.ndim != 2:
            raise ValueError(
                "`positions` must all be coordinate vectors of the same "
                "dimensionality."
            )

        values = np.array(values, dtype=float)
        if values.ndim != 1:
            raise ValueError("`values` must be scalars.")

        return positions, values

    @staticmethod
    def _validate_periodic_extent(periodic_extent, positions, dims):

        if periodic_extent is None:
            return {}
        if not isinstance(periodic_extent, Mapping):
            raise TypeError(
                "`periodic_extent` must be a mapping from axis index "
                "to bounds."
            )

        extent = {}
        for axis, bounds in periodic_extent.items():
            if not isinstance(axis, (int, np.integer)) \
                    or not 0 <= axis < dims:
                raise ValueError(
                    f"`periodic_extent` axis {axis} is not one of the "
                    f"{dims} axes."
                )
            lower, upper = map(float, bounds)
            if not lower < upper:
                raise ValueError(
                    f"`periodic_extent` bounds for axis {axis} must have "
                    f"lower < upper: {bounds}."
                )

            coords = positions[:, axis]
            if not np.all((coords >= lower) & (coords <= upper)):
                raise ValueError(
                    f"Positions lie outside the `periodic_extent` bounds "
                    f"for axis {axis}."
                )
            extent[int(axis)] = (lower, upper)

        return extent

    @staticmethod
    def _validate_metric(metric):

        if isinstance(metric, DistanceMetric):
            return metric
        if isinstance(metric, str):
            return DistanceMetric.from_name(metric)

        raise TypeError(
            "`metric` must be a DistanceMetric instance or a metric name."
        )

    @staticmethod
    def _validate_weight_function(weight_function):

        if weight_function is not None and not callable(weight_function):
            raise TypeError("`weight_function` must be callable.")

        return weight_function

    @staticmethod
    def _validate_offset(denominator_offset):

        if isinstance(denominator_offset, bool) \
                or not isinstance(denominator_offset, (int, float, np.number)):
            raise TypeError("`denominator_offset` must be a real number.")

        return float(denominator_offset)

    @staticmethod
    def _validate_smoothing(smoothing):

        if isinstance(smoothing, bool) \
                or not isinstance(smoothing, (int, float, np.number)):
            raise TypeError("`periodic_smoothing` must be a real number.")
        if not 0 <= smoothing <= 0.5:
            raise ValueError(
                "`periodic_smoothing` must be between 0 and 0.5 since both "
                f"ends of the unit interval are eased: {smoothing}."
            )

        return float(smoothing)
