"""
Point sampling (:mod:`~tessera.algorithms.sampling`)
===========================================================================

Generate well-separated random points in an extent by dart throwing,
optionally with periodic (tileable) axes.

.. note::

    This is the naive variant of Poisson-disk sampling: each candidate is
    checked against every accepted point, and no spatial index is kept.
    The minimum-separation radius is a heuristic calibrated for 1, 2 and
    3 dimensions, so the generated points are only approximately
    Poisson-disk distributed.

.. autosummary::

    separation_radius
    PoissonSampler

|

"""
import logging
import warnings

import numpy as np
from scipy.spatial.distance import pdist

from tessera.utils import Progress

from .configuration import DEFAULT_TRIES, SamplingConfiguration
from .metrics import periodic_distance, standard_distance
from .randomness import UniformSource

#: Packing coefficient of the separation radius heuristic.
PACKING_COEFFICIENT = 0.6169

#: Largest dimensionality for which the separation radius is calibrated.
CALIBRATED_DIMS = 3


def separation_radius(volume, n, dims):
    r"""Minimum separation targeted between sampled points.

    The radius is :math:`(0.6169 V / n)^{1/D}` for an extent of volume
    :math:`V` holding :math:`n` points in :math:`D` dimensions.

    Parameters
    ----------
    volume : float
        Volume of the extent.
    n : int
        Number of points.
    dims : int
        Dimensionality.

    Returns
    -------
    float
        Separation radius.

    """
    return (PACKING_COEFFICIENT * volume / n) ** (1. / dims)


class PoissonSampler:
    """Naive Poisson-disk point sampler.

    Each point is generated by drawing up to `tries` uniform candidates in
    the extent.  The first candidate farther than :attr:`radius` from all
    accepted points is accepted; if there is none, the candidate farthest
    from its nearest accepted point is accepted instead.

    Parameters
    ----------
    n : int
        Number of points to generate, ``n >= 1``.
    dims : int or None, optional
        Dimensionality (default is `None`).  Derived from `extent` if
        `None`.
    extent : float, array_like or None, optional
        Lower and upper bounds for each axis; a 1-d extent may be given as
        a single pair.  If `None` (default), each axis is bounded by
        ``[-1, 1]``.
    periodic : bool or list of bool, optional
        Whether all axes or each axis wrap around periodically (default is
        `False`).
    tries : int, optional
        Number of candidates drawn per point (default is 30).
    random_source : callable or None, optional
        Callable returning uniform deviates in ``[0, 1)`` when called
        without arguments.  If `None` (default), a
        :class:`~.randomness.UniformSource` seeded with `seed` is used.
    seed : int or None, optional
        Random seed, ignored if `random_source` is given (default is
        `None`).

    Attributes
    ----------
    config : :class:`~.configuration.SamplingConfiguration`
        Validated sampling configuration.
    n : int
        Number of points to generate.
    dims : int
        Dimensionality.
    extent : float :class:`numpy.ndarray`
        Bounds of shape ``(dims, 2)``.
    periodic : bool :class:`numpy.ndarray`
        Periodic flags of shape ``(dims,)``.
    is_periodic : bool
        `True` if any axis is periodic.
    tries : int
        Number of candidates drawn per point.
    volume : float
        Volume of the extent.
    radius : float
        Targeted minimum separation between points.

    """

    def __init__(self, n, dims=None, extent=None, periodic=False,
                 tries=DEFAULT_TRIES, random_source=None, seed=None):

        config = SamplingConfiguration(
            n, dims=dims, extent=extent, periodic=periodic, tries=tries
        )
        if random_source is not None and not callable(random_source):
            raise TypeError("`random_source` must be callable.")

        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = config
        self.n = config.n
        self.dims = config.dims
        self.extent = config.extent
        self.periodic = config.periodic
        self.is_periodic = config.attrs['is_periodic']
        self.tries = config.tries
        self.volume = config.volume
        self.radius = separation_radius(self.volume, self.n, self.dims)

        self.random_source = random_source if random_source is not None \
            else UniformSource(seed=seed)

        if self.dims > CALIBRATED_DIMS:
            warnings.warn(
                "Separation radius heuristic is not calibrated above "
                f"{CALIBRATED_DIMS} dimensions; "
                "points may be more or less clustered than intended.",
                RuntimeWarning
            )

        self._points = []
        self._fallback_count = 0

    def __str__(self):

        str_info = "n={}, dims={}, periodic={}, radius={:.4g}".format(
            self.n, self.dims, self.periodic.tolist(), self.radius
        )

        return f"{self.__class__.__name__}({str_info})"

    def __len__(self):

        return len(self._points)

    @property
    def points(self):
        """Points generated or added so far.

        Returns
        -------
        float :class:`numpy.ndarray`
            Points of shape ``(len(self), dims)``.

        """
        return np.reshape(
            np.array(self._points, dtype=float), (-1, self.dims)
        )

    def next(self):
        """Generate the next point.

        Returns
        -------
        float :class:`numpy.ndarray` or None
            Generated point, or `None` if `n` points already exist.

        """
        if len(self._points) >= self.n:
            return None

        best_point, largest_dist = None, -np.inf
        for _ in range(self.tries):
            candidate = self._sample_uniform()
            dist_to_nearest = self._distance_to_existing(candidate)

            if dist_to_nearest > largest_dist:
                best_point, largest_dist = candidate, dist_to_nearest
            if dist_to_nearest > self.radius:
                break
        else:
            self._fallback_count += 1
            self.logger.debug(
                "No candidate beyond radius %.4g after %d tries; "
                "accepted best candidate at distance %.4g.",
                self.radius, self.tries, largest_dist
            )

        self._points.append(best_point)

        return best_point.copy()

    def fill(self, logger=None):
        """Generate points until there are `n` of them.

        Parameters
        ----------
        logger : :class:`logging.Logger` *or None, optional*
            If not `None` (default), progress is reported to this logger.

        Returns
        -------
        float :class:`numpy.ndarray`
            All points, of shape ``(n, dims)``.

        """
        if logger is not None:
            progress = Progress(
                self.n, process_name="point sampling", logger=logger
            )

        while len(self._points) < self.n:
            self.next()
            if logger is not None:
                progress.report(len(self._points) - 1)

        self.logger.info(
            "%s filled: %d points, %d accepted below the radius.",
            self, len(self._points), self._fallback_count
        )

        return self.points

    def add_point(self, point):
        """Add a point manually, bypassing sampling.

        Parameters
        ----------
        point : float, array_like
            Point with `dims` coordinates; a scalar is accepted in 1-d.

        Raises
        ------
        ValueError
            If `point` has the wrong dimensionality, or `n` points already
            exist.

        """
        point = np.atleast_1d(np.array(point, dtype=float))
        if point.shape != (self.dims,):
            raise ValueError(
                f"`point` has shape {point.shape} but sampling is "
                f"{self.dims}-dimensional."
            )
        if len(self._points) >= self.n:
            raise ValueError(f"All {self.n} points already exist.")

        self._points.append(point)

    def reset(self):
        """Remove all points, keeping the sampling configuration.

        """
        self._points = []
        self._fallback_count = 0

    def pairwise_distances(self):
        """Pairwise distances between existing points under the sampler
        metric.

        Returns
        -------
        float :class:`numpy.ndarray`
            Condensed distance vector as returned by
            :func:`scipy.spatial.distance.pdist`.

        """
        if len(self._points) < 2:
            return np.empty(0)

        if not self.is_periodic:
            return pdist(self.points, metric='euclidean')

        return pdist(
            self.points,
            metric=lambda u, v: periodic_distance(
                u, v, self.extent, self.periodic
            )
        )

    def separation_fraction(self):
        """Fraction of point pairs separated by at least the radius.

        Returns
        -------
        float
            Fraction of well-separated pairs (1. if there are no pairs).

        """
        distances = self.pairwise_distances()
        if not distances.size:
            return 1.

        return float(np.mean(distances >= self.radius))

    def _sample_uniform(self):

        return np.array([
            lower + (upper - lower) * self.random_source()
            for lower, upper in self.extent
        ])

    def _distance_to_existing(self, candidate):

        if not self._points:
            return np.inf

        existing = np.array(self._points)
        if self.is_periodic:
            distances = periodic_distance(
                existing, candidate, self.extent, self.periodic
            )
        else:
            distances = standard_distance(existing, candidate)

        return float(np.min(distances))
