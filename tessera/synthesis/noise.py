"""
Noise functions (:mod:`~tessera.synthesis.noise`)
===========================================================================

Generate smooth, optionally tileable noise functions by inverse distance
weighting of random values placed at well-separated random positions, and
evaluate them on regular grids.

.. autosummary::

    NoiseIDW
    generate_noise_idw
    generate_regular_grid
    evaluate_on_grid

|

"""
import logging

import numpy as np

from tessera.algorithms.configuration import (
    DEFAULT_TRIES,
    SamplingConfiguration,
)
from tessera.algorithms.interpolation import InverseDistanceWeighting
from tessera.algorithms.randomness import UniformSource
from tessera.algorithms.sampling import PoissonSampler

MIN_POINTS = 2


class NoiseIDW:
    """Noise function built from random values at sampled positions.

    Positions are drawn by :class:`~tessera.algorithms.sampling.PoissonSampler`
    and the noise function is the
    :class:`~tessera.algorithms.interpolation.InverseDistanceWeighting`
    interpolator of the values at those positions.  Periodic axes of the
    extent make the noise function tileable along them.

    Parameters
    ----------
    n : int
        Number of random positions and values, ``n >= 2``.
    dims : int or None, optional
        Dimensionality (default is `None`).  Derived from `extent` if
        `None`.
    extent : float, array_like or None, optional
        Lower and upper bounds for each axis from which positions are
        sampled.  If `None` (default), each axis is bounded by
        ``[-1, 1]``.
    periodic : bool or list of bool, optional
        Whether all axes or each axis is periodic (default is `False`).
    tries : int, optional
        Number of candidates drawn per sampled position (default is 30).
    value_function : callable or None, optional
        Function of position returning the value there.  If `None`
        (default), values are drawn from the random source and rescaled
        to ``[min_value, max_value]``.
    min_value, max_value : float, optional
        Minimum and maximum of the generated values (default is 0. and
        1.).  Ignored if `value_function` is given.
    random_source : callable or None, optional
        Callable returning uniform deviates in ``[0, 1)``.  If `None`
        (default), a :class:`~tessera.algorithms.randomness.UniformSource`
        seeded with `seed` is used.
    seed : int or None, optional
        Random seed, ignored if `random_source` is given (default is
        `None`).

    Attributes
    ----------
    config : :class:`~tessera.algorithms.configuration.SamplingConfiguration`
        Validated sampling configuration.
    positions : float :class:`numpy.ndarray`
        Sampled positions of shape ``(n, dims)``.
    values : float :class:`numpy.ndarray`
        Values at the sampled positions.
    idw : :class:`~tessera.algorithms.interpolation.InverseDistanceWeighting`
        Noise function.

    Raises
    ------
    ValueError
        If `n` is less than 2, or `min_value` exceeds `max_value`.

    """

    def __init__(self, n, dims=None, extent=None, periodic=False,
                 tries=DEFAULT_TRIES, value_function=None, min_value=0.,
                 max_value=1., random_source=None, seed=None):

        config = SamplingConfiguration(
            n, dims=dims, extent=extent, periodic=periodic, tries=tries
        )
        if config.n < MIN_POINTS:
            raise ValueError(f"`n` cannot be less than {MIN_POINTS}: {n}.")
        if value_function is not None and not callable(value_function):
            raise TypeError("`value_function` must be callable.")
        if min_value > max_value:
            raise ValueError(
                f"`min_value` ({min_value}) exceeds "
                f"`max_value` ({max_value})."
            )

        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = config
        self.min_value = min_value
        self.max_value = max_value
        self.value_function = value_function
        self.random_source = random_source if random_source is not None \
            else UniformSource(seed=seed)

        self.positions = self._generate_positions()
        self.values = self._generate_values()
        self.idw = InverseDistanceWeighting(
            self.positions, self.values,
            periodic_extent=config.periodic_extent()
        )

        self.logger.info("Noise function generated from %s.", config)

    def __str__(self):

        return f"{self.__class__.__name__}({self.idw})"

    def __call__(self, position, power=2):

        return self.idw.evaluate(position, power=power)

    def _generate_positions(self):

        sampler = PoissonSampler(
            self.config.n,
            extent=self.config.extent,
            periodic=self.config.periodic,
            tries=self.config.tries,
            random_source=self.random_source
        )

        return sampler.fill()

    def _generate_values(self):

        if self.value_function is not None:
            return np.array(
                [self.value_function(pos) for pos in self.positions],
                dtype=float
            )

        values = np.array(
            [self.random_source() for _ in self.positions], dtype=float
        )

        value_range = np.ptp(values)
        if value_range == 0:
            return np.full_like(values, self.min_value)

        return self.min_value + (self.max_value - self.min_value) \
            * (values - np.min(values)) / value_range


def generate_noise_idw(n, dims=None, extent=None, periodic=False,
                       tries=DEFAULT_TRIES, value_function=None, min_value=0.,
                       max_value=1., random_source=None, seed=None):
    """Generate a noise function.

    Parameters
    ----------
    n, dims, extent, periodic, tries, value_function, min_value, max_value, random_source, seed
        See :class:`NoiseIDW`.

    Returns
    -------
    :class:`~tessera.algorithms.interpolation.InverseDistanceWeighting`
        Noise function.

    """
    noise = NoiseIDW(
        n, dims=dims, extent=extent, periodic=periodic, tries=tries,
        value_function=value_function, min_value=min_value,
        max_value=max_value, random_source=random_source, seed=seed
    )

    return noise.idw


def generate_regular_grid(extent, num_mesh, variable='coords'):
    """Generate a regular grid of cell centres over an extent.

    Parameters
    ----------
    extent : float, array_like
        Lower and upper bounds for each axis; a 1-d extent may be given as
        a single pair.
    num_mesh : int or list of int
        Mesh number per dimension, either common to all axes or one per
        axis.
    variable : {'coords', 'points', 'both'}, optional
        The grid variable to be returned: ``'coords'`` (default) for the
        coordinate arrays of each axis, ``'points'`` for the flattened
        grid points, or ``'both'`` in that order.

    Returns
    -------
    grid_coords : list of float :class:`numpy.ndarray`
        Grid coordinate arrays for each dimension.  Returned if `variable`
        is ``'coords'`` or ``'both'``.
    grid_points : float :class:`numpy.ndarray`
        Grid points of shape ``(num_cell, dims)`` in C order.  Returned if
        `variable` is ``'points'`` or ``'both'``.

    Raises
    ------
    ValueError
        If `variable` does not correspond to any of the following:
        ``'coords'``, ``'points'`` or ``'both'``.

    """
    extent = np.array(extent, dtype=float)
    if extent.shape == (2,):
        extent = extent[None, :]
    num_mesh = np.broadcast_to(num_mesh, len(extent))

    axes_coords = [
        lower + (upper - lower) * (np.arange(mesh) + 0.5) / mesh
        for (lower, upper), mesh in zip(extent, num_mesh)
    ]
    grid_coords = np.meshgrid(*axes_coords, indexing='ij')
    grid_points = np.stack([np.ravel(coord) for coord in grid_coords], axis=-1)

    if variable.lower().startswith('c'):
        return grid_coords
    if variable.lower().startswith('p'):
        return grid_points
    if variable.lower().startswith('b'):
        return grid_coords, grid_points
    raise ValueError(f"Unknown grid `variable`: {variable}.")


def evaluate_on_grid(idw, extent, num_mesh, power=2, progress=False):
    """Evaluate an interpolator over a regular grid.

    Parameters
    ----------
    idw : :class:`~tessera.algorithms.interpolation.InverseDistanceWeighting`
        Interpolator (e.g. a noise function).
    extent : float, array_like
        Lower and upper bounds for each axis.
    num_mesh : int or list of int
        Mesh number per dimension.
    power : float, optional
        Power of the distances in the weights (default is 2).
    progress : bool, optional
        If `True` (default is `False`), show a progress bar.

    Returns
    -------
    field : float :class:`numpy.ndarray`
        Interpolated values over the grid, of the same shape as the grid.

    """
    grid_coords, grid_points = generate_regular_grid(
        extent, num_mesh, variable='both'
    )

    field = idw.evaluate_many(
        grid_points, power=power, process_name="grid evaluation",
        progress=progress
    )

    return np.reshape(field, grid_coords[0].shape)
