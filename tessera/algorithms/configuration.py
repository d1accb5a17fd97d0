"""
Sampling configuration (:mod:`~tessera.algorithms.configuration`)
===========================================================================

Validate and normalise point sampling parameters in a single pass.

.. autosummary::

    SamplingConfiguration

|

"""
import numbers

import numpy as np

DEFAULT_BOUNDS = (-1., 1.)
DEFAULT_TRIES = 30


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class SamplingConfiguration:
    """Validated configuration of a sampling extent.

    Notes
    -----
    If only one of `dims` and `extent` is given, the other is derived from
    it; if both are given they must agree.  A 1-d extent may be given
    unwrapped as ``(lower, upper)``.

    Parameters
    ----------
    n : int
        Number of points to generate, ``n >= 1``.
    dims : int or None, optional
        Dimensionality (default is `None`).
    extent : float, array_like or None, optional
        Lower and upper bounds for each axis.  If `None` (default), each
        axis is bounded by ``[-1, 1]``.
    periodic : bool or list of bool, optional
        Whether all axes (a single boolean) or each axis (one boolean per
        axis) wrap around periodically (default is `False`).
    tries : int, optional
        Number of candidates drawn per point before the best one is
        accepted (default is 30).

    Attributes
    ----------
    n : int
        Number of points to generate.
    dims : int
        Dimensionality.
    extent : float :class:`numpy.ndarray`
        Bounds of shape ``(dims, 2)``.
    periodic : bool :class:`numpy.ndarray`
        Periodic flags of shape ``(dims,)``.
    tries : int
        Number of candidates drawn per point.
    attrs : dict
        Derived attributes: 'volume' of the extent and 'is_periodic'.

    Raises
    ------
    TypeError
        If any parameter is of the wrong type.
    ValueError
        If any parameter has an invalid value, or `dims` and `extent` are
        inconsistent or both missing.

    """

    def __init__(self, n, dims=None, extent=None, periodic=False,
                 tries=DEFAULT_TRIES):

        n = self._validate_count(n, 'n')
        tries = self._validate_count(tries, 'tries')
        dims, extent = self._resolve_extent(dims, extent)
        periodic = self._resolve_periodic(periodic, dims)

        self.n = n
        self.dims = dims
        self.extent = extent
        self.periodic = periodic
        self.tries = tries

        self.attrs = {
            'volume': float(np.prod(extent[:, 1] - extent[:, 0])),
            'is_periodic': bool(np.any(periodic)),
        }

    def __str__(self):

        str_info = "n={}, dims={}, extent={}, periodic={}".format(
            self.n, self.dims, self.extent.tolist(), self.periodic.tolist()
        )

        return f"{self.__class__.__name__}({str_info})"

    @property
    def volume(self):
        """Volume (length, area, ...) of the extent.

        Returns
        -------
        float

        """
        return self.attrs['volume']

    @property
    def widths(self):
        """Axis widths of the extent.

        Returns
        -------
        float :class:`numpy.ndarray`

        """
        return self.extent[:, 1] - self.extent[:, 0]

    def periodic_extent(self):
        """Bounds of the periodic axes.

        Returns
        -------
        dict
            Lower and upper bounds accessed by periodic axis index.

        """
        return {
            axis: tuple(self.extent[axis])
            for axis in np.flatnonzero(self.periodic).tolist()
        }

    @staticmethod
    def _validate_count(value, name):

        if not _is_integer(value):
            raise TypeError(f"`{name}` must be an integer: {value}.")
        if value < 1:
            raise ValueError(f"`{name}` must be at least 1: {value}.")

        return int(value)

    @staticmethod
    def _resolve_extent(dims, extent):

        if dims is not None:
            if not _is_integer(dims):
                raise TypeError(f"`dims` must be an integer: {dims}.")
            if dims < 1:
                raise ValueError(f"`dims` must be at least 1: {dims}.")
            dims = int(dims)

        if extent is None:
            if dims is None:
                raise ValueError(
                    "At least one of `dims` and `extent` must be specified."
                )
            return dims, np.tile(DEFAULT_BOUNDS, (dims, 1))

        try:
            extent = np.array(extent, dtype=float)
        except (TypeError, ValueError) as err:
            raise TypeError(
                "`extent` must be a pair of bounds or a sequence of pairs."
            ) from err

        # Unwrapped 1-d extent.
        if extent.shape == (2,):
            extent = extent[None, :]

        if extent.ndim != 2 or extent.shape[-1] != 2 or not len(extent):
            raise ValueError(
                "`extent` must be a pair of bounds or a sequence of pairs: "
                f"{extent.tolist()}."
            )

        if dims is not None and dims != len(extent):
            raise ValueError(
                f"`dims` ({dims}) and `extent` ({len(extent)} axes) "
                "are inconsistent."
            )

        if not np.all(extent[:, 0] < extent[:, 1]):
            raise ValueError(
                "`extent` lower bounds must be below upper bounds: "
                f"{extent.tolist()}."
            )

        return len(extent), extent

    @staticmethod
    def _resolve_periodic(periodic, dims):

        if isinstance(periodic, (bool, np.bool_)):
            return np.full(dims, bool(periodic))

        if not isinstance(periodic, (list, tuple, np.ndarray)):
            raise TypeError(
                "`periodic` must be either a boolean or a sequence of "
                f"booleans: {periodic}."
            )
        if len(periodic) != dims:
            raise ValueError(
                f"`periodic` has {len(periodic)} entries for {dims} axes."
            )

        return np.array([bool(flag) for flag in periodic])
