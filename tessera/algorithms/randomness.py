"""
Random sources (:mod:`~tessera.algorithms.randomness`)
===========================================================================

Provide seeded uniform random sources for reproducible point sampling and
value generation.

.. autosummary::

    UniformSource

|

"""
import numpy as np


class UniformSource:
    """Callable source of uniform random deviates.

    Identical seeds yield identical streams of deviates, so sampled point
    sets and the fields interpolated from them are reproducible.

    Parameters
    ----------
    seed : int or None, optional
        Random seed (default is `None`).

    Attributes
    ----------
    seed : int or None
        Random seed.

    Examples
    --------
    >>> source = UniformSource(seed=42)
    >>> 0. <= source() < 1.
    True
    >>> -1. <= source(-1., 1.) < 1.
    True

    """

    def __init__(self, seed=None):

        self.seed = seed
        self._state = np.random.RandomState(seed=seed)

    def __str__(self):

        return f"{self.__class__.__name__}(seed={self.seed})"

    def __call__(self, low=0., high=1.):
        """Draw a uniform deviate.

        Parameters
        ----------
        low, high : float, optional
            Deviate range (default is 0. and 1.).

        Returns
        -------
        float
            Uniform deviate in ``[low, high)``.

        """
        return float(self._state.uniform(low, high))

