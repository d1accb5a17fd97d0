"""
***************************************************************************
Algorithms (:mod:`~tessera.algorithms`)
***************************************************************************

Provide distance metrics, seeded random sources, naive Poisson-disk point
sampling and inverse distance weighting interpolation.

"""
from .configuration import SamplingConfiguration
from .interpolation import InverseDistanceWeighting
from .metrics import DistanceMetric, square_ease
from .randomness import UniformSource
from .sampling import PoissonSampler
