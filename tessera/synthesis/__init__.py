"""
***************************************************************************
Noise synthesis (:mod:`~tessera.synthesis`)
***************************************************************************

Compose point sampling and inverse distance weighting into smooth,
optionally tileable noise functions.

"""
from .noise import (
    NoiseIDW,
    evaluate_on_grid,
    generate_noise_idw,
    generate_regular_grid,
)
