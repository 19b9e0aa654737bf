"""Turn a scalar field into 2-D rasters, one per depth slice."""

import logging

import numpy as np

from noisimation.fields import ScalarField

log = logging.getLogger(__name__)

RASTER_DTYPE = np.uint16
RASTER_MAX = np.iinfo(RASTER_DTYPE).max


def sample(field: ScalarField, width, height, depth):
    """Sample one slice of a field into a ``(height, width)`` uint16 raster.

    Cell ``raster[y, x]`` holds ``field.get(x, y, depth)`` truncated toward
    zero. Values outside 0..65535 saturate at the nearest end and NaN becomes
    0, so scale and bias the field onto that range first (see
    ``fields.ScaleBias``).
    """
    if width < 0 or height < 0:
        raise ValueError(f"raster dimensions must be non-negative, got {width}x{height}")

    world = np.zeros((height, width))
    for i in range(height):
        for j in range(width):
            world[i][j] = field.get(float(j), float(i), depth)

    world = np.trunc(np.nan_to_num(world, nan=0.0))
    return np.clip(world, 0, RASTER_MAX).astype(RASTER_DTYPE)


def sample_volume(field: ScalarField, width, height, depths):
    """Lazily sample a field at each depth, in order.

    Each raster is produced only when the generator is advanced, so a
    consumer that handles one raster at a time holds one raster in memory.
    The generator is single pass.
    """
    for index, depth in enumerate(depths):
        log.debug("Sampling slice %d at depth %g", index, depth)
        yield sample(field, width, height, depth)


def depth_range(floor, ceiling, slices):
    """Return ``slices`` evenly spaced depths from floor to ceiling inclusive."""
    if slices < 0:
        raise ValueError(f"slice count must be non-negative, got {slices}")
    return np.linspace(floor, ceiling, slices).tolist()
