"""Scalar field providers.

A scalar field is anything with a ``get(x, y, z)`` method returning a float.
The sampler only ever queries fields, so every provider here is immutable once
built. Coherent noise fields scale their input by ``frequency`` because
gradient noise is zero at integer lattice points and the sampler queries
integer pixel coordinates.
"""

import math
from enum import Enum
from typing import Protocol

import noise  # For Perlin/Simplex noise
import numpy as np
from opensimplex import OpenSimplex

from noisimation.errors import ConfigError

"""The default sampling frequency applied to pixel coordinates"""
DEFAULT_FREQ = 1.0 / 32.0

# noise.snoise3 takes no seed, so seeds shift the sampling origin instead
_SEED_OFFSET = 1013.0


class ScalarField(Protocol):
    def get(self, x: float, y: float, z: float) -> float:
        ...


class Perlin:
    """Single octave Perlin noise in [-1, 1]."""

    octaves = 1

    def __init__(self, seed=0, frequency=DEFAULT_FREQ, persistence=0.5, lacunarity=2.0):
        self.seed = seed
        self.frequency = frequency
        self.persistence = persistence
        self.lacunarity = lacunarity

    def get(self, x, y, z):
        f = self.frequency
        return noise.pnoise3(x * f,
                             y * f,
                             z * f,
                             octaves=self.octaves,
                             persistence=self.persistence,
                             lacunarity=self.lacunarity,
                             base=self.seed % 256)


class Fbm(Perlin):
    """Fractal Brownian motion: six octaves of Perlin noise."""

    octaves = 6


class Billow(Perlin):
    """Billowy noise, the absolute value of each Perlin octave remapped to [-1, 1]."""

    octaves = 6

    def get(self, x, y, z):
        total = 0.0
        amp = 1.0
        freq = self.frequency
        norm = 0.0
        for octave in range(self.octaves):
            signal = noise.pnoise3(x * freq, y * freq, z * freq, base=(self.seed + octave) % 256)
            total += (2.0 * abs(signal) - 1.0) * amp
            norm += amp
            freq *= self.lacunarity
            amp *= self.persistence
        return total / norm


class Simplex:
    """Simplex noise in [-1, 1]."""

    def __init__(self, seed=0, frequency=DEFAULT_FREQ):
        self.seed = seed
        self.frequency = frequency
        self._offset = seed * _SEED_OFFSET

    def get(self, x, y, z):
        f = self.frequency
        o = self._offset
        return noise.snoise3(x * f + o, y * f + o, z * f + o)


class OpenSimplexField:
    """OpenSimplex noise in [-1, 1]."""

    def __init__(self, seed=0, frequency=DEFAULT_FREQ):
        self.seed = seed
        self.frequency = frequency
        self._generator = OpenSimplex(seed=seed)

    def get(self, x, y, z):
        f = self.frequency
        return self._generator.noise3(x * f, y * f, z * f)


class Value:
    """Lattice value noise in [-1, 1].

    Every integer lattice point gets a pseudo-random value from a shuffled
    permutation table; values in between are interpolated trilinearly with the
    6t^5 - 15t^4 + 10t^3 fade curve.
    """

    TABLE_SIZE = 256

    def __init__(self, seed=0, frequency=DEFAULT_FREQ):
        self.seed = seed
        self.frequency = frequency
        rng = np.random.default_rng(seed)
        perm = rng.permutation(self.TABLE_SIZE)
        # doubled so perm[perm[i] + j] never needs a second modulo
        self._perm = np.concatenate([perm, perm]).tolist()
        self._values = rng.uniform(-1.0, 1.0, self.TABLE_SIZE).tolist()

    def _lattice(self, i, j, k):
        p = self._perm
        n = self.TABLE_SIZE - 1
        return self._values[p[p[p[i & n] + (j & n)] + (k & n)]]

    def get(self, x, y, z):
        f = self.frequency
        x, y, z = x * f, y * f, z * f
        xi, yi, zi = math.floor(x), math.floor(y), math.floor(z)
        u, v, w = _fade(x - xi), _fade(y - yi), _fade(z - zi)

        corners = {}
        for dx in (0, 1):
            for dy in (0, 1):
                for dz in (0, 1):
                    corners[dx, dy, dz] = self._lattice(xi + dx, yi + dy, zi + dz)

        x00 = _lerp(corners[0, 0, 0], corners[1, 0, 0], u)
        x10 = _lerp(corners[0, 1, 0], corners[1, 1, 0], u)
        x01 = _lerp(corners[0, 0, 1], corners[1, 0, 1], u)
        x11 = _lerp(corners[0, 1, 1], corners[1, 1, 1], u)
        return _lerp(_lerp(x00, x10, v), _lerp(x01, x11, v), w)


class Checkerboard:
    """Unit cubes alternating between 0.0 and 1.0."""

    def __init__(self, seed=0, frequency=1.0):
        self.seed = seed
        self.frequency = frequency

    def get(self, x, y, z):
        f = self.frequency
        parity = (math.floor(x * f) + math.floor(y * f) + math.floor(z * f)) & 1
        return float(parity)


class ScaleBias:
    """Wraps a field, returning ``source.get(...) * scale + bias``."""

    def __init__(self, source: ScalarField, scale=1.0, bias=0.0):
        self.source = source
        self.scale = scale
        self.bias = bias

    def get(self, x, y, z):
        return self.source.get(x, y, z) * self.scale + self.bias


def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a, b, t):
    return a + t * (b - a)


class Algorithm(Enum):
    BILLOW = "billow"
    CHECKERBOARD = "checkerboard"
    FBM = "fbm"
    OPEN_SIMPLEX = "open_simplex"
    PERLIN = "perlin"
    SIMPLEX = "simplex"
    VALUE = "value"

    @classmethod
    def names(cls):
        return [member.value for member in cls]

    @classmethod
    def parse(cls, name):
        try:
            return cls(name)
        except ValueError:
            raise ConfigError(
                f"unknown noise function {name!r}, expected one of: {', '.join(cls.names())}"
            ) from None


_PROVIDERS = {
    Algorithm.BILLOW: Billow,
    Algorithm.CHECKERBOARD: Checkerboard,
    Algorithm.FBM: Fbm,
    Algorithm.OPEN_SIMPLEX: OpenSimplexField,
    Algorithm.PERLIN: Perlin,
    Algorithm.SIMPLEX: Simplex,
    Algorithm.VALUE: Value,
}


def make_field(algorithm, seed=0, frequency=DEFAULT_FREQ):
    """Build the field for an algorithm given as an ``Algorithm`` or its name.

    Checkerboard ignores ``frequency`` and always uses unit cells.
    """
    if not isinstance(algorithm, Algorithm):
        algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.CHECKERBOARD:
        return Checkerboard(seed=seed)
    if frequency <= 0:
        raise ConfigError(f"frequency must be positive, got {frequency}")
    return _PROVIDERS[algorithm](seed=seed, frequency=frequency)


def value_range(field, samples=1000):
    """Return (min, max) of a field sampled along the line y=10, z=0.

    Handy for choosing a scale and bias that map a field onto 0..65535.
    """
    values = [field.get(float(i), 10.0, 0.0) for i in range(samples)]
    return min(values), max(values)
