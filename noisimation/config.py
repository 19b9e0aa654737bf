"""Settings for one noise animation run."""

from dataclasses import dataclass

from noisimation.errors import ConfigError
from noisimation.fields import DEFAULT_FREQ, Algorithm

U16_MAX = 65535


@dataclass
class AnimationSettings:
    """Everything needed to sample and play one animation.

    The defaults map a [-1, 1] noise field onto the full 16-bit range.
    """

    algorithm: Algorithm = Algorithm.PERLIN
    bias: float = U16_MAX / 2.0
    scale: float = U16_MAX / 2.0
    width: int = 64
    height: int = 64
    floor: float = 0.0
    ceiling: float = 100.0
    slices: int = 100
    seed: int = 0
    frequency: float = DEFAULT_FREQ
    truecolor: bool = True

    def __post_init__(self):
        if not isinstance(self.algorithm, Algorithm):
            self.algorithm = Algorithm.parse(self.algorithm)

    def validate(self):
        """Raise ConfigError if the settings cannot produce an animation."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"width and height must be positive, got {self.width}x{self.height}")
        if self.slices < 0:
            raise ConfigError(f"slices must be non-negative, got {self.slices}")
        if self.frequency <= 0:
            raise ConfigError(f"frequency must be positive, got {self.frequency}")
        return self
