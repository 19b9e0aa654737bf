"""Sample noise fields into rasters and animate them in the terminal."""

from noisimation.backend import RenderConfig
from noisimation.errors import ConfigError, NoisimationError, RenderError, TerminalError
from noisimation.fields import Algorithm, ScaleBias, make_field
from noisimation.renderer import RenderSession, print_image, print_images
from noisimation.sampler import depth_range, sample, sample_volume
from noisimation.terminal import Terminal

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "ConfigError",
    "NoisimationError",
    "RenderConfig",
    "RenderError",
    "RenderSession",
    "ScaleBias",
    "Terminal",
    "TerminalError",
    "depth_range",
    "make_field",
    "print_image",
    "print_images",
    "sample",
    "sample_volume",
]
