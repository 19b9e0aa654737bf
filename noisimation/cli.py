"""Command line entry point: sample a noise field and play it in the terminal."""

import argparse
import logging
import sys

from noisimation.backend import RenderConfig
from noisimation.config import AnimationSettings
from noisimation.errors import ConfigError, NoisimationError
from noisimation.fields import Algorithm, ScaleBias, make_field, value_range
from noisimation.log import setup_logging
from noisimation.renderer import print_images
from noisimation.sampler import depth_range, sample_volume

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RENDER = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_parser():
    defaults = AnimationSettings()
    # -h is height, so help is long-form only
    parser = argparse.ArgumentParser(
        prog="noisimation",
        description="Animate slices of a 3-D noise field in the terminal.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "function",
        nargs="?",
        default=defaults.algorithm.value,
        choices=Algorithm.names(),
        help=f"noise function (default: {defaults.algorithm.value})",
    )
    parser.add_argument("-b", "--bias", type=float, default=defaults.bias,
                        help="added to every value after scaling (default: %(default)s)")
    parser.add_argument("-s", "--scale", type=float, default=defaults.scale,
                        help="multiplies every value (default: %(default)s)")
    parser.add_argument("-w", "--width", type=int, default=defaults.width,
                        help="raster width in pixels (default: %(default)s)")
    parser.add_argument("-h", "--height", type=int, default=defaults.height,
                        help="raster height in pixels (default: %(default)s)")
    parser.add_argument("-f", "--floor", type=float, default=defaults.floor,
                        help="first depth (default: %(default)s)")
    parser.add_argument("-c", "--ceiling", type=float, default=defaults.ceiling,
                        help="last depth (default: %(default)s)")
    parser.add_argument("-n", "--slices", type=int, default=defaults.slices,
                        help="number of frames (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=defaults.seed,
                        help="noise seed (default: %(default)s)")
    parser.add_argument("--frequency", type=float, default=defaults.frequency,
                        help="sampling frequency applied to pixel coordinates (default: %(default)s)")
    parser.add_argument("--no-truecolor", action="store_true",
                        help="use the 256-colour grey ramp instead of 24-bit colour")
    parser.add_argument("--ranges", action="store_true",
                        help="print the value range of every noise function and exit")
    parser.add_argument("--debug", action="store_true", help="log every frame")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser


def settings_from_args(args):
    return AnimationSettings(
        algorithm=Algorithm.parse(args.function),
        bias=args.bias,
        scale=args.scale,
        width=args.width,
        height=args.height,
        floor=args.floor,
        ceiling=args.ceiling,
        slices=args.slices,
        seed=args.seed,
        frequency=args.frequency,
        truecolor=not args.no_truecolor,
    ).validate()


def print_ranges(seed=0, frequency=1.0, out=None):
    """Print min and max of each noise function, to help pick scale and bias."""
    out = out if out is not None else sys.stdout
    for algorithm in Algorithm:
        low, high = value_range(make_field(algorithm, seed=seed, frequency=frequency))
        print(f"{low:7.3f}\t{high:7.3f}\t({algorithm.value})", file=out)


def animate(settings, terminal=None):
    """Sample the configured field slice by slice and play it. Returns frames drawn."""
    field = make_field(settings.algorithm, seed=settings.seed, frequency=settings.frequency)
    field = ScaleBias(field, scale=settings.scale, bias=settings.bias)
    depths = depth_range(settings.floor, settings.ceiling, settings.slices)
    log.info(
        "Animating %s: %dx%d, %d slices from %g to %g",
        settings.algorithm.value, settings.width, settings.height,
        settings.slices, settings.floor, settings.ceiling,
    )
    rasters = sample_volume(field, settings.width, settings.height, depths)
    return print_images(rasters, RenderConfig(truecolor=settings.truecolor), terminal=terminal)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(log_file=args.log_file, debug=args.debug)

    try:
        if args.ranges:
            print_ranges(seed=args.seed, frequency=args.frequency)
            return EXIT_OK
        settings = settings_from_args(args)
    except ConfigError as e:
        log.error("%s", e)
        return EXIT_USAGE

    try:
        animate(settings)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except NoisimationError as e:
        log.error("%s", e)
        return EXIT_RENDER
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
