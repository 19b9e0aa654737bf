"""Print single-channel images to the terminal with half block characters.

Each terminal cell shows two vertically stacked pixels: the upper one as the
foreground colour of an upper half block, the lower one as its background.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from noisimation.errors import RenderError

log = logging.getLogger(__name__)

UPPER_HALF_BLOCK = "▀"
RESET = "\033[0m"
DEFAULT_BACKGROUND = "\033[49m"

# The 256-colour palette has a 24 step grey ramp at 232..255
GREY_RAMP_START = 232
GREY_RAMP_STEPS = 24


@dataclass
class RenderConfig:
    """How frames are laid out in the terminal.

    width and height are in terminal cells. When both are None the image is
    fitted into the terminal keeping its aspect ratio; when one is given the
    other follows the aspect ratio; when both are given the image is stretched.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    truecolor: bool = True


def to_grayscale(image):
    """Convert a raster or PIL image to a 2-D uint8 array."""
    if isinstance(image, Image.Image):
        if image.mode.startswith("I"):
            # 16/32 bit integer images; PIL would clip them into 0..255
            array = np.clip(np.asarray(image, dtype=np.int64), 0, 65535)
            return (array // 257).astype(np.uint8)
        return np.asarray(image.convert("L"), dtype=np.uint8)

    array = np.asarray(image)
    if array.ndim != 2:
        raise RenderError(f"expected a single-channel 2-D raster, got shape {array.shape}")
    if array.dtype == np.uint8:
        return array
    if array.dtype == np.uint16:
        return (array // 257).astype(np.uint8)
    raise RenderError(f"unsupported raster dtype {array.dtype}")


def fit(pixel_width, pixel_height, config, terminal_size):
    """Return the (columns, pixel rows) an image of the given size is drawn at."""
    if config.width is not None and config.height is not None:
        return config.width, config.height * 2

    if config.width is not None:
        columns = config.width
        rows = pixel_height * columns / pixel_width
    elif config.height is not None:
        rows = config.height * 2
        columns = pixel_width * rows / pixel_height
    else:
        max_columns, max_lines = terminal_size
        # one line is left free for the cursor below the frame
        max_rows = max(max_lines - 1, 1) * 2
        ratio = min(max_columns / pixel_width, max_rows / pixel_height)
        columns = pixel_width * ratio
        rows = pixel_height * ratio
    return max(int(round(columns)), 1), max(int(round(rows)), 1)


def _foreground(value, truecolor):
    if truecolor:
        return f"\033[38;2;{value};{value};{value}m"
    return f"\033[38;5;{_grey_index(value)}m"


def _background(value, truecolor):
    if truecolor:
        return f"\033[48;2;{value};{value};{value}m"
    return f"\033[48;5;{_grey_index(value)}m"


def _grey_index(value):
    return GREY_RAMP_START + int(round(value / 255.0 * (GREY_RAMP_STEPS - 1)))


def render_lines(pixels, truecolor=True):
    """Turn a uint8 pixel array into lines of coloured half blocks."""
    height, width = pixels.shape
    lines = []
    for top in range(0, height, 2):
        parts = []
        for x in range(width):
            parts.append(_foreground(int(pixels[top, x]), truecolor))
            if top + 1 < height:
                parts.append(_background(int(pixels[top + 1, x]), truecolor))
            else:
                parts.append(DEFAULT_BACKGROUND)
            parts.append(UPPER_HALF_BLOCK)
        parts.append(RESET)
        lines.append("".join(parts))
    return lines


def print_image(image, config, terminal):
    """Print an image at the cursor and return the (columns, rows) printed.

    The cursor is left at the start of the line below the image.
    """
    pixels = to_grayscale(image)
    height, width = pixels.shape
    if width == 0 or height == 0:
        return 0, 0

    needs_terminal = config.width is None and config.height is None
    terminal_size = terminal.size() if needs_terminal else None
    columns, pixel_rows = fit(width, height, config, terminal_size)

    if (columns, pixel_rows) != (width, height):
        resized = Image.fromarray(pixels).resize((columns, pixel_rows), Image.Resampling.BILINEAR)
        pixels = np.asarray(resized, dtype=np.uint8)

    lines = render_lines(pixels, config.truecolor)
    for line in lines:
        terminal.write(line + "\n")
    log.debug("Printed %dx%d image as %dx%d cells", width, height, columns, len(lines))
    return columns, len(lines)
