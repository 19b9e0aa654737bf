"""Primitive terminal operations used by the renderer.

Everything is plain ANSI/VT100 escape sequences written to a text stream.
"""

import os
import sys

from noisimation.errors import TerminalError

CSI = "\033["


class Terminal:
    """A text stream that understands cursor and scroll escape sequences.

    ``size`` overrides the dimensions reported by the OS, which is how the
    terminal is driven when the stream is not attached to a tty.
    """

    def __init__(self, stream=None, size=None):
        self.stream = stream if stream is not None else sys.stdout
        self._size = size

    def size(self):
        """Return (columns, rows) of the visible terminal."""
        if self._size is not None:
            return self._size
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (OSError, ValueError) as e:
            raise TerminalError(f"cannot query terminal size: {e}") from e
        return size.columns, size.lines

    def scroll_down(self, rows):
        """Scroll the viewport down by ``rows`` lines (CSI n T)."""
        if rows > 0:
            self.write(f"{CSI}{rows}T")

    def move_up(self, rows):
        """Move the cursor up by ``rows`` lines (CSI n A)."""
        if rows > 0:
            self.write(f"{CSI}{rows}A")

    def write(self, text):
        try:
            self.stream.write(text)
        except (OSError, ValueError) as e:
            raise TerminalError(f"cannot write to terminal: {e}") from e

    def flush(self):
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"cannot flush terminal: {e}") from e
