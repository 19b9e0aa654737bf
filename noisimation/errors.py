"""Exceptions raised by noisimation."""


class NoisimationError(Exception):
    """Base class for everything noisimation raises on purpose."""


class ConfigError(NoisimationError, ValueError):
    """Invalid settings or an unknown noise algorithm."""


class TerminalError(NoisimationError, OSError):
    """The terminal could not be queried or written to."""


class RenderError(NoisimationError):
    """A render session was aborted.

    frames_drawn is the number of frames that reached the terminal before the
    failure; they are left on screen.
    """

    def __init__(self, message, frames_drawn=0):
        super().__init__(message)
        self.frames_drawn = frames_drawn
