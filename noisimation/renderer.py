"""Play a sequence of frames in place in the terminal.

A render session reserves a blank region by scrolling the viewport down by
its own height, then draws every frame at the same spot: after each frame
that has a successor the cursor is moved back up by the number of rows the
backend reported printing. After the last frame the cursor stays below it so
later output appears after the animation.
"""

import logging

from noisimation import backend as _backend
from noisimation.backend import RenderConfig
from noisimation.errors import RenderError, TerminalError
from noisimation.terminal import Terminal

log = logging.getLogger(__name__)

_DONE = object()


class RenderSession:
    """Terminal state for one traversal of a frame sequence.

    Holds the viewport height reserved at start and the printed height of the
    most recent frame, which is the distance the next rewind moves the cursor.
    """

    def __init__(self, terminal, config=None, backend=_backend.print_image):
        self.terminal = terminal
        self.config = config if config is not None else RenderConfig()
        self.backend = backend
        self.viewport_height = None
        self.last_printed_height = 0
        self.frames_drawn = 0

    def start(self):
        """Reserve blank scrollback the height of the viewport."""
        _, rows = self.terminal.size()
        self.viewport_height = rows
        self.terminal.scroll_down(rows)
        self.terminal.flush()
        log.debug("Reserved %d rows", rows)

    def draw(self, frame):
        """Draw a frame at the cursor and return the printed height."""
        try:
            _, printed_height = self.backend(frame, self.config, self.terminal)
        except (TerminalError, RenderError):
            raise
        except Exception as e:
            raise RenderError(f"backend failed to draw frame {self.frames_drawn}: {e}") from e
        self.terminal.flush()
        self.last_printed_height = printed_height
        self.frames_drawn += 1
        log.debug("Drew frame %d, %d rows", self.frames_drawn, printed_height)
        return printed_height

    def rewind(self):
        """Move the cursor back to the top of the last drawn frame."""
        self.terminal.move_up(self.last_printed_height)


def _open_session(terminal, config, backend):
    if terminal is None:
        terminal = Terminal()
    return RenderSession(terminal, config, backend)


def _abort(session, error):
    message = f"render aborted after {session.frames_drawn} frame(s): {error}"
    return RenderError(message, frames_drawn=session.frames_drawn)


def print_images(frames, config=None, terminal=None, backend=_backend.print_image, should_stop=None):
    """Animate frames in place and return how many were drawn.

    ``frames`` is consumed once, one frame at a time; the next frame is pulled
    only after the current one has been drawn. ``should_stop`` is checked
    after each frame and ends the session early when it returns True.

    Terminal or backend failures abort the session with a ``RenderError``
    whose ``frames_drawn`` says how far it got. Frames already drawn stay on
    screen.
    """
    session = _open_session(terminal, config, backend)
    frames = iter(frames)
    try:
        session.start()
        frame = next(frames, _DONE)
        while frame is not _DONE:
            session.draw(frame)
            if should_stop is not None and should_stop():
                log.info("Stopped after %d frame(s)", session.frames_drawn)
                break
            frame = next(frames, _DONE)
            if frame is not _DONE:
                session.rewind()
    except (TerminalError, RenderError) as e:
        raise _abort(session, e) from e

    log.info("Rendered %d frame(s)", session.frames_drawn)
    return session.frames_drawn


def print_image(frame, config=None, terminal=None, backend=_backend.print_image):
    """Reserve the viewport and draw a single frame. Returns the printed height."""
    session = _open_session(terminal, config, backend)
    try:
        session.start()
        return session.draw(frame)
    except (TerminalError, RenderError) as e:
        raise _abort(session, e) from e
