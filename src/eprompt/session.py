"""Terminal session guard.

``TerminalSession`` is a context manager that owns the terminal for one
prompt: raw keyboard input, hidden cursor and, optionally, the alternate
screen. Leaving the ``with`` block restores all of it, whether the prompt
returned or raised.
"""

import io
import logging
import os
import sys
from typing import TextIO

from rich.console import Console
from rich.control import Control

_IS_WINDOWS = os.name == "nt"

if _IS_WINDOWS:
    TERMINAL_ERRORS: tuple[type[Exception], ...] = (OSError,)
else:
    import termios

    # termios.error is not an OSError subclass
    TERMINAL_ERRORS = (OSError, termios.error)

logger = logging.getLogger("eprompt.session")


def _terminal_fd(stream: TextIO) -> int | None:
    """File descriptor of ``stream`` if it is a terminal, else None."""
    try:
        fd = stream.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        return None
    return fd if os.isatty(fd) else None


class TerminalSession:
    """Raw mode, cursor and screen state for the duration of a prompt.

    Args:
        console: Console the prompt draws on.
        alt_screen: Switch to the alternate screen buffer while active.
        raw: Put the input stream into raw mode. Prompts pass False when
            keys come from somewhere other than the keyboard.
        stream: Input stream, defaults to ``sys.stdin``.
    """

    def __init__(
        self,
        console: Console,
        *,
        alt_screen: bool = False,
        raw: bool = True,
        stream: TextIO | None = None,
    ):
        self.console = console
        self.alt_screen = alt_screen
        self.raw = raw
        self._stream = stream
        self._fd: int | None = None
        self._saved_attrs: list | None = None
        self._alt_active = False
        self._cursor_hidden = False

    @property
    def raw_active(self) -> bool:
        return self._saved_attrs is not None

    def __enter__(self) -> "TerminalSession":
        try:
            if self.raw:
                self._enter_raw()
            if self.alt_screen:
                self._alt_active = self.console.set_alt_screen(True)
                if self._alt_active:
                    self.console.control(Control.clear(), Control.home())
            self.console.show_cursor(False)
            self._cursor_hidden = True
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Restore the terminal. Safe to call more than once."""
        try:
            if self._cursor_hidden:
                self._cursor_hidden = False
                self.console.show_cursor(True)
            if self._alt_active:
                self._alt_active = False
                self.console.set_alt_screen(False)
        finally:
            self._restore_raw()

    def _enter_raw(self) -> None:
        if _IS_WINDOWS:
            # readchar reads the Windows console unbuffered on its own
            return
        fd = _terminal_fd(self._stream or sys.stdin)
        if fd is None:
            logger.debug("Input is not a terminal, skipping raw mode")
            return

        saved = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        # IFLAG: no CR->NL translation so Enter and Ctrl-J stay distinct
        attrs[0] &= ~(termios.IXON | termios.ICRNL | termios.INLCR | termios.IGNCR)
        # LFLAG: no echo, no line buffering; ISIG stays on for Ctrl-C
        attrs[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

        self._fd = fd
        self._saved_attrs = saved
        logger.debug("Entered raw mode on fd %d", fd)

    def _restore_raw(self) -> None:
        if self._saved_attrs is None or self._fd is None:
            return
        saved, self._saved_attrs = self._saved_attrs, None
        termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
        logger.debug("Restored terminal mode on fd %d", self._fd)
