"""The render, read, classify, transition loop shared by all widgets."""

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

import readchar
from rich.console import Console
from rich.text import Text

from eprompt.errors import PromptCancelled, PromptIOError
from eprompt.keys import parse_key
from eprompt.models import Action, KeyEvent
from eprompt.render import FrameRenderer
from eprompt.session import TERMINAL_ERRORS, TerminalSession

logger = logging.getLogger("eprompt.loop")


class PromptState(Protocol):
    def handle(self, action: Action) -> bool: ...


class PromptLoop:
    """Drive one prompt until its state accepts a confirm.

    Args:
        console: Console to draw on.
        state: Selection state; ``handle()`` returns True to finish.
        classify: Key classifier for the widget.
        build_frame: Returns the rows of the current frame.
        read_key: Key source, ``readchar.readkey`` when None. Raw mode is
            only entered when reading from the keyboard.
        alt_screen: Draw on the alternate screen.
        header: Printed once above the frames.
    """

    def __init__(
        self,
        console: Console,
        state: PromptState,
        classify: Callable[[KeyEvent], Action],
        build_frame: Callable[[], Sequence[Text]],
        *,
        read_key: Callable[[], str] | None = None,
        alt_screen: bool = False,
        header: Text | None = None,
    ):
        self.console = console
        self.state = state
        self.classify = classify
        self.build_frame = build_frame
        self.read_key = read_key
        self.alt_screen = alt_screen
        self.header = header
        self.renderer = FrameRenderer(console)

    def run(self) -> None:
        """Block until confirmed.

        Raises:
            PromptCancelled: Ctrl-C was pressed.
            PromptIOError: The terminal could not be read or written.
        """
        read_key = self.read_key or readchar.readkey
        try:
            with TerminalSession(
                self.console, alt_screen=self.alt_screen, raw=self.read_key is None
            ):
                if self.header is not None:
                    self.console.print(self.header, highlight=False)
                try:
                    self._loop(read_key)
                except KeyboardInterrupt:
                    self._finish()
                    logger.debug("Prompt cancelled")
                    raise PromptCancelled("prompt cancelled") from None
                self._finish()
        except PromptIOError:
            raise
        except TERMINAL_ERRORS as exc:
            raise PromptIOError(f"terminal I/O failed: {exc}") from exc

    def _loop(self, read_key: Callable[[], str]) -> None:
        while True:
            self.renderer.draw(self.build_frame())
            action = self.classify(parse_key(read_key()))
            if self.state.handle(action):
                logger.debug("Prompt confirmed")
                return

    def _finish(self) -> None:
        if not self.alt_screen:
            self.renderer.finish()
