"""Line input parsed into a value, re-asking until it parses."""

import logging
from collections.abc import Callable
from typing import TypeVar

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from eprompt.config import Config
from eprompt.errors import PromptCancelled, PromptIOError

T = TypeVar("T")

logger = logging.getLogger("eprompt.input")


def read_and_parse(
    prompt: str,
    parse: Callable[[str], T] = str,
    *,
    console: Console | None = None,
    read_line: Callable[[], str] | None = None,
    config: Config | None = None,
) -> T:
    """Ask for a line of input and convert it with ``parse``.

    Input that ``parse`` rejects with ValueError or TypeError is erased and
    the prompt is shown again on the same line, as many times as needed.
    ``read_line`` replaces ``console.input`` and must not echo the newline.

    Example:
        age = read_and_parse("How old are you?", int)
    """
    console = console or Console()
    cfg = config or Config.load()
    prompt_text = Text(f"{prompt}: ", style=cfg.style("prompt_style"))

    while True:
        try:
            if read_line is None:
                line = console.input(prompt_text)
            else:
                console.print(prompt_text, end="")
                line = read_line()
                # read_line does not echo the newline
                console.line()
        except KeyboardInterrupt:
            raise PromptCancelled("input cancelled") from None
        except EOFError as exc:
            raise PromptIOError("input stream closed") from exc
        except OSError as exc:
            raise PromptIOError(f"terminal I/O failed: {exc}") from exc

        try:
            return parse(line.strip())
        except (ValueError, TypeError):
            logger.debug("Could not parse %r, asking again", line)
            # The answer's newline moved the cursor below the prompt line
            console.control(
                Control.move_to_column(0, -1),
                Control((ControlType.ERASE_IN_LINE, 2)),
            )
