"""Interactive selection prompts.

The returned options are the caller's own objects, never copies.

Example:
    from eprompt import multi_select, select

    index, fun = select("How much fun is this out of 5?", [1, 2, 3, 4, 5])
    for index, task in multi_select("What today?", ["Eat a cake", "Go on a hike"]):
        print(task)
"""

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from rich.console import Console
from rich.text import Text

from eprompt.config import Config
from eprompt.keys import classify_fuzzy, classify_select
from eprompt.loop import PromptLoop
from eprompt.models import Displayable, display_text
from eprompt.render import Theme, fuzzy_rows, multi_select_rows, select_rows
from eprompt.state import FuzzyState, MultiSelectState, SelectState

T = TypeVar("T", bound=Displayable)

logger = logging.getLogger("eprompt.prompts")


def select(
    prompt: str,
    options: Sequence[T],
    *,
    console: Console | None = None,
    read_key: Callable[[], str] | None = None,
    config: Config | None = None,
) -> tuple[int, T]:
    """Let the user pick one option with up/down (or j/k) and Enter.

    Returns:
        Tuple of (index, option)

    Raises:
        EmptyOptionsError: ``options`` is empty.
        PromptCancelled: Ctrl-C was pressed.
        PromptIOError: The terminal could not be read or written.
    """
    state = SelectState(len(options))
    labels = [display_text(option) for option in options]
    theme = Theme.from_config(config or Config.load())

    PromptLoop(
        console or Console(),
        state,
        classify_select,
        lambda: select_rows(labels, state, theme),
        read_key=read_key,
        header=Text(prompt, style=theme.prompt),
    ).run()

    logger.debug("Selected option %d", state.cursor)
    return state.cursor, options[state.cursor]


def multi_select(
    prompt: str,
    options: Sequence[T],
    *,
    console: Console | None = None,
    read_key: Callable[[], str] | None = None,
    config: Config | None = None,
) -> Iterator[tuple[int, T]]:
    """Let the user tick any number of options with Space, then Enter.

    Returns:
        Iterator of (index, option) for every ticked option, in list order.
        Empty when nothing was ticked.
    """
    state = MultiSelectState(len(options))
    labels = [display_text(option) for option in options]
    theme = Theme.from_config(config or Config.load())

    PromptLoop(
        console or Console(),
        state,
        classify_select,
        lambda: multi_select_rows(labels, state, theme),
        read_key=read_key,
        header=Text(prompt, style=theme.prompt),
    ).run()

    chosen = state.selected_indices()
    logger.debug("Selected options %s", chosen)
    return ((i, options[i]) for i in chosen)


def fuzzy_select(
    options: Sequence[str],
    *,
    console: Console | None = None,
    read_key: Callable[[], str] | None = None,
    config: Config | None = None,
) -> str:
    """Filter options by typing and pick one.

    Typed characters narrow the list (case-insensitive substring match).
    Ctrl-j/Ctrl-k or the arrow keys move, Backspace edits the filter and
    Enter picks the highlighted match. Runs on the alternate screen.
    """
    labels = [display_text(option) for option in options]
    state = FuzzyState(labels)
    theme = Theme.from_config(config or Config.load())
    console = console or Console()

    PromptLoop(
        console,
        state,
        classify_fuzzy,
        lambda: fuzzy_rows(state, theme, console.height),
        read_key=read_key,
        alt_screen=True,
    ).run()

    logger.debug("Fuzzy selected option %s", state.current)
    return options[state.current]
