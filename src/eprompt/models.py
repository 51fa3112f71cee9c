"""Data models shared by the key classifiers and selection states."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Displayable(Protocol):
    """Anything that can be shown as a prompt option."""

    def __str__(self) -> str: ...


class Command(Enum):
    """Abstract navigation command produced by a key classifier."""

    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    FILTER_CHAR = "filter_char"
    BACKSPACE = "backspace"
    NOOP = "noop"


@dataclass(frozen=True)
class KeyEvent:
    """One parsed key press.

    ``name`` is the symbolic key name (``"enter"``, ``"up"``, ``"ctrl+k"``)
    or the character itself for printable keys. ``char`` holds the typed
    character, or the letter for ctrl combinations.
    """

    name: str
    char: str = ""
    ctrl: bool = False


@dataclass(frozen=True)
class Action:
    """Classified key: a command plus the character for FILTER_CHAR."""

    command: Command
    char: str = ""


NOOP = Action(Command.NOOP)


def display_text(option: Displayable) -> str:
    """Single-line display text for an option."""
    return " ".join(str(option).splitlines())
