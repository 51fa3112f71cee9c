"""Key parsing and classification.

``readchar.readkey()`` returns the raw string a key produced. ``parse_key``
turns that into a ``KeyEvent`` and the ``classify_*`` functions map the
event to the ``Action`` a widget understands.
"""

import readchar

from eprompt.models import NOOP, Action, Command, KeyEvent

ENTER = "\r"
BACKSPACE_KEYS = ("\x7f", "\x08", readchar.key.BACKSPACE)

_NAMED_KEYS: dict[str, str] = {
    readchar.key.UP: "up",
    readchar.key.DOWN: "down",
    readchar.key.LEFT: "left",
    readchar.key.RIGHT: "right",
    readchar.key.HOME: "home",
    readchar.key.END: "end",
    readchar.key.PAGE_UP: "page_up",
    readchar.key.PAGE_DOWN: "page_down",
    readchar.key.INSERT: "insert",
    readchar.key.DELETE: "delete",
}

_SELECT_KEYS: dict[str, Command] = {
    "up": Command.UP,
    "k": Command.UP,
    "K": Command.UP,
    "down": Command.DOWN,
    "j": Command.DOWN,
    "J": Command.DOWN,
    "enter": Command.CONFIRM,
    "space": Command.TOGGLE,
}

# With ctrl held the fuzzy prompt navigates; bare letters are filter text.
_FUZZY_CTRL_KEYS: dict[str, Command] = {
    "k": Command.UP,
    "j": Command.DOWN,
}

_FUZZY_KEYS: dict[str, Command] = {
    "enter": Command.CONFIRM,
    "backspace": Command.BACKSPACE,
    "up": Command.UP,
    "down": Command.DOWN,
}


def parse_key(raw: str) -> KeyEvent:
    """Parse a string returned by ``readchar.readkey()``.

    Enter is expected as ``\\r``: the terminal session disables CR to NL
    translation, so ``\\n`` only arrives from Ctrl-J and is reported as
    ``ctrl+j``.
    """
    if not raw:
        return KeyEvent(name="unknown")
    if raw in _NAMED_KEYS:
        return KeyEvent(name=_NAMED_KEYS[raw])
    if raw == ENTER:
        return KeyEvent(name="enter")
    if raw in BACKSPACE_KEYS:
        return KeyEvent(name="backspace")
    if raw == "\t":
        return KeyEvent(name="tab")
    if raw == " ":
        return KeyEvent(name="space", char=" ")
    if raw == "\x1b":
        return KeyEvent(name="escape")

    if len(raw) == 1:
        code = ord(raw)
        if 1 <= code <= 26:
            letter = chr(code + 96)  # 1 -> 'a'
            return KeyEvent(name=f"ctrl+{letter}", char=letter, ctrl=True)
        if raw.isprintable():
            return KeyEvent(name=raw, char=raw)

    return KeyEvent(name="unknown")


def classify_select(key: KeyEvent) -> Action:
    """Classifier shared by single-select and multi-select."""
    if key.ctrl:
        return NOOP
    command = _SELECT_KEYS.get(key.name)
    return Action(command) if command else NOOP


def classify_fuzzy(key: KeyEvent) -> Action:
    """Classifier for the fuzzy prompt."""
    if key.ctrl:
        command = _FUZZY_CTRL_KEYS.get(key.char)
        return Action(command) if command else NOOP

    command = _FUZZY_KEYS.get(key.name)
    if command:
        return Action(command)
    if key.char:
        return Action(Command.FILTER_CHAR, key.char)
    return NOOP
