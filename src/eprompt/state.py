"""Selection state machines for the three widgets.

Each state owns the cursor (and chosen flags or filter buffer) for one
prompt call. ``handle()`` applies one classified action and returns True
only for a confirm the prompt can act on.
"""

from collections.abc import Sequence

from eprompt.errors import EmptyOptionsError
from eprompt.models import Action, Command
from eprompt.viewport import Viewport, scroll_to_cursor


class SelectState:
    """Cursor over a fixed list of ``count`` options."""

    def __init__(self, count: int):
        if count < 1:
            raise EmptyOptionsError("at least one option is required")
        self.count = count
        self.cursor = 0

    @property
    def last_index(self) -> int:
        return self.count - 1

    def move_up(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_down(self) -> None:
        self.cursor = min(self.cursor + 1, self.last_index)

    def handle(self, action: Action) -> bool:
        if action.command is Command.UP:
            self.move_up()
        elif action.command is Command.DOWN:
            self.move_down()
        elif action.command is Command.CONFIRM:
            return True
        return False


class MultiSelectState(SelectState):
    """Cursor plus one chosen flag per option."""

    def __init__(self, count: int):
        super().__init__(count)
        self.chosen = [False] * count

    def toggle(self) -> None:
        self.chosen[self.cursor] = not self.chosen[self.cursor]

    def selected_indices(self) -> list[int]:
        """Chosen option indices in list order."""
        return [i for i, chosen in enumerate(self.chosen) if chosen]

    def handle(self, action: Action) -> bool:
        if action.command is Command.TOGGLE:
            self.toggle()
            return False
        return super().handle(action)


def filter_options(labels: Sequence[str], text: str) -> list[int]:
    """Indices of labels containing ``text``, ignoring case."""
    needle = text.casefold()
    return [i for i, label in enumerate(labels) if needle in label.casefold()]


class FuzzyState:
    """Filter buffer, matching indices and a cursor into the matches."""

    def __init__(self, labels: Sequence[str]):
        if not labels:
            raise EmptyOptionsError("at least one option is required")
        self.labels = labels
        self.filter_text = ""
        self.filtered = filter_options(labels, self.filter_text)
        self.cursor = 0
        self.scroll_offset = 0

    @property
    def current(self) -> int | None:
        """Option index under the cursor, or None when nothing matches."""
        if not self.filtered:
            return None
        return self.filtered[self.cursor]

    def move_up(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_down(self) -> None:
        if self.filtered:
            self.cursor = min(self.cursor + 1, len(self.filtered) - 1)

    def append(self, char: str) -> None:
        self.filter_text += char
        self._refilter()

    def backspace(self) -> None:
        self.filter_text = self.filter_text[:-1]
        self._refilter()

    def _refilter(self) -> None:
        self.filtered = filter_options(self.labels, self.filter_text)
        self.cursor = 0
        self.scroll_offset = 0

    def viewport(self, rows: int) -> Viewport:
        """Window of ``filtered`` to draw, scrolled to keep the cursor shown."""
        view = scroll_to_cursor(self.cursor, len(self.filtered), rows, self.scroll_offset)
        self.scroll_offset = view.start
        return view

    def handle(self, action: Action) -> bool:
        command = action.command
        if command is Command.UP:
            self.move_up()
        elif command is Command.DOWN:
            self.move_down()
        elif command is Command.FILTER_CHAR:
            self.append(action.char)
        elif command is Command.BACKSPACE:
            self.backspace()
        elif command is Command.CONFIRM:
            # Enter with no candidates has nothing to confirm
            return self.current is not None
        return False
