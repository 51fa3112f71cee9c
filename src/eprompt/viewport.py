"""Scrolling window for lists taller than the terminal."""

from dataclasses import dataclass

from rich.text import Text


@dataclass(frozen=True)
class Viewport:
    """The slice ``[start, end)`` of a list that is on screen."""

    start: int
    end: int
    total: int

    @property
    def hidden_above(self) -> int:
        return self.start

    @property
    def hidden_below(self) -> int:
        return self.total - self.end


def scroll_to_cursor(cursor: int, total: int, rows: int, offset: int = 0) -> Viewport:
    """Move a window of ``rows`` items as little as possible to show ``cursor``.

    Args:
        cursor: Cursor position within the list
        total: Number of items in the list
        rows: Rows available for items
        offset: Window start from the previous frame
    """
    if total == 0 or rows <= 0:
        return Viewport(0, 0, total)

    cursor = max(0, min(cursor, total - 1))
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + rows:
        offset = cursor - rows + 1

    # Never leave empty rows at the bottom while items are hidden above
    offset = max(0, min(offset, total - rows))
    return Viewport(offset, min(offset + rows, total), total)


def scroll_indicators(view: Viewport) -> tuple[Text | None, Text | None]:
    """Dim "N more" rows for the items hidden above and below, or None."""
    above = Text(f"  ↑ {view.hidden_above} more", style="dim") if view.hidden_above else None
    below = Text(f"  ↓ {view.hidden_below} more", style="dim") if view.hidden_below else None
    return above, below
