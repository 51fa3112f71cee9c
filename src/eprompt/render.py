"""Frame building and in-place redraw.

A frame is a list of one-line ``Text`` rows. ``FrameRenderer`` writes a
frame from the anchor row and moves the cursor back up by the number of
lines it wrote, so the next frame overwrites it instead of scrolling.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.style import Style
from rich.text import Text

from eprompt.config import Config
from eprompt.state import FuzzyState, MultiSelectState, SelectState
from eprompt.viewport import scroll_indicators

_ERASE_LINE = Control((ControlType.ERASE_IN_LINE, 2))


@dataclass(frozen=True)
class Theme:
    """Render-ready appearance settings."""

    highlight: Style
    prompt: Style
    marker: str = ">"
    indent: int = 4
    checked_glyph: str = "x"
    filter_prompt: str = ">"

    @classmethod
    def from_config(cls, config: Config) -> "Theme":
        return cls(
            highlight=config.style("highlight_style"),
            prompt=config.style("prompt_style"),
            marker=config.marker,
            indent=max(0, config.indent),
            checked_glyph=config.checked_glyph,
            filter_prompt=config.filter_prompt,
        )


def _option_row(label: str, active: bool, theme: Theme, checkbox: str | None = None) -> Text:
    marker = theme.marker if active else " " * len(theme.marker)
    body = f"{marker} [{checkbox}] {label}" if checkbox is not None else f"{marker} {label}"
    row = Text(" " * theme.indent)
    row.append(body, style=theme.highlight if active else None)
    return row


def select_rows(labels: Sequence[str], state: SelectState, theme: Theme) -> list[Text]:
    """One row per option, the cursor row marked and highlighted."""
    return [_option_row(label, i == state.cursor, theme) for i, label in enumerate(labels)]


def multi_select_rows(labels: Sequence[str], state: MultiSelectState, theme: Theme) -> list[Text]:
    """One checkbox row per option."""
    blank = " " * len(theme.checked_glyph)
    return [
        _option_row(
            label,
            i == state.cursor,
            theme,
            checkbox=theme.checked_glyph if state.chosen[i] else blank,
        )
        for i, label in enumerate(labels)
    ]


def fuzzy_rows(state: FuzzyState, theme: Theme, height: int) -> list[Text]:
    """Filter prompt followed by the visible window of matches.

    Never returns more than ``height - 1`` rows, so a frame ending in a
    newline cannot scroll the screen. Terminals too short for that get the
    filter prompt alone.
    """
    total = len(state.filtered)

    header = Text(f"{theme.filter_prompt} ", style=theme.prompt)
    header.append(state.filter_text)
    header.append(f"  {total}/{len(state.labels)}", style="dim")
    rows = [header]
    if height <= 2:
        return rows

    if not state.filtered:
        rows.append(Text("  no matches", style="dim"))
        return rows

    budget = height - 2
    show_indicators = total > budget and budget >= 3
    max_visible = budget - 2 if show_indicators else budget

    view = state.viewport(max_visible)
    above, below = scroll_indicators(view) if show_indicators else (None, None)

    if above:
        rows.append(above)
    for pos in range(view.start, view.end):
        label = state.labels[state.filtered[pos]]
        rows.append(_option_row(label, pos == state.cursor, theme))
    if below:
        rows.append(below)
    return rows


class FrameRenderer:
    """Redraws frames in place below a fixed anchor row."""

    def __init__(self, console: Console):
        self.console = console
        self._height = 0

    @property
    def height(self) -> int:
        """Lines written by the last frame."""
        return self._height

    def draw(self, rows: Sequence[Text]) -> None:
        """Write one frame and return the cursor to the anchor row.

        A frame shorter than the previous one is padded with blank lines so
        stale rows get erased and the cursor moves back by exactly the
        number of lines written.
        """
        lines = list(rows)
        lines.extend(Text() for _ in range(self._height - len(lines)))

        with self.console:
            for line in lines:
                self.console.control(_ERASE_LINE)
                self.console.print(
                    line, no_wrap=True, overflow="ellipsis", crop=True, highlight=False
                )
            if lines:
                self.console.control(Control.move_to_column(0, -len(lines)))
        self._height = len(lines)

    def finish(self) -> None:
        """Move the cursor below the last frame."""
        if self._height:
            self.console.control(Control.move_to_column(0, self._height))
        self._height = 0
