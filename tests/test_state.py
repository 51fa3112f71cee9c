"""Tests for the selection state machines."""

import pytest

from eprompt.errors import EmptyOptionsError
from eprompt.models import NOOP, Action, Command
from eprompt.state import FuzzyState, MultiSelectState, SelectState, filter_options

UP = Action(Command.UP)
DOWN = Action(Command.DOWN)
TOGGLE = Action(Command.TOGGLE)
CONFIRM = Action(Command.CONFIRM)
BACKSPACE = Action(Command.BACKSPACE)


def char(c: str) -> Action:
    return Action(Command.FILTER_CHAR, c)


class TestSelectState:
    @pytest.mark.parametrize("count", [1, 2, 5, 17])
    def test_down_saturates_at_last_index(self, count):
        state = SelectState(count)
        for _ in range(count + 3):
            state.handle(DOWN)
            assert state.cursor <= count - 1
        assert state.cursor == count - 1

    @pytest.mark.parametrize("count", [1, 3])
    def test_up_at_top_stays_at_zero(self, count):
        state = SelectState(count)
        for _ in range(4):
            state.handle(UP)
        assert state.cursor == 0

    def test_up_after_down(self):
        state = SelectState(5)
        state.handle(DOWN)
        state.handle(DOWN)
        state.handle(UP)
        assert state.cursor == 1

    def test_confirm_finishes(self):
        state = SelectState(3)
        assert state.handle(DOWN) is False
        assert state.handle(CONFIRM) is True
        assert state.cursor == 1

    def test_toggle_and_noop_change_nothing(self):
        state = SelectState(3)
        state.handle(DOWN)
        assert state.handle(TOGGLE) is False
        assert state.handle(NOOP) is False
        assert state.cursor == 1

    def test_empty_rejected(self):
        with pytest.raises(EmptyOptionsError):
            SelectState(0)


class TestMultiSelectState:
    def test_starts_unchosen(self):
        state = MultiSelectState(3)
        assert state.chosen == [False, False, False]
        assert state.selected_indices() == []

    def test_toggle_twice_restores(self):
        state = MultiSelectState(3)
        state.handle(DOWN)
        state.handle(TOGGLE)
        assert state.chosen == [False, True, False]
        state.handle(TOGGLE)
        assert state.chosen == [False, False, False]

    def test_selected_in_list_order(self):
        state = MultiSelectState(3)
        state.handle(DOWN)
        state.handle(DOWN)
        state.handle(TOGGLE)
        state.handle(UP)
        state.handle(UP)
        state.handle(TOGGLE)
        assert state.selected_indices() == [0, 2]

    def test_chosen_length_never_changes(self):
        state = MultiSelectState(4)
        for action in [TOGGLE, DOWN, DOWN, DOWN, DOWN, TOGGLE, UP, NOOP, TOGGLE]:
            state.handle(action)
            assert len(state.chosen) == 4

    def test_confirm_finishes(self):
        state = MultiSelectState(2)
        assert state.handle(TOGGLE) is False
        assert state.handle(CONFIRM) is True

    def test_empty_rejected(self):
        with pytest.raises(EmptyOptionsError):
            MultiSelectState(0)


class TestFilterOptions:
    def test_case_insensitive_substring(self):
        assert filter_options(["You", "Yoyo", "Nope"], "yo") == [0, 1]

    def test_uppercase_filter(self):
        assert filter_options(["You", "Yoyo", "Nope"], "OP") == [2]

    def test_empty_filter_matches_all(self):
        assert filter_options(["a", "b"], "") == [0, 1]


class TestFuzzyState:
    def test_initially_all_match(self):
        state = FuzzyState(["You", "Yoyo", "Nope"])
        assert state.filtered == [0, 1, 2]
        assert state.current == 0

    def test_typing_filters_and_resets_cursor(self):
        state = FuzzyState(["Nope", "You", "Yoyo"])
        state.handle(DOWN)
        state.handle(DOWN)
        assert state.cursor == 2

        state.handle(char("y"))
        assert state.cursor == 0
        state.handle(DOWN)
        state.handle(char("o"))
        assert state.filter_text == "yo"
        assert state.filtered == [1, 2]
        assert state.cursor == 0

    def test_backspace_resets_cursor(self):
        state = FuzzyState(["You", "Yoyo", "Nope"])
        state.handle(char("o"))
        state.handle(DOWN)
        assert state.cursor == 1
        state.handle(BACKSPACE)
        assert state.filter_text == ""
        assert state.cursor == 0
        assert state.filtered == [0, 1, 2]

    def test_backspace_on_empty_filter(self):
        state = FuzzyState(["a", "b"])
        state.handle(DOWN)
        state.handle(BACKSPACE)
        assert state.filter_text == ""
        assert state.cursor == 0

    def test_down_bounded_by_filtered(self):
        state = FuzzyState(["You", "Yoyo", "Nope"])
        state.handle(char("y"))
        for _ in range(5):
            state.handle(DOWN)
        assert state.cursor == 1
        assert state.current == 1

    def test_no_matches(self):
        state = FuzzyState(["You", "Yoyo"])
        state.handle(char("z"))
        assert state.filtered == []
        assert state.current is None
        state.handle(DOWN)
        state.handle(UP)
        assert state.cursor == 0

    def test_confirm_ignored_without_matches(self):
        state = FuzzyState(["You", "Yoyo"])
        state.handle(char("z"))
        assert state.handle(CONFIRM) is False
        state.handle(BACKSPACE)
        assert state.handle(CONFIRM) is True
        assert state.current == 0

    def test_ctrl_navigation_does_not_touch_filter(self):
        state = FuzzyState(["a", "b", "c"])
        state.handle(DOWN)
        state.handle(NOOP)
        assert state.filter_text == ""
        assert state.cursor == 1

    def test_viewport_follows_cursor(self):
        state = FuzzyState([f"item {i}" for i in range(10)])
        for _ in range(6):
            state.handle(DOWN)
        view = state.viewport(3)
        assert (view.start, view.end) == (4, 7)
        assert state.scroll_offset == 4

    def test_filter_change_resets_scroll(self):
        state = FuzzyState([f"item {i}" for i in range(10)])
        for _ in range(6):
            state.handle(DOWN)
        state.viewport(3)
        state.handle(char("i"))
        assert state.scroll_offset == 0
        view = state.viewport(3)
        assert (view.start, view.end) == (0, 3)

    def test_empty_rejected(self):
        with pytest.raises(EmptyOptionsError):
            FuzzyState([])
