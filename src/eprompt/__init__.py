"""Interactive terminal prompts: select, multi-select and fuzzy select."""

from .config import Config
from .errors import EmptyOptionsError, PromptCancelled, PromptError, PromptIOError
from .input import read_and_parse
from .prompts import fuzzy_select, multi_select, select

__version__ = "0.2.0"

__all__ = [
    "Config",
    "EmptyOptionsError",
    "PromptCancelled",
    "PromptError",
    "PromptIOError",
    "fuzzy_select",
    "multi_select",
    "read_and_parse",
    "select",
]
