"""Exceptions raised by prompts."""


class PromptError(Exception):
    """Base class for prompt failures."""


class PromptIOError(PromptError, OSError):
    """Reading keys or writing to the terminal failed."""


class EmptyOptionsError(PromptError, ValueError):
    """A prompt was given no options to choose from."""


class PromptCancelled(PromptError):
    """The user interrupted the prompt with Ctrl-C."""
