"""Pytest fixtures for eprompt tests."""

import io

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def clear_caches(tmp_path, monkeypatch):
    """Isolate config per test and clear the module-level cache."""
    from eprompt.config import clear_config_cache

    monkeypatch.setenv("EPROMPT_CONFIG_DIR", str(tmp_path / "eprompt-config"))
    clear_config_cache()

    yield

    clear_config_cache()


class RecordingIO(io.StringIO):
    """StringIO that also keeps each write separately."""

    def __init__(self):
        super().__init__()
        self.writes: list[str] = []

    def write(self, s: str) -> int:
        self.writes.append(s)
        return super().write(s)


@pytest.fixture
def console() -> Console:
    """Terminal console without colors, so output is plain text plus control codes."""
    return Console(
        file=RecordingIO(),
        force_terminal=True,
        color_system=None,
        width=60,
        height=12,
        legacy_windows=False,
    )


@pytest.fixture
def make_keys():
    """Build a read_key callable that replays scripted keys.

    Exception classes in the script are raised instead of returned.
    """

    def _make(*keys):
        remaining = iter(keys)

        def read_key() -> str:
            try:
                key = next(remaining)
            except StopIteration:
                raise AssertionError("prompt read more keys than scripted") from None
            if isinstance(key, type) and issubclass(key, BaseException):
                raise key()
            if isinstance(key, BaseException):
                raise key
            return key

        return read_key

    return _make
