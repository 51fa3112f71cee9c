"""Prompt appearance settings.

Values come from three layers, highest priority first: ``EPROMPT_<NAME>``
environment variables, ``<config_dir>/config.json``, and the defaults in
``SETTINGS``. Only the file layer is ever written back.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, NamedTuple

from rich.errors import StyleSyntaxError
from rich.style import Style

logger = logging.getLogger("eprompt.config")

CONFIG_DIR_ENV = "EPROMPT_CONFIG_DIR"
ENV_PREFIX = "EPROMPT_"


class Setting(NamedTuple):
    default: Any
    description: str


SETTINGS: dict[str, Setting] = {
    "highlight_style": Setting("bold underline magenta", "Rich style of the active row"),
    "marker": Setting(">", "Marker shown before the active row"),
    "indent": Setting(4, "Spaces before each option row"),
    "checked_glyph": Setting("x", "Glyph inside a chosen checkbox"),
    "prompt_style": Setting("bold", "Rich style of the prompt message"),
    "filter_prompt": Setting(">", "Prompt shown before fuzzy filter text"),
}

_loaded: "Config | None" = None


def clear_config_cache() -> None:
    """Forget the loaded config so the next ``Config.load()`` reads again."""
    global _loaded
    _loaded = None


def get_default_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    return Path(override) if override else Path.home() / ".config" / "eprompt"


def _coerce(raw: str, like: Any) -> Any:
    """Convert text to the type of ``like``; raises ValueError if it can't."""
    if isinstance(like, bool):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(like, int):
        return int(raw)
    return raw


class Config:
    """Layered settings, readable as attributes (``config.marker``)."""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or get_default_config_dir()
        self.config_file = self.config_dir / "config.json"
        self._file_values: dict[str, Any] = {}
        self._env_values: dict[str, Any] = {}

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Read file and environment. The default location is loaded once."""
        global _loaded
        if config_dir is None and _loaded is not None:
            return _loaded

        config = cls(config_dir)
        config._file_values = config._read_file()
        config._env_values = config._read_env()
        if config_dir is None:
            _loaded = config
        return config

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in SETTINGS:
            raise AttributeError(f"Config has no setting '{name}'")
        for layer in (self._env_values, self._file_values):
            if name in layer:
                return layer[name]
        return SETTINGS[name].default

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """(name, description, current value) for every setting."""
        return [(name, s.description, getattr(self, name)) for name, s in SETTINGS.items()]

    def style(self, name: str) -> Style:
        """Parse a style setting, falling back to its default when invalid."""
        value = getattr(self, name)
        try:
            return Style.parse(value)
        except StyleSyntaxError:
            logger.warning("Invalid style %r for %s, using default", value, name)
            return Style.parse(SETTINGS[name].default)

    def set(self, name: str, value: Any) -> None:
        """Store a setting in the config file.

        Raises:
            KeyError: Unknown setting.
            ValueError: Value does not convert to the setting's type.
        """
        if name not in SETTINGS:
            raise KeyError(name)
        self._file_values[name] = _coerce(str(value), SETTINGS[name].default)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(self._file_values, indent=2))
        logger.debug("Saved %s to %s", name, self.config_file)

    def _read_file(self) -> dict[str, Any]:
        try:
            content = self.config_file.read_text()
        except FileNotFoundError:
            return {}
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            # Rewritten on the next set()
            logger.warning("Ignoring corrupted config file %s", self.config_file)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring corrupted config file %s", self.config_file)
            return {}
        values = {}
        for name, value in data.items():
            if name not in SETTINGS:
                continue
            try:
                values[name] = _coerce(str(value), SETTINGS[name].default)
            except ValueError:
                logger.warning("Ignoring %s=%r in %s", name, value, self.config_file)
        return values

    def _read_env(self) -> dict[str, Any]:
        values = {}
        for name, setting in SETTINGS.items():
            raw = os.environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            try:
                values[name] = _coerce(raw, setting.default)
            except ValueError:
                logger.warning("Ignoring %s%s=%r", ENV_PREFIX, name.upper(), raw)
        return values
