"""
HandlrConfig: the user's local handlr.toml.
Holds the selector settings, extra terminal arguments and regex handlers.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import re
import sys
from typing import Any, Dict, Iterable, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from handlr.core.errors import ConfigError
from handlr.core.global_config import GlobalConfig
from handlr.core.utils import ensure_dir_exists
from handlr.handlers.regex_handler import RegexApps, RegexHandler

DEFAULT_SELECTOR = "rofi -dmenu -i -p 'Open With: '"
DEFAULT_TERM_EXEC_ARGS = "-e"

DEFAULT_CONFIG = f"""\
enable_selector = false
selector = "{DEFAULT_SELECTOR}"
term_exec_args = "{DEFAULT_TERM_EXEC_ARGS}"

# [[handlers]]
# exec = "freetube %u"
# regexes = ['(https://)?(www\\.)?youtu(be\\.com|\\.be)/*']
"""


class HandlrConfig:
    """
    Settings read from handlr.toml.

    Usage example:
        config = HandlrConfig.load()
        handler = config.get_regex_handler(user_path)
        use = config.use_selector(enable=False, disable=False)
    """

    def __init__(self, enable_selector: bool = False, selector: str = DEFAULT_SELECTOR,
                 term_exec_args: Optional[str] = DEFAULT_TERM_EXEC_ARGS,
                 handlers: Iterable[RegexHandler] = ()):
        self.enable_selector = enable_selector
        self.selector = selector
        self.term_exec_args = term_exec_args
        self.handlers = RegexApps(handlers)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "HandlrConfig":
        """
        Load handlr.toml, writing a default one if it does not exist yet.

        Args:
            path: Config file path (defaults to GlobalConfig.get_config_path())

        Raises:
            ConfigError: If the file is not valid TOML or has invalid values
        """
        path = path or GlobalConfig.get_config_path()
        if not os.path.exists(path):
            cls._write_default(path)
            return cls()
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(path, str(e)) from e
        except OSError as e:
            raise ConfigError(path, e.strerror or str(e)) from e
        return cls.from_dict(data, path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = "<config>") -> "HandlrConfig":
        enable_selector = data.get("enable_selector", False)
        if not isinstance(enable_selector, bool):
            raise ConfigError(path, "enable_selector must be a boolean")
        selector = data.get("selector", DEFAULT_SELECTOR)
        if not isinstance(selector, str):
            raise ConfigError(path, "selector must be a string")
        term_exec_args = data.get("term_exec_args", DEFAULT_TERM_EXEC_ARGS)
        if term_exec_args is not None and not isinstance(term_exec_args, str):
            raise ConfigError(path, "term_exec_args must be a string")

        handlers = []
        for i, raw in enumerate(data.get("handlers", [])):
            if not isinstance(raw, dict):
                raise ConfigError(path, f"handlers[{i}] must be a table")
            exec_line = raw.get("exec")
            regexes = raw.get("regexes")
            terminal = raw.get("terminal", False)
            if not isinstance(exec_line, str):
                raise ConfigError(path, f"handlers[{i}].exec must be a string")
            if not isinstance(regexes, list) or not all(isinstance(r, str) for r in regexes):
                raise ConfigError(path, f"handlers[{i}].regexes must be a list of strings")
            if not isinstance(terminal, bool):
                raise ConfigError(path, f"handlers[{i}].terminal must be a boolean")
            try:
                handlers.append(RegexHandler(exec_line, regexes, terminal))
            except re.error as e:
                raise ConfigError(path, f"handlers[{i}]: {e}") from e

        return cls(enable_selector, selector, term_exec_args or None, handlers)

    @staticmethod
    def _write_default(path: str) -> None:
        try:
            ensure_dir_exists(os.path.dirname(path))
            with open(path, 'w', encoding='utf-8') as f:
                f.write(DEFAULT_CONFIG)
        except OSError as e:
            GlobalConfig.debug_print(f"Could not write default config {path}", level=1, exc=e)

    def get_regex_handler(self, path) -> RegexHandler:
        """
        Raises:
            NotFound: If no regex handler matches the path
        """
        return self.handlers.get_handler(path)

    def use_selector(self, enable: bool = False, disable: bool = False) -> bool:
        """Combine the configured default with command-line overrides."""
        return (self.enable_selector or enable) and not disable

    def get_selector(self, override: Optional[str] = None) -> str:
        return override or self.selector
