"""
Regex handlers for handlr.
Handlers defined in handlr.toml that claim paths and URLs by regular
expression instead of by MIME type.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import re
from typing import Iterable, List, Tuple

from handlr.core.base_handler import Handler
from handlr.core.desktop_entry import DesktopEntry
from handlr.core.errors import NotFound


class RegexHandler(Handler):
    """
    Handler that runs a command for any path matching one of its patterns.

    Patterns are searched for anywhere in the path's textual form.
    Equality and hashing use the pattern source strings, since compiled
    patterns do not compare structurally.
    """

    __slots__ = ("_exec", "_terminal", "_patterns")

    def __init__(self, exec_line: str, regexes: Iterable[str], terminal: bool = False):
        """
        Args:
            exec_line: Command line, may contain %f/%u style field codes
            regexes: Regular expression sources
            terminal: Whether the command must run in a terminal

        Raises:
            re.error: If a pattern does not compile
        """
        object.__setattr__(self, "_exec", exec_line)
        object.__setattr__(self, "_terminal", bool(terminal))
        object.__setattr__(self, "_patterns", tuple(re.compile(r) for r in regexes))

    @property
    def exec(self) -> str:
        return self._exec

    @property
    def terminal(self) -> bool:
        return self._terminal

    @property
    def regexes(self) -> Tuple[str, ...]:
        return tuple(p.pattern for p in self._patterns)

    def is_match(self, path: str) -> bool:
        return any(p.search(path) for p in self._patterns)

    def get_entry(self) -> DesktopEntry:
        return DesktopEntry.fake_entry(self._exec, self._terminal)

    def _key(self):
        return (self._exec, self._terminal, self.regexes)

    def __eq__(self, other):
        if isinstance(other, RegexHandler):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self):
        return hash((RegexHandler,) + self._key())

    def __str__(self):
        return self._exec

    def __repr__(self):
        return f"RegexHandler({self._exec!r}, {list(self.regexes)!r}, terminal={self._terminal})"


class RegexApps:
    """
    Ordered collection of regex handlers; the first match wins.
    """

    def __init__(self, handlers: Iterable[RegexHandler] = ()):
        self._handlers: List[RegexHandler] = list(handlers)

    def get_handler(self, path) -> RegexHandler:
        """
        Get the first handler matching a path.

        Args:
            path: UserPath or string; matched on its textual form

        Raises:
            NotFound: If no handler matches
        """
        text = str(path)
        for handler in self._handlers:
            if handler.is_match(text):
                return handler
        raise NotFound(text)

    def __iter__(self):
        return iter(self._handlers)

    def __len__(self):
        return len(self._handlers)
