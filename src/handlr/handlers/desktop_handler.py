"""
Desktop-file handler for handlr.
A handler identified by the file name of an installed `.desktop` entry.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
from typing import Optional

from handlr.core.base_handler import Handler
from handlr.core.desktop_entry import DesktopEntry
from handlr.core.errors import NotFound
from handlr.core.utils import applications_dirs


class DesktopHandler(Handler):
    """
    Handler backed by a desktop entry such as 'mpv.desktop'.

    Use DesktopHandler.resolve() for names coming from users or files; it
    checks that the entry exists. DesktopHandler.assume_valid() skips that
    check and is reserved for names that were just enumerated from disk.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str):
        object.__setattr__(self, "_name", str(name))

    @property
    def name(self) -> str:
        return self._name

    @classmethod
    def assume_valid(cls, name: str) -> "DesktopHandler":
        """Create a handler without checking that its desktop file exists."""
        return cls(name)

    @classmethod
    def resolve(cls, name: str) -> "DesktopHandler":
        """
        Create a handler for an installed desktop entry.

        Raises:
            NotFound: If no desktop file of that name is installed
            BadEntry: If the desktop file cannot be parsed
        """
        path = cls.get_path(name)
        if path is None:
            raise NotFound(name)
        DesktopEntry.from_path(path)
        return cls(name)

    @staticmethod
    def get_path(name: str) -> Optional[str]:
        """
        Find the desktop file for a name in the XDG data directories.

        Returns:
            The first matching path, or None
        """
        if not name or os.sep in name:
            return None
        for directory in applications_dirs():
            path = os.path.join(directory, name)
            if os.path.isfile(path):
                return path
        return None

    def get_entry(self) -> DesktopEntry:
        path = self.get_path(self._name)
        if path is None:
            raise NotFound(self._name)
        return DesktopEntry.from_path(path)

    def __eq__(self, other):
        if isinstance(other, DesktopHandler):
            return self._name == other._name
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, DesktopHandler):
            return self._name < other._name
        return NotImplemented

    def __hash__(self):
        return hash((DesktopHandler, self._name))

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"DesktopHandler('{self._name}')"
