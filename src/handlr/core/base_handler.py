"""
Base handler for handlr.
Defines the interface shared by desktop-file handlers and regex handlers.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from abc import ABC, abstractmethod
from typing import List

from handlr.core.desktop_entry import DesktopEntry, ExecMode


class Handler(ABC):
    """
    Base class for anything that can open files or URLs.

    A handler resolves to a DesktopEntry, either read from disk or built in
    memory, and hands it to the launcher of the AppsConfig it is used with.
    Handlers are immutable values: equal handlers are interchangeable and
    can be used as dictionary keys.
    """

    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --- Logging ---
    def _log(self, msg, level=1, exc=None):
        from handlr.core.global_config import GlobalConfig
        GlobalConfig.debug_print(f"{type(self).__name__}: {msg}", level=level, exc=exc)

    @abstractmethod
    def get_entry(self) -> DesktopEntry:
        """
        Get the desktop entry describing how to run this handler.

        Raises:
            NotFound: If the underlying desktop file is missing
        """
        pass

    def open(self, apps_config, args: List[str], selector: str = "", use_selector: bool = False) -> None:
        """
        Open files or URLs with this handler.

        Args:
            apps_config: AppsConfig whose launcher runs the command
            args: Files or URLs to open
            selector: Selector command for resolving a terminal emulator
            use_selector: Whether the selector may be shown
        """
        self._run(apps_config, ExecMode.OPEN, args, selector, use_selector)

    def launch(self, apps_config, args: List[str], selector: str = "", use_selector: bool = False) -> None:
        """Run the handler with plain arguments rather than targets to open."""
        self._run(apps_config, ExecMode.LAUNCH, args, selector, use_selector)

    def _run(self, apps_config, mode, args, selector, use_selector):
        entry = self.get_entry()
        self._log(f"{mode.value} {entry.exec!r} with {len(args)} argument(s)", level=2)
        apps_config.launcher.exec(apps_config, entry, mode, list(args), selector, use_selector)
