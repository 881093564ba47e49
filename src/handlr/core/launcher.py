"""
Process launching for handlr.
Runs a resolved desktop entry with the files or URLs it should open.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import subprocess
import sys
from typing import List

from handlr.core.desktop_entry import DesktopEntry, ExecMode
from handlr.core.errors import NotFound
from handlr.core.logging import debug_print


def stdout_is_terminal() -> bool:
    return sys.stdout.isatty()


class Launcher:
    """
    Spawns the processes for desktop entries.

    Terminal applications are run in the current terminal when standard
    output is one, otherwise they are wrapped in the user's terminal
    emulator as resolved by AppsConfig.terminal().
    """

    def exec(self, apps_config, entry: DesktopEntry, mode: ExecMode, args: List[str],
             selector: str = "", use_selector: bool = False) -> None:
        """
        Execute an entry.

        In OPEN mode an Exec line that accepts a single target (%f or %u)
        is run once per argument; otherwise one process gets all of them.

        Args:
            apps_config: AppsConfig used to resolve the terminal emulator
            entry: Entry to run
            mode: ExecMode.OPEN or ExecMode.LAUNCH
            args: Files or URLs
            selector: Selector command, used if resolving the terminal is ambiguous
            use_selector: Whether the selector may be shown
        """
        in_terminal = stdout_is_terminal()
        terminal_cmd = None
        if entry.terminal and not in_terminal:
            terminal_cmd = apps_config.terminal(selector, use_selector)

        foreground = entry.terminal and in_terminal
        if not args or mode is ExecMode.LAUNCH or entry.supports_multiple():
            self._spawn(entry.get_cmd(list(args), terminal_cmd), foreground)
        else:
            for arg in args:
                self._spawn(entry.get_cmd([arg], terminal_cmd), foreground)

    def _spawn(self, cmd: List[str], foreground: bool) -> None:
        debug_print(f"Launcher: running {cmd}", level=1)
        try:
            if foreground:
                subprocess.run(cmd)
            else:
                subprocess.Popen(
                    cmd,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                )
        except FileNotFoundError as e:
            raise NotFound(cmd[0]) from e
