"""
Desktop entry records for handlr.
Reads the fields handlr needs from `.desktop` files and expands their
Exec lines into argument vectors.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import re
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from handlr.core.errors import BadEntry, BadMime, NotFound
from handlr.core.logging import debug_print
from handlr.core.mime import MimeType
from handlr.core.utils import split_command

# Codes replaced by the target arguments
_TARGET_CODES = ('%f', '%F', '%u', '%U')
# Any field code; scanned left to right so `%%` escapes are consumed first
_FIELD_CODE_RE = re.compile(r"%(.)", re.DOTALL)


class ExecMode(Enum):
    """How a desktop entry is being executed."""
    OPEN = "open"
    LAUNCH = "launch"


class DesktopEntry(NamedTuple):
    """The parts of a desktop entry used for resolving and launching."""
    file_name: str
    name: str
    exec: str
    terminal: bool
    mime_types: Tuple[MimeType, ...] = ()
    categories: Tuple[str, ...] = ()

    @classmethod
    def from_path(cls, path: str) -> "DesktopEntry":
        """
        Parse a desktop entry file.

        Args:
            path: Path to a `.desktop` file

        Returns:
            The parsed DesktopEntry

        Raises:
            NotFound: If the file does not exist
            BadEntry: If the file is not a valid desktop entry
        """
        if not os.path.isfile(path):
            raise NotFound(path)

        import xdg.DesktopEntry
        from xdg.Exceptions import ParsingError

        de = xdg.DesktopEntry.DesktopEntry()
        try:
            de.parse(path)
        except ParsingError as e:
            raise BadEntry(path, str(e)) from e

        exec_line = de.getExec()
        if not exec_line:
            raise BadEntry(path, "missing Exec key")

        mimes = []
        for raw in de.getMimeTypes():
            try:
                mimes.append(MimeType(str(raw)))
            except BadMime:
                debug_print(f"{path}: skipping invalid MimeType entry {raw!r}", level=3)

        return cls(
            file_name=os.path.basename(path),
            name=de.getName(),
            exec=exec_line,
            terminal=bool(de.getTerminal()),
            mime_types=tuple(mimes),
            categories=tuple(de.getCategories()),
        )

    @classmethod
    def fake_entry(cls, exec_line: str, terminal: bool = False) -> "DesktopEntry":
        """Build an in-memory entry for a command that has no desktop file."""
        return cls(file_name="", name="", exec=exec_line, terminal=terminal)

    def is_terminal_emulator(self) -> bool:
        return "TerminalEmulator" in self.categories

    def supports_multiple(self) -> bool:
        """True if the Exec line takes a list of targets (%F or %U)."""
        return '%F' in self.exec or '%U' in self.exec

    def get_cmd(self, args: List[str], terminal_cmd: Optional[str] = None) -> List[str]:
        """
        Expand the Exec line into an argument vector.

        Args:
            args: Files or URLs to substitute for %f/%F/%u/%U
            terminal_cmd: Terminal command line to prefix, for terminal apps

        Returns:
            The command and its arguments

        Raises:
            BadCmd: If the Exec line cannot be split
        """
        cmd = []
        substituted = False

        def expand(match):
            nonlocal substituted
            code = match.group(1)
            if code == '%':
                return '%'
            if code in 'fFuU':
                substituted = True
                return ' '.join(args)
            # %i %c %k and the deprecated codes are dropped
            return ''

        for word in split_command(self.exec):
            if word in _TARGET_CODES:
                cmd.extend(args)
                substituted = True
                continue
            word = _FIELD_CODE_RE.sub(expand, word)
            if word:
                cmd.append(word)

        if not substituted:
            cmd.extend(args)

        if terminal_cmd:
            cmd = DesktopEntry.fake_entry(terminal_cmd).get_cmd([]) + cmd
        return cmd
