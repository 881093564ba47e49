"""
System associations for handlr.
Indexes every installed desktop entry by the MIME types it declares.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
from typing import Dict, Iterator, List, Optional, Tuple

from handlr.core.desktop_entry import DesktopEntry
from handlr.core.errors import HandlrError
from handlr.core.logging import debug_print
from handlr.core.mime import MimeType
from handlr.core.utils import applications_dirs
from handlr.handlers.desktop_handler import DesktopHandler


class SystemApps:
    """
    Read-only map of MIME type to the desktop handlers declaring it.

    Handlers keep enumeration order: entries from more important data
    directories come first, and within a directory the listing order of
    the file system is used.
    """

    def __init__(self, associations: Optional[Dict[MimeType, List[DesktopHandler]]] = None):
        self._associations: Dict[MimeType, List[DesktopHandler]] = dict(associations or {})

    @staticmethod
    def get_entries() -> Iterator[Tuple[str, DesktopEntry]]:
        """
        Lazily yield (file name, entry) for every installed desktop file.

        A file name is only yielded for the first data directory holding
        it. Files that fail to parse are skipped.
        """
        seen = set()
        for directory in applications_dirs():
            try:
                names = os.listdir(directory)
            except OSError:
                continue
            for name in names:
                if not name.endswith('.desktop') or name in seen:
                    continue
                path = os.path.join(directory, name)
                if not os.path.isfile(path):
                    continue
                seen.add(name)
                try:
                    entry = DesktopEntry.from_path(path)
                except HandlrError as e:
                    debug_print(f"SystemApps: skipping {path}: {e}", level=3)
                    continue
                yield name, entry

    @classmethod
    def populate(cls) -> "SystemApps":
        """Build the association map from all installed desktop files."""
        associations: Dict[MimeType, List[DesktopHandler]] = {}
        for file_name, entry in cls.get_entries():
            # Enumerated from disk just now, so the name is known to exist
            handler = DesktopHandler.assume_valid(file_name)
            for mime in entry.mime_types:
                associations.setdefault(mime, []).append(handler)
        debug_print(f"SystemApps: indexed {len(associations)} mime types", level=1)
        return cls(associations)

    def get_handlers(self, mime: MimeType) -> Optional[List[DesktopHandler]]:
        handlers = self._associations.get(mime)
        return list(handlers) if handlers else None

    def get_handler(self, mime: MimeType) -> Optional[DesktopHandler]:
        """The first declared handler for an exact MIME match, or None."""
        handlers = self._associations.get(mime)
        return handlers[0] if handlers else None

    def items(self):
        return self._associations.items()

    def __len__(self):
        return len(self._associations)

    @classmethod
    def list_handlers(cls, out=None) -> None:
        """Write `file_name<TAB>name` for every installed desktop file."""
        out = out or sys.stdout
        for file_name, entry in cls.get_entries():
            out.write(f"{file_name}\t{entry.name}\n")
