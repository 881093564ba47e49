"""
User associations for handlr.
Loads, edits and saves the user's mimeapps.list.

The file is INI-like:

    [Added Associations]
    text/html=firefox.desktop;
    [Default Applications]
    video/*=mpv.desktop;vlc.desktop;

Each value is a semicolon-terminated list of desktop file names, most
preferred first.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import shutil
import tempfile
from typing import Dict, Iterable, List, Optional, Tuple

from handlr.core.errors import BadMime, HandlrError, NotFound, StorageError
from handlr.core.global_config import GlobalConfig
from handlr.core.logging import debug_print
from handlr.core.mime import MimeType
from handlr.core.utils import ensure_dir_exists
from handlr.handlers.desktop_handler import DesktopHandler

from .selector import select

ADDED_ASSOCIATIONS = "Added Associations"
DEFAULT_APPLICATIONS = "Default Applications"

Triple = Tuple[str, str, str]


class DesktopList(list):
    """
    Ordered list of DesktopHandlers, serialized as 'a.desktop;b.desktop;'.
    """

    @classmethod
    def from_str(cls, value: str) -> "DesktopList":
        """
        Parse a semicolon list, keeping the first occurrence of each name.

        Names without an installed desktop file are dropped.
        """
        handlers = cls()
        seen = set()
        for name in value.split(';'):
            name = name.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            try:
                handlers.append(DesktopHandler.resolve(name))
            except HandlrError as e:
                debug_print(f"DesktopList: dropping {name}: {e}", level=1)
        return handlers

    def front(self) -> Optional[DesktopHandler]:
        return self[0] if self else None

    def __str__(self):
        return ';'.join(str(h) for h in self) + ';'


def decode_associations(lines: Iterable[str]) -> List[Triple]:
    """
    Parse association file lines into (section, key, value) triples.

    Blank lines and `#` comments are ignored. Keys and values are
    stripped of surrounding whitespace.

    Raises:
        ValueError: If a line is neither a section header nor key=value,
            or a key=value line appears before any section
    """
    triples = []
    section = None
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('[') and line.endswith(']'):
            section = line[1:-1].strip()
            continue
        key, sep, value = line.partition('=')
        if not sep:
            raise ValueError(f"line {lineno}: expected key=value, got {line!r}")
        if section is None:
            raise ValueError(f"line {lineno}: entry outside of any section")
        triples.append((section, key.strip(), value.strip()))
    return triples


def encode_associations(triples: Iterable[Triple]) -> str:
    """
    Serialize (section, key, value) triples.

    Sections are written in order of first appearance, separated by a
    blank line.
    """
    sections: Dict[str, List[Tuple[str, str]]] = {}
    for section, key, value in triples:
        sections.setdefault(section, []).append((key, value))
    blocks = []
    for section, entries in sections.items():
        lines = [f"[{section}]"] + [f"{key}={value}" for key, value in entries]
        blocks.append('\n'.join(lines) + '\n')
    return '\n'.join(blocks)


class MimeApps:
    """
    The user's default and added associations.

    Default applications override everything else. Added associations
    are consulted after the user defaults, before system-wide handlers.
    """

    def __init__(self, added_associations: Optional[Dict[MimeType, DesktopList]] = None,
                 default_apps: Optional[Dict[MimeType, DesktopList]] = None,
                 path: Optional[str] = None):
        self.added_associations: Dict[MimeType, DesktopList] = dict(added_associations or {})
        self.default_apps: Dict[MimeType, DesktopList] = dict(default_apps or {})
        self.path = path

    # --- Editing ---
    def add_handler(self, mime: MimeType, handler: DesktopHandler) -> None:
        """Append a handler to a MIME's default list."""
        self.default_apps.setdefault(mime, DesktopList()).append(handler)

    def set_handler(self, mime: MimeType, handler: DesktopHandler) -> None:
        """Make handler the only default for a MIME."""
        self.default_apps[mime] = DesktopList([handler])

    def unset_handler(self, mime: MimeType) -> Optional[DesktopList]:
        """Remove a MIME's default list entirely, returning it."""
        return self.default_apps.pop(mime, None)

    def remove_handler(self, mime: MimeType, handler: DesktopHandler) -> Optional[DesktopHandler]:
        """
        Remove the first occurrence of handler from a MIME's default list.

        A missing MIME gets an empty list, which is pruned on the next read.

        Returns:
            The removed handler, or None if it was not in the list
        """
        handlers = self.default_apps.setdefault(mime, DesktopList())
        try:
            handlers.remove(handler)
        except ValueError:
            return None
        return handler

    # --- Lookup ---
    def get_from_wildcard(self, mime: MimeType) -> Optional[DesktopList]:
        """
        Get the handlers of the longest wildcard pattern matching mime.

        Patterns of equal length are ordered lexicographically and the
        first wins.
        """
        matches = [
            pattern for pattern, handlers in self.default_apps.items()
            if pattern.is_wildcard and handlers and mime.matches(pattern)
        ]
        if not matches:
            return None
        best = min(matches, key=lambda p: (-len(p), str(p)))
        debug_print(f"MimeApps: {mime} matched wildcard {best}", level=2)
        return self.default_apps[best]

    def get_handler_from_user(self, mime: MimeType, selector: str = "",
                              use_selector: bool = False) -> DesktopHandler:
        """
        Get the user's default handler for a MIME: exact match first, then wildcard.

        With use_selector and more than one candidate, the selector picks
        among the candidates' display names.

        Raises:
            NotFound: If the user has no default for mime
            Cancelled: If the user dismissed the selector
        """
        handlers = self.default_apps.get(mime) or self.get_from_wildcard(mime)
        if not handlers:
            raise NotFound(str(mime))

        if use_selector and len(handlers) > 1:
            candidates = [(h, h.get_entry().name) for h in handlers]
            name = select(selector, (n for _, n in candidates))
            for handler, candidate_name in candidates:
                if candidate_name == name:
                    return handler
            raise NotFound(str(mime))

        return handlers[0]

    # --- Persistence ---
    def to_triples(self) -> List[Triple]:
        triples = [(ADDED_ASSOCIATIONS, str(m), str(h)) for m, h in self.added_associations.items()]
        triples += [(DEFAULT_APPLICATIONS, str(m), str(h)) for m, h in self.default_apps.items()]
        return triples

    @classmethod
    def from_triples(cls, triples: Iterable[Triple], path: Optional[str] = None) -> "MimeApps":
        """
        Build associations from parsed triples.

        Unknown sections and keys that are not MIME types are skipped.
        """
        sections = {ADDED_ASSOCIATIONS: {}, DEFAULT_APPLICATIONS: {}}
        for section, key, value in triples:
            if section not in sections:
                debug_print(f"MimeApps: ignoring section [{section}]", level=2)
                continue
            try:
                mime = MimeType(key)
            except BadMime:
                debug_print(f"MimeApps: ignoring invalid mime {key!r}", level=1)
                continue
            sections[section][mime] = DesktopList.from_str(value)
        return cls(sections[ADDED_ASSOCIATIONS], sections[DEFAULT_APPLICATIONS], path)

    def prune(self) -> None:
        """Drop MIMEs whose handler list is empty."""
        for mapping in (self.added_associations, self.default_apps):
            for mime in [m for m, h in mapping.items() if not h]:
                del mapping[mime]

    @classmethod
    def read(cls, path: Optional[str] = None) -> "MimeApps":
        """
        Read the association file, creating an empty one if it is missing.

        Args:
            path: File to read (defaults to GlobalConfig.get_mimeapps_path())

        Raises:
            StorageError: If the file cannot be read or is malformed
        """
        path = path or GlobalConfig.get_mimeapps_path()
        try:
            if not os.path.exists(path):
                ensure_dir_exists(os.path.dirname(path))
                open(path, 'a', encoding='utf-8').close()
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise StorageError(path, e.strerror or str(e)) from e

        try:
            triples = decode_associations(lines)
        except ValueError as e:
            raise StorageError(path, str(e)) from e

        mime_apps = cls.from_triples(triples, path)
        mime_apps.prune()
        return mime_apps

    def save(self, path: Optional[str] = None) -> None:
        """
        Write all associations, replacing the file.

        A symlinked file is written through to its target, and an existing
        file keeps its permission bits.

        Raises:
            StorageError: If the file cannot be written
        """
        path = path or self.path or GlobalConfig.get_mimeapps_path()
        text = encode_associations(self.to_triples())
        target = os.path.realpath(path)
        directory = os.path.dirname(target)
        tmp = None
        try:
            ensure_dir_exists(directory)
            fd, tmp = tempfile.mkstemp(prefix='.mimeapps.', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            if os.path.exists(target):
                shutil.copymode(target, tmp)
            else:
                os.chmod(tmp, 0o644)
            os.replace(tmp, target)
        except OSError as e:
            if tmp and os.path.exists(tmp):
                os.unlink(tmp)
            raise StorageError(path, e.strerror or str(e)) from e
        debug_print(f"MimeApps: saved {path}", level=1)
