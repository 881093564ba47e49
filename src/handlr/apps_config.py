"""
handlr: pick the application that opens a file, URL or MIME type.

This module combines the user associations, the system associations and
the local configuration into the AppsConfig resolver.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import json
import subprocess
import sys
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from .apps.mime_apps import MimeApps
from .apps.system_apps import SystemApps
from .core.base_handler import Handler
from .core.config_manager import HandlrConfig
from .core.errors import Cancelled, HandlrError, NoTerminal, NotFound, StorageError
from .core.launcher import Launcher
from .core.logging import debug_print
from .core.mime import MimeType
from .core.path_resolver import PathResolver, UserPath
from .core.utils import notify
from .handlers.desktop_handler import DesktopHandler

TERMINAL_MIME = MimeType("x-scheme-handler/terminal")


class AppsConfig:
    """
    Resolves handlers for MIME types and paths.

    Precedence for a MIME type:
        1. user default (exact, then longest wildcard), optionally via the selector
        2. user default for `type/*`
        3. first user added association
        4. first system handler declaring the MIME
    Paths are first matched against the regex handlers of handlr.toml.

    Attributes:
        mime_apps: User associations (mimeapps.list)
        system_apps: Installed desktop entries by MIME
        config: Local configuration (handlr.toml)
        launcher: Runs resolved entries
    """

    def __init__(self, mime_apps: Optional[MimeApps] = None, system_apps: Optional[SystemApps] = None,
                 config: Optional[HandlrConfig] = None, launcher: Optional[Launcher] = None):
        self.mime_apps = mime_apps if mime_apps is not None else MimeApps()
        self.system_apps = system_apps if system_apps is not None else SystemApps()
        self.config = config if config is not None else HandlrConfig()
        self.launcher = launcher if launcher is not None else Launcher()
        self._path_resolver = PathResolver()

    @classmethod
    def load(cls, config: Optional[HandlrConfig] = None) -> "AppsConfig":
        """Read mimeapps.list, index installed applications and load handlr.toml."""
        return cls(
            mime_apps=MimeApps.read(),
            system_apps=SystemApps.populate(),
            config=config if config is not None else HandlrConfig.load(),
        )

    # --- Resolution ---
    def get_handler(self, mime: MimeType, selector: str = "", use_selector: bool = False) -> DesktopHandler:
        """
        Get the handler for a MIME type.

        Raises:
            NotFound: If no step of the precedence chain has a handler
            Cancelled: If the user dismissed the selector; later steps are skipped

        Any other error from the user default lookups (a selector that
        cannot run, an unreadable candidate entry) moves on to the next step.
        """
        for candidate in (mime, mime.type_wildcard()):
            try:
                return self.mime_apps.get_handler_from_user(candidate, selector, use_selector)
            except Cancelled:
                raise
            except HandlrError as e:
                debug_print(f"AppsConfig: no user default for {candidate}: {e}", level=2, exc=e)

        return self._get_handler_from_added_associations(mime)

    def _get_handler_from_added_associations(self, mime: MimeType) -> DesktopHandler:
        added = self.mime_apps.added_associations.get(mime)
        if added:
            return added[0]
        handler = self.system_apps.get_handler(mime)
        if handler is None:
            raise NotFound(str(mime))
        return handler

    def get_handler_from_path(self, path: UserPath, selector: str = "", use_selector: bool = False) -> Handler:
        """
        Get the handler for a path or URL, trying regex handlers before its MIME type.
        """
        try:
            return self.config.get_regex_handler(path)
        except NotFound:
            pass
        return self.get_handler(path.get_mime(), selector, use_selector)

    def resolve_paths(self, paths: Iterable[str]) -> List[UserPath]:
        return [self._path_resolver.resolve(p) for p in paths]

    # --- Opening and launching ---
    def open_paths(self, paths: Iterable[UserPath], selector: str = "", use_selector: bool = False) -> None:
        """
        Open paths, starting each distinct handler once with all of its paths.

        Every path is resolved before anything is launched, so a resolution
        error opens nothing.
        """
        batches: Dict[Handler, List[str]] = OrderedDict()
        for path in paths:
            handler = self.get_handler_from_path(path, selector, use_selector)
            batches.setdefault(handler, []).append(str(path))

        for handler, args in batches.items():
            debug_print(f"AppsConfig: opening {len(args)} path(s) with {handler}", level=1)
            handler.open(self, args, selector, use_selector)

    def launch_handler(self, mime: MimeType, args: List[str], selector: str = "",
                       use_selector: bool = False) -> None:
        """Launch the handler of a MIME type with plain arguments."""
        self.get_handler(mime, selector, use_selector).launch(self, args, selector, use_selector)

    def show_handler(self, mime: MimeType, output_json: bool = False, selector: str = "",
                     use_selector: bool = False) -> str:
        """
        Describe the handler of a MIME type.

        Returns:
            The desktop file name, or a JSON object with handler, name and cmd
        """
        handler = self.get_handler(mime, selector, use_selector)
        if not output_json:
            return str(handler)
        entry = handler.get_entry()
        return json.dumps({
            "handler": str(handler),
            "name": entry.name,
            "cmd": ' '.join(entry.get_cmd([])),
        })

    def terminal(self, selector: str = "", use_selector: bool = False) -> str:
        """
        Get the command line of the user's terminal emulator.

        Without an `x-scheme-handler/terminal` association, the first
        installed terminal emulator is picked, saved as the association
        and announced with a notification. Configured term_exec_args are
        appended.

        Raises:
            NoTerminal: If no terminal emulator is installed
            Cancelled: If the user dismissed the selector
        """
        entry = None
        try:
            entry = self.get_handler(TERMINAL_MIME, selector, use_selector).get_entry()
        except Cancelled:
            raise
        except HandlrError as e:
            debug_print(f"AppsConfig: no usable terminal association: {e}", level=1)

        if entry is None:
            found = next(
                ((name, e) for name, e in SystemApps.get_entries() if e.is_terminal_emulator()),
                None,
            )
            if found is None:
                raise NoTerminal()
            file_name, entry = found
            try:
                notify(
                    "handlr",
                    f"Guessed terminal emulator: {file_name}.\n\n"
                    "If this is wrong, use `handlr set x-scheme-handler/terminal` to update it.",
                )
            except (OSError, subprocess.CalledProcessError) as e:
                debug_print("AppsConfig: terminal notification failed", level=1, exc=e)
            # Came from the enumeration above, so it exists on disk
            self.mime_apps.set_handler(TERMINAL_MIME, DesktopHandler.assume_valid(file_name))
            try:
                self.mime_apps.save()
            except StorageError as e:
                debug_print(f"AppsConfig: could not save guessed terminal: {e}", level=1, exc=e)

        exec_line = entry.exec
        if self.config.term_exec_args:
            exec_line = f"{exec_line} {self.config.term_exec_args}"
        return exec_line

    # --- Editing user associations ---
    def set_handler(self, mime: MimeType, handler: str) -> None:
        self.mime_apps.set_handler(mime, DesktopHandler.resolve(handler))
        self.mime_apps.save()

    def add_handler(self, mime: MimeType, handler: str) -> None:
        self.mime_apps.add_handler(mime, DesktopHandler.resolve(handler))
        self.mime_apps.save()

    def remove_handler(self, mime: MimeType, handler: str) -> None:
        self.mime_apps.remove_handler(mime, DesktopHandler.resolve(handler))
        self.mime_apps.save()

    def unset_handler(self, mime: MimeType) -> None:
        if self.mime_apps.unset_handler(mime) is not None:
            self.mime_apps.save()

    # --- Listing ---
    def list_associations(self, detailed: bool = False, output_json: bool = False) -> str:
        """
        Render the associations as text tables or JSON.

        Args:
            detailed: Include added associations and system handlers
            output_json: Emit JSON instead of text
        """
        tables = OrderedDict()
        tables["default_apps"] = _rows(self.mime_apps.default_apps.items())
        if detailed:
            tables["added_associations"] = _rows(self.mime_apps.added_associations.items())
            tables["system_apps"] = _rows(self.system_apps.items())

        if output_json:
            if not detailed:
                return json.dumps(_as_json(tables["default_apps"]))
            return json.dumps({name: _as_json(rows) for name, rows in tables.items()})

        if not detailed:
            return _render_table(tables["default_apps"])
        titles = {
            "default_apps": "Default Apps",
            "added_associations": "Added associations",
            "system_apps": "System Apps",
        }
        out = []
        for name, rows in tables.items():
            if name == "added_associations" and not rows:
                continue
            out.append(titles[name])
            out.append(_render_table(rows))
        return '\n'.join(out)

    def mime_table(self, paths: Iterable[UserPath], output_json: bool = False) -> str:
        """Render the MIME type of each path."""
        rows = [(str(p), str(p.get_mime())) for p in paths]
        if output_json:
            return json.dumps([{"path": p, "mime": m} for p, m in rows])
        return _render_table(rows, headers=("path", "mime"))


def _rows(items) -> List[tuple]:
    return sorted((str(mime), [str(h) for h in handlers]) for mime, handlers in items)


def _as_json(rows) -> List[dict]:
    return [{"mime": mime, "handlers": handlers} for mime, handlers in rows]


def _render_table(rows, headers=("mime", "handlers")) -> str:
    separator = ",\n" if sys.stdout.isatty() else ", "
    cells = []
    for first, second in rows:
        if isinstance(second, list):
            second = separator.join(second)
        cells.append((first, second))
    width = max([len(headers[0])] + [len(c[0]) for c in cells])
    lines = [f"{headers[0].ljust(width)}  {headers[1]}"]
    for first, second in cells:
        second_lines = second.split('\n')
        lines.append(f"{first.ljust(width)}  {second_lines[0]}")
        lines.extend(f"{''.ljust(width)}  {rest}" for rest in second_lines[1:])
    return '\n'.join(lines)
