"""
Exceptions raised by handlr.

Every failure the resolver can report derives from HandlrError, so callers
at the command-line boundary can catch one type. Cancelled is kept distinct
from NotFound: the resolution chain falls through on NotFound but stops on
Cancelled.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""


class HandlrError(Exception):
    """Base class for all handlr errors."""
    pass


class NotFound(HandlrError):
    """No handler, descriptor or association exists for an identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"Could not find handler for {identifier}")
        self.identifier = str(identifier)


class BadPath(HandlrError):
    """A file:// URL could not be converted to a local path."""

    def __init__(self, path: str):
        super().__init__(f"Could not parse path {path}")
        self.path = path


class BadCmd(HandlrError):
    """A command string could not be split into arguments."""

    def __init__(self, cmd: str):
        super().__init__(f"Badly formatted command: {cmd}")
        self.cmd = cmd


class SelectorError(HandlrError):
    """The selector process could not be started."""

    def __init__(self, cmd: str):
        super().__init__(f"Could not communicate with selector {cmd}")
        self.cmd = cmd


class Cancelled(HandlrError):
    """The user dismissed the selector without choosing a handler."""

    def __init__(self):
        super().__init__("Selection cancelled")


class NoTerminal(HandlrError):
    def __init__(self):
        super().__init__("Could not find a terminal emulator")


class BadMime(HandlrError):
    def __init__(self, mime: str):
        super().__init__(f"Invalid mime type: {mime}")
        self.mime = mime


class ConfigError(HandlrError):
    """The local handlr.toml could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid config file {path}: {reason}")
        self.path = path
        self.reason = reason


class StorageError(HandlrError):
    """Reading or writing the association file failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not access {path}: {reason}")
        self.path = path
        self.reason = reason


class BadEntry(HandlrError):
    """A desktop entry file exists but could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid desktop entry {path}: {reason}")
        self.path = path
        self.reason = reason
