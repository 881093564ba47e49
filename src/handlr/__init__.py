"""
handlr: Default application resolver

A Python library and command-line tool that decides which application
opens a file, URL or MIME type, and manages the user's mimeapps.list.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT

Public API:
    - AppsConfig: Main entry point. Resolves handlers, opens paths and edits associations.

Example usage:
    from handlr import AppsConfig, MimeType
    apps = AppsConfig.load()
    handler = apps.get_handler(MimeType('video/mp4'))
    apps.open_paths(apps.resolve_paths(['movie.mkv', 'https://example.com']))
    apps.set_handler(MimeType('image/*'), 'imv.desktop')
"""

from .apps_config import AppsConfig
from .core.errors import (
    BadCmd, BadEntry, BadMime, BadPath, Cancelled, ConfigError, HandlrError,
    NoTerminal, NotFound, SelectorError, StorageError,
)
from .core.mime import MimeType
from .handlers import DesktopHandler, RegexHandler

__version__ = '0.1.0'
__all__ = [
    "AppsConfig", "MimeType", "DesktopHandler", "RegexHandler",
    "HandlrError", "NotFound", "BadPath", "BadCmd", "SelectorError", "Cancelled",
    "NoTerminal", "BadMime", "BadEntry", "ConfigError", "StorageError",
]
