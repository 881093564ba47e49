"""
Path resolution functionality for handlr.
Turns the strings passed on the command line into local paths or URLs.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import re
from typing import NamedTuple, Optional
from urllib.parse import unquote, urlsplit

from handlr.core.errors import BadPath
from handlr.core.mime import MimeType

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


class UserPath(NamedTuple):
    """A local file or a URL given by the user."""
    original: str
    path: Optional[str] = None
    url: Optional[str] = None

    @property
    def is_url(self) -> bool:
        return self.url is not None

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme.lower() if self.url else "file"

    def get_mime(self) -> MimeType:
        """
        Get the MIME type of the target.

        Returns:
            `x-scheme-handler/<scheme>` for URLs, the detected content type for files
        """
        if self.is_url:
            return MimeType.from_scheme(self.scheme)
        return MimeType.from_path(self.path)

    def __str__(self):
        return self.url if self.is_url else self.path


class PathResolver:
    """
    Resolves user input into UserPath values.
    Strings like 'https://youtu.be/x' stay URLs, 'file:///tmp/a.txt'
    becomes '/tmp/a.txt' and anything without a scheme is a local path.
    """

    def resolve(self, path: str) -> UserPath:
        """
        Resolve a path or URL string.

        Args:
            path: Path string as typed by the user

        Returns:
            UserPath with either the local path or the URL set

        Raises:
            ValueError: If path is empty
            BadPath: If a file:// URL does not name a local path
        """
        if not path:
            raise ValueError("Path cannot be empty")

        scheme, sep, _ = path.partition(':')
        if not sep or not _SCHEME_RE.match(scheme):
            return UserPath(original=path, path=path)

        if scheme.lower() == 'file':
            return UserPath(original=path, path=self.file_url_to_path(path))

        return UserPath(original=path, url=path)

    @staticmethod
    def file_url_to_path(url: str) -> str:
        parts = urlsplit(url)
        if parts.netloc not in ('', 'localhost') or not parts.path.startswith('/'):
            raise BadPath(parts.path or url)
        return os.path.normpath(unquote(parts.path))
